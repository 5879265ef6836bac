# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from .catalog import CATALOG, CallShape, lookup
from .fix import synthesize
from .gates import GATES, CandidateCall, GateContext, MatchDecision, evaluate
from .prefer_exceptions_preconditions import BugPattern, PreferExceptionsPreconditions
from .report import RATIONALE, report

__all__ = [
	"CATALOG",
	"CallShape",
	"lookup",
	"GATES",
	"CandidateCall",
	"GateContext",
	"MatchDecision",
	"evaluate",
	"synthesize",
	"RATIONALE",
	"report",
	"BugPattern",
	"PreferExceptionsPreconditions",
]
