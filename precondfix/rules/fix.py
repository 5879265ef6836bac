# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from precondfix.core.diagnostics import Fix
from precondfix.core.span import Span

from .gates import MatchDecision

NULL_CHECK_TEMPLATE = "if ({condition} == null) throw new {exception}({message});"
BOOLEAN_CHECK_TEMPLATE = "if (!({condition})) throw new {exception}({message});"


def synthesize(decision: MatchDecision, span: Span) -> Fix:
	"""Render the conditional throw that replaces the statement at `span`."""
	if not decision.matched:
		raise ValueError("cannot synthesize a fix for an unmatched call")
	template = NULL_CHECK_TEMPLATE if decision.null_check else BOOLEAN_CHECK_TEMPLATE
	replacement = template.format(
		condition=decision.condition_text,
		exception=decision.exception_type,
		message=decision.message_text,
	)
	return Fix(original_span=span, replacement_text=replacement)


__all__ = ["synthesize", "NULL_CHECK_TEMPLATE", "BOOLEAN_CHECK_TEMPLATE"]
