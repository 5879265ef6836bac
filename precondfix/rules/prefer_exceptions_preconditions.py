# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
PreferExceptionsPreconditions.

Flags precondition calls such as

    Preconditions.checkArgument(x > 0, "bad x: " + x);

whose message is concatenated on every call even though it is only needed on
failure, and proposes

    if (!(x > 0)) throw new IllegalArgumentException("bad x: " + x);
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from precondfix.core.diagnostics import Diagnostic
from precondfix.host.protocols import DiagnosticSink, HostServices

from .fix import synthesize
from .gates import evaluate
from .report import report


@dataclass(frozen=True)
class BugPattern:
	name: str
	summary: str
	severity: str
	link: Optional[str] = None


class PreferExceptionsPreconditions:
	pattern = BugPattern(
		name="PreferExceptionsPreconditions",
		summary="Precondition messages built eagerly can be moved into a conditional throw",
		severity="suggestion",
	)

	def __init__(self, severity: Optional[str] = None) -> None:
		self.severity = severity or self.pattern.severity

	def match_method_invocation(self, site: Any, host: HostServices) -> Optional[Diagnostic]:
		decision = evaluate(site, host)
		if not decision.matched:
			return None
		span = host.inspector.replacement_span(site)
		assert span is not None
		return report(synthesize(decision, span), code=self.pattern.name, severity=self.severity, link=self.pattern.link)

	def check(self, site: Any, host: HostServices, sink: DiagnosticSink) -> bool:
		"""Report a finding for `site` into `sink`; returns whether one was reported."""
		diagnostic = self.match_method_invocation(site, host)
		if diagnostic is None:
			return False
		sink.report(diagnostic)
		return True


__all__ = ["BugPattern", "PreferExceptionsPreconditions"]
