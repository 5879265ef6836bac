# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from precondfix.core.diagnostics import Diagnostic, Fix

logger = logging.getLogger(__name__)


@dataclass
class ListSink:
	"""Diagnostic sink that keeps findings in report order."""

	diagnostics: List[Diagnostic] = field(default_factory=list)

	def report(self, diagnostic: Diagnostic) -> None:
		self.diagnostics.append(diagnostic)

	@property
	def fixes(self) -> List[Fix]:
		return [d.fix for d in self.diagnostics if d.fix is not None]


def apply_fixes(text: str, fixes: Iterable[Fix]) -> str:
	"""
	Apply replacements to `text`, rightmost first.

	A fix overlapping one already applied is skipped, so the result never
	depends on stale offsets. Fixes without offsets are ignored.
	"""
	applied: List[Fix] = []
	ordered = sorted(
		(f for f in fixes if f.original_span.has_offsets),
		key=lambda f: (f.original_span.start, f.original_span.end),
		reverse=True,
	)
	for fix in ordered:
		if any(fix.original_span.overlaps(prev.original_span) for prev in applied):
			logger.debug("skipping overlapping fix at offset %s", fix.original_span.start)
			continue
		start, end = fix.original_span.start, fix.original_span.end
		text = text[:start] + fix.replacement_text + text[end:]  # type: ignore[index]
		applied.append(fix)
	return text


__all__ = ["ListSink", "apply_fixes"]
