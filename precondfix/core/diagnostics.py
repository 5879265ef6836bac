# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the parser, the rule and the driver.

A diagnostic is a message plus a span and optional metadata. Rule findings
additionally carry a `Fix`: the exact source range to replace and the text to
put there.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .span import Span


@dataclass(frozen=True)
class Fix:
	"""A single textual replacement for a matched call site."""

	original_span: Span
	replacement_text: str

	def to_dict(self) -> dict[str, Any]:
		return {
			"start": self.original_span.start,
			"end": self.original_span.end,
			"replacement": self.replacement_text,
		}


@dataclass
class Diagnostic:
	"""Represents a finding (suggestion/warning/error) at a source location."""

	message: str
	code: str | None = None
	# Optional phase label ("parser", "rule", "config"); lets JSON output and
	# tests distinguish front-end failures from rule findings.
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Span() denotes unknown.
	notes: list[str] = field(default_factory=list)
	fix: Optional[Fix] = None

	def __post_init__(self) -> None:
		# Normalize missing spans to the sentinel Span() so downstream tooling
		# can rely on a structured object instead of None.
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def format_human(self) -> str:
		loc = self.span.file or "<unknown>"
		if self.span.line is not None:
			loc = f"{loc}:{self.span.line}"
			if self.span.column is not None:
				loc = f"{loc}:{self.span.column}"
		tag = f"[{self.code}] " if self.code else ""
		out = f"{loc}: {self.severity}: {tag}{self.message}"
		for note in self.notes:
			out += f"\n    note: {note}"
		if self.fix is not None:
			out += f"\n    suggested fix: {self.fix.replacement_text}"
		return out

	def to_dict(self) -> dict[str, Any]:
		return {
			"phase": self.phase,
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
			"fix": self.fix.to_dict() if self.fix is not None else None,
		}


__all__ = ["Diagnostic", "Fix"]
