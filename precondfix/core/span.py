# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source span representation shared by diagnostics and fixes.

A Span carries line/column information for humans and character offsets
(`start`, `end`) for mechanical text replacement. Offsets are half-open and
index into the exact text the parser was given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus offsets)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	start: Optional[int] = None
	end: Optional[int] = None

	@classmethod
	def from_loc(cls, loc: Any, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a parser location object.

		If `loc` is already a Span it is returned unchanged (re-labelled with
		`file` when one is given and the span has none).
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			if file is not None and loc.file is None:
				return cls(
					file=file,
					line=loc.line,
					column=loc.column,
					end_line=loc.end_line,
					end_column=loc.end_column,
					start=loc.start,
					end=loc.end,
				)
			return loc
		return cls(
			file=file or getattr(loc, "file", None),
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
			start=getattr(loc, "start", None),
			end=getattr(loc, "end", None),
		)

	@property
	def has_offsets(self) -> bool:
		return self.start is not None and self.end is not None

	def overlaps(self, other: "Span") -> bool:
		if not (self.has_offsets and other.has_offsets):
			return False
		return self.start < other.end and other.start < self.end  # type: ignore[operator]


__all__ = ["Span"]
