# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from precondfix.core.diagnostics import Diagnostic, Fix
from precondfix.core.errors import ConfigError, PrecondfixError, ResolutionError
from precondfix.core.span import Span
from precondfix.parser.ast import Located


def test_span_from_parser_location():
	loc = Located(line=3, column=5, end_line=3, end_column=20, start=40, end=55)
	span = Span.from_loc(loc, "A.java")
	assert span == Span(file="A.java", line=3, column=5, end_line=3, end_column=20, start=40, end=55)
	assert span.has_offsets


def test_span_from_span_keeps_existing_file():
	span = Span(file="A.java", line=1)
	assert Span.from_loc(span, "B.java") is span
	assert Span.from_loc(Span(line=1), "B.java").file == "B.java"
	assert Span.from_loc(None, "C.java") == Span(file="C.java")


def test_span_overlap_uses_half_open_offsets():
	a = Span(start=0, end=10)
	assert a.overlaps(Span(start=9, end=12))
	assert not a.overlaps(Span(start=10, end=12))
	assert not a.overlaps(Span(line=1))


def test_missing_span_is_normalized():
	diag = Diagnostic(message="m", span=None)  # type: ignore[arg-type]
	assert diag.span == Span()
	assert diag.format_human() == "<unknown>: error: m"


def test_human_format_includes_location_code_and_fix():
	fix = Fix(original_span=Span(start=4, end=9), replacement_text="if (x == null) throw new NullPointerException(m);")
	diag = Diagnostic(
		message="use a conditional throw",
		code="PreferExceptionsPreconditions",
		phase="rule",
		severity="suggestion",
		span=Span(file="A.java", line=7, column=5),
		notes=["see docs"],
		fix=fix,
	)
	assert diag.format_human().splitlines() == [
		"A.java:7:5: suggestion: [PreferExceptionsPreconditions] use a conditional throw",
		"    note: see docs",
		"    suggested fix: if (x == null) throw new NullPointerException(m);",
	]
	data = diag.to_dict()
	assert data["fix"] == {"start": 4, "end": 9, "replacement": fix.replacement_text}
	assert data["line"] == 7
	assert data["phase"] == "rule"


def test_errors_are_structured():
	err = ConfigError("config-invalid", "bad severity", "precondfix.json")
	assert isinstance(err, PrecondfixError)
	assert str(err) == "[config-invalid] bad severity path=precondfix.json"
	assert err.to_dict() == {"reason_code": "config-invalid", "message": "bad severity", "path": "precondfix.json"}
	assert issubclass(ResolutionError, ValueError)
