# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from precondfix.core.span import Span
from precondfix.rules import RATIONALE, MatchDecision, report, synthesize

SPAN = Span(file="A.java", line=3, column=5, start=40, end=90)


def _decision(**kw) -> MatchDecision:
	base = dict(
		matched=True,
		exception_type="IllegalArgumentException",
		condition_text='param != "x"',
		message_text='"constant" + param',
		method_name="checkArgument",
	)
	base.update(kw)
	return MatchDecision(**base)


def test_boolean_template():
	fix = synthesize(_decision(), SPAN)
	assert fix.replacement_text == 'if (!(param != "x")) throw new IllegalArgumentException("constant" + param);'
	assert fix.original_span == SPAN


def test_null_template():
	fix = synthesize(
		_decision(condition_text="param", exception_type="NullPointerException", method_name="requireNonNull", null_check=True),
		SPAN,
	)
	assert fix.replacement_text == 'if (param == null) throw new NullPointerException("constant" + param);'


def test_template_is_chosen_by_flag_not_method_name():
	# A boolean-style method flagged as a null check still gets the null template.
	fix = synthesize(_decision(null_check=True), SPAN)
	assert fix.replacement_text.startswith('if (param != "x" == null)')


def test_texts_with_braces_are_copied_verbatim():
	fix = synthesize(_decision(message_text='"{}" + String.format("{0}", param)'), SPAN)
	assert fix.replacement_text.endswith('("{}" + String.format("{0}", param));')


def test_unmatched_decision_is_rejected():
	with pytest.raises(ValueError):
		synthesize(MatchDecision(matched=False), SPAN)


def test_report_without_fix_is_no_issue():
	assert report(None, code="PreferExceptionsPreconditions", severity="warning") is None


def test_report_wraps_fix():
	fix = synthesize(_decision(), SPAN)
	diag = report(fix, code="PreferExceptionsPreconditions", severity="warning")
	assert diag is not None
	assert diag.message == RATIONALE
	assert "call can be replaced" in diag.message
	assert diag.fix is fix
	assert diag.span == SPAN
	assert diag.phase == "rule"
	assert diag.severity == "warning"
	assert diag.to_dict()["fix"] == {"start": 40, "end": 90, "replacement": fix.replacement_text}
