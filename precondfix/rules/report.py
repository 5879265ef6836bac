# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Translates a fix into the diagnostic the driver understands."""

from __future__ import annotations

from typing import Optional

from precondfix.core.diagnostics import Diagnostic, Fix

RATIONALE = "the call can be replaced with a conditional throw to avoid unnecessary string construction"


def report(fix: Optional[Fix], *, code: str, severity: str, link: Optional[str] = None) -> Optional[Diagnostic]:
	if fix is None:
		return None
	notes = [f"see {link}"] if link else []
	return Diagnostic(
		message=RATIONALE,
		code=code,
		phase="rule",
		severity=severity,
		span=fix.original_span,
		notes=notes,
		fix=fix,
	)


__all__ = ["RATIONALE", "report"]
