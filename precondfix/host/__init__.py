# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Reference Java host: everything the rule needs to know about a call site.

`build_host(source, path, ...)` wires the inspector and classifiers for one
compilation unit; `collect_call_sites` yields the invocations to check.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .constants import ConstantExpressionClassifier
from .inspector import JavaTreeInspector
from .protocols import HostServices, ResolvedCall
from .scope import Scope, UnitIndex
from .side_effects import SideEffectAnalysis
from .test_code import DEFAULT_TEST_GLOBS, JavaTestCodeClassifier
from .walker import CallSite, CallSiteWalker, collect_call_sites


def build_host(
	source: str,
	path: Optional[str] = None,
	*,
	test_globs: Iterable[str] = DEFAULT_TEST_GLOBS,
	test_only: bool = False,
) -> HostServices:
	inspector = JavaTreeInspector(source, path)
	return HostServices(
		inspector=inspector,
		constants=ConstantExpressionClassifier(inspector),
		side_effects=SideEffectAnalysis(),
		test_code=JavaTestCodeClassifier(test_globs, test_only=test_only),
	)


__all__ = [
	"build_host",
	"CallSite",
	"CallSiteWalker",
	"collect_call_sites",
	"ConstantExpressionClassifier",
	"HostServices",
	"JavaTestCodeClassifier",
	"JavaTreeInspector",
	"ResolvedCall",
	"Scope",
	"SideEffectAnalysis",
	"UnitIndex",
]
