# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Decides whether a call site belongs to test code."""

from __future__ import annotations

from typing import Iterable

from precondfix.core.paths import matches_any
from precondfix.parser import ast as A

from .walker import CallSite

DEFAULT_TEST_GLOBS = ("**/src/test/**", "**/src/*Test/**", "**/src/testFixtures/**")

TEST_METHOD_ANNOTATIONS = frozenset({"Test", "ParameterizedTest", "RepeatedTest", "TestFactory"})


class JavaTestCodeClassifier:
	"""
	Test code is anything under a test source set, anything in a run flagged
	test-only, and any class (or class nested in one) declaring a test method.
	"""

	def __init__(self, test_globs: Iterable[str] = DEFAULT_TEST_GLOBS, *, test_only: bool = False) -> None:
		self.test_globs = tuple(test_globs)
		self.test_only = test_only

	def is_test_code(self, site: CallSite) -> bool:
		if self.test_only or matches_any(site.path, self.test_globs):
			return True
		if site.enclosing is None:
			return False
		return any(_declares_test_method(info.decl) for info in site.enclosing.chain())


def _declares_test_method(decl: A.TypeDecl) -> bool:
	for member in decl.members:
		if isinstance(member, A.MethodDecl) and any(a.simple_name in TEST_METHOD_ANNOTATIONS for a in member.annotations):
			return True
	return False


__all__ = ["JavaTestCodeClassifier", "DEFAULT_TEST_GLOBS", "TEST_METHOD_ANNOTATIONS"]
