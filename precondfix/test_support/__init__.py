# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared helpers for tests that run the rule over Java snippets.

`CompilationTestHelper` checks diagnostics against `// BUG: Diagnostic
contains: <text>` markers: every marker expects a finding containing the text
on the next non-comment line, and no other line may produce a finding.
`RefactoringTestHelper` applies the fixes and compares the rewritten source
with the expected output line by line.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Tuple

from precondfix.core.diagnostics import Diagnostic
from precondfix.driver.config import Config
from precondfix.driver.runner import FileResult, analyze_source
from precondfix.host import CallSite, HostServices, build_host, collect_call_sites
from precondfix.parser import parse_java

_BUG_MARKER = re.compile(r"^\s*//\s*BUG:\s*Diagnostic contains:\s*(?P<text>.*?)\s*$")


def run_lines(path: str, lines: List[str], config: Optional[Config] = None) -> FileResult:
	return analyze_source("\n".join(lines) + "\n", path, config)


def host_and_sites(source: str, path: str = "Example.java", **host_options: Any) -> Tuple[HostServices, List[CallSite]]:
	"""Parse `source` and return the reference host plus every call site in source order."""
	unit = parse_java(source, path)
	return build_host(source, path, **host_options), collect_call_sites(unit, path)


def find_site(sites: List[CallSite], name: str, nth: int = 0) -> CallSite:
	matches = [s for s in sites if s.call.name == name]
	assert len(matches) > nth, f"no call #{nth} to {name!r} among {[s.call.name for s in sites]}"
	return matches[nth]


def _expected_markers(lines: List[str]) -> Dict[int, str]:
	"""1-based line number -> expected message fragment."""
	expected: Dict[int, str] = {}
	pending: Optional[str] = None
	for number, line in enumerate(lines, start=1):
		match = _BUG_MARKER.match(line)
		if match:
			pending = match.group("text")
			continue
		if pending is not None and not line.strip().startswith("//"):
			expected[number] = pending
			pending = None
	return expected


def _describe(diags: List[Diagnostic]) -> str:
	return "\n".join(d.format_human() for d in diags) or "<none>"


class CompilationTestHelper:
	def __init__(self, config: Optional[Config] = None) -> None:
		self.config = config
		self._sources: List[tuple[str, List[str]]] = []

	def add_source_lines(self, path: str, *lines: str) -> "CompilationTestHelper":
		self._sources.append((path, list(lines)))
		return self

	def do_test(self) -> List[FileResult]:
		results = []
		for path, lines in self._sources:
			result = run_lines(path, lines, self.config)
			assert not result.errors, f"{path} failed to parse:\n{_describe(result.errors)}"
			expected = _expected_markers(lines)
			by_line: Dict[int, List[Diagnostic]] = {}
			for diag in result.findings:
				by_line.setdefault(diag.span.line or 0, []).append(diag)
			for line, fragment in expected.items():
				found = by_line.pop(line, [])
				assert any(fragment in d.message for d in found), (
					f"{path}:{line}: expected a diagnostic containing {fragment!r}, got:\n{_describe(found)}"
				)
			unexpected = [d for diags in by_line.values() for d in diags]
			assert not unexpected, f"{path}: unexpected diagnostics:\n{_describe(unexpected)}"
			results.append(result)
		return results


class RefactoringTestHelper:
	def __init__(self, config: Optional[Config] = None) -> None:
		self.config = config
		self._path: Optional[str] = None
		self._input: List[str] = []
		self._output: List[str] = []

	def add_input_lines(self, path: str, *lines: str) -> "RefactoringTestHelper":
		self._path = path
		self._input = list(lines)
		return self

	def add_output_lines(self, path: str, *lines: str) -> "RefactoringTestHelper":
		assert path == self._path, f"output path {path!r} does not match input {self._path!r}"
		self._output = list(lines)
		return self

	def do_test(self) -> FileResult:
		assert self._path is not None, "add_input_lines() first"
		result = run_lines(self._path, self._input, self.config)
		assert not result.errors, f"{self._path} failed to parse:\n{_describe(result.errors)}"
		actual = (result.fixed_text if result.fixed_text is not None else result.source).splitlines()
		assert actual == self._output, "\n".join(["rewritten source differs:", *actual])
		return result


__all__ = ["CompilationTestHelper", "RefactoringTestHelper", "find_site", "host_and_sites", "run_lines"]
