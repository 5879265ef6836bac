# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Per-file analysis: parse, walk every invocation in source order, run the rule
and apply its fixes to a copy of the text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from precondfix.core.diagnostics import Diagnostic
from precondfix.core.errors import PrecondfixError
from precondfix.core.paths import matches_any
from precondfix.core.span import Span
from precondfix.host import build_host, collect_call_sites
from precondfix.parser import JavaSyntaxError, parse_java
from precondfix.rules import PreferExceptionsPreconditions

from .config import Config
from .sink import ListSink, apply_fixes

logger = logging.getLogger(__name__)

GENERATED_ANNOTATIONS = frozenset({"Generated"})


@dataclass
class FileResult:
	path: Optional[str]
	source: str
	diagnostics: List[Diagnostic] = field(default_factory=list)
	# Source with every non-overlapping fix applied; None when nothing matched.
	fixed_text: Optional[str] = None
	skipped: Optional[str] = None  # "disabled" | "excluded" | "generated"

	@property
	def findings(self) -> List[Diagnostic]:
		return [d for d in self.diagnostics if d.phase == "rule"]

	@property
	def errors(self) -> List[Diagnostic]:
		return [d for d in self.diagnostics if d.phase != "rule" and d.severity == "error"]

	@property
	def changed(self) -> bool:
		return self.fixed_text is not None and self.fixed_text != self.source


def _skip_reason(path: Optional[str], config: Config) -> Optional[str]:
	if not config.active:
		return "disabled"
	if matches_any(path, config.exclude):
		return "excluded"
	if config.skip_generated and matches_any(path, config.generated_globs):
		return "generated"
	return None


def analyze_source(
	source: str,
	path: Optional[str] = None,
	config: Optional[Config] = None,
	rule: Optional[PreferExceptionsPreconditions] = None,
) -> FileResult:
	config = config or Config()
	skipped = _skip_reason(path, config)
	if skipped is not None:
		logger.debug("%s: skipped (%s)", path, skipped)
		return FileResult(path=path, source=source, skipped=skipped)

	try:
		unit = parse_java(source, path)
	except JavaSyntaxError as exc:
		logger.debug("%s: %s", path, exc.message)
		diag = Diagnostic(
			message=exc.message,
			code="syntax-error",
			phase="parser",
			severity="error",
			span=Span(file=path, line=exc.line, column=exc.column),
		)
		return FileResult(path=path, source=source, diagnostics=[diag])

	rule = rule or PreferExceptionsPreconditions(severity=config.severity)
	host = build_host(source, path, test_globs=config.test_globs, test_only=config.test_only)
	sink = ListSink()
	skip_annotations = GENERATED_ANNOTATIONS if config.skip_generated else ()
	sites = collect_call_sites(unit, path, skip_annotations=skip_annotations)
	for site in sites:
		rule.check(site, host, sink)
	logger.debug("%s: %d call sites, %d findings", path, len(sites), len(sink.diagnostics))

	fixes = sink.fixes
	fixed_text = apply_fixes(source, fixes) if fixes else None
	return FileResult(path=path, source=source, diagnostics=sink.diagnostics, fixed_text=fixed_text)


def analyze_file(path: Path, config: Optional[Config] = None) -> FileResult:
	try:
		source = path.read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as exc:
		raise PrecondfixError("input-unreadable", f"cannot read {path}: {exc}", path=str(path)) from exc
	return analyze_source(source, str(path), config)


def iter_java_files(paths: Iterable[Path]) -> Iterator[Path]:
	"""Expand files and directories (recursively, sorted) into `.java` files."""
	for path in paths:
		if path.is_dir():
			yield from sorted(p for p in path.rglob("*.java") if p.is_file())
		elif path.is_file():
			yield path
		else:
			raise PrecondfixError("input-not-found", f"no such file or directory: {path}", path=str(path))


def write_fixes(result: FileResult) -> bool:
	"""Rewrite `result.path` in place; returns whether the file changed."""
	if not result.changed or result.path is None:
		return False
	Path(result.path).write_text(result.fixed_text or "", encoding="utf-8")
	logger.info("%s: applied %d fixes", result.path, len(result.findings))
	return True


__all__ = ["FileResult", "GENERATED_ANNOTATIONS", "analyze_source", "analyze_file", "iter_java_files", "write_fixes"]
