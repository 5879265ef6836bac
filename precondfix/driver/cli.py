# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import argparse
import difflib
import json
import logging
import sys
from pathlib import Path
from typing import List

from precondfix.core.diagnostics import Diagnostic
from precondfix.core.errors import PrecondfixError
from precondfix.core.span import Span

from .config import SEVERITIES, load_config
from .runner import FileResult, analyze_file, iter_java_files, write_fixes

logger = logging.getLogger(__name__)

EXIT_CLEAN = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2

UNSUPPORTED_SYNTAX = """\
Java syntax outside the supported subset (the whole file is reported as a
syntax error and left unchanged):
  records, switch expressions and arrow cases, instanceof patterns,
  text blocks, sealed/permits clauses, module declarations
"""


def _build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="precondfix",
		description="Rewrite precondition calls with eagerly built messages into conditional throws",
		epilog=UNSUPPORTED_SYNTAX,
		formatter_class=argparse.RawDescriptionHelpFormatter,
	)
	parser.add_argument("paths", type=Path, nargs="+", help="Java source files or directories to scan")
	parser.add_argument("--config", type=Path, help="Path to a JSON config file (default: ./precondfix.json if present)")
	parser.add_argument("--apply", action="store_true", help="Rewrite files in place with the suggested fixes")
	parser.add_argument("--diff", action="store_true", help="Print a unified diff of the suggested fixes")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/code/message/severity/file/line/column/fix)",
	)
	parser.add_argument("--severity", choices=SEVERITIES, help="Override the configured severity ('off' disables the check)")
	parser.add_argument("--test-only", action="store_true", default=None, help="Treat every input as test code")
	parser.add_argument(
		"--no-skip-generated",
		dest="skip_generated",
		action="store_false",
		default=None,
		help="Also check generated sources (@Generated classes and generated globs)",
	)
	parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output (gate decisions, skipped files)")
	return parser


def _error_diag(exc: PrecondfixError, phase: str) -> Diagnostic:
	return Diagnostic(message=exc.message, code=exc.reason_code, phase=phase, severity="error", span=Span(file=exc.path))


def _unified_diff(result: FileResult) -> str:
	return "".join(
		difflib.unified_diff(
			result.source.splitlines(keepends=True),
			(result.fixed_text or "").splitlines(keepends=True),
			fromfile=f"a/{result.path}",
			tofile=f"b/{result.path}",
		)
	)


def main(argv: list[str] | None = None) -> int:
	"""
	Scan Java sources for precondition calls that build their message eagerly.

	Exit codes: 0 when nothing is left to fix, 1 when findings remain, 2 on
	usage, configuration, input or parse errors. With --json, prints a single
	object with `exit_code` and `diagnostics`; otherwise diagnostics go to
	stderr in human-readable form.
	"""
	args = _build_parser().parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)

	diagnostics: List[Diagnostic] = []
	results: List[FileResult] = []
	try:
		config = load_config(args.config).with_overrides(
			severity=args.severity,
			test_only=args.test_only,
			skip_generated=args.skip_generated,
		)
		files = list(iter_java_files(args.paths))
	except PrecondfixError as exc:
		diag = _error_diag(exc, "config" if exc.reason_code.startswith("config") else "input")
		if args.json:
			print(json.dumps({"exit_code": EXIT_ERROR, "diagnostics": [diag.to_dict()]}))
		else:
			print(diag.format_human(), file=sys.stderr)
		return EXIT_ERROR

	for path in files:
		try:
			results.append(analyze_file(path, config))
		except PrecondfixError as exc:
			diagnostics.append(_error_diag(exc, "input"))

	applied = 0
	diffs: dict[str, str] = {}
	for result in results:
		diagnostics.extend(result.diagnostics)
		if args.diff and result.changed:
			diffs[str(result.path)] = _unified_diff(result)
		if args.apply and write_fixes(result):
			applied += 1

	has_errors = any(d.phase != "rule" and d.severity == "error" for d in diagnostics)
	remaining = [] if args.apply else [d for r in results for d in r.findings]
	if has_errors:
		exit_code = EXIT_ERROR
	elif remaining:
		exit_code = EXIT_FINDINGS
	else:
		exit_code = EXIT_CLEAN

	if args.json:
		payload: dict = {
			"exit_code": exit_code,
			"diagnostics": [d.to_dict() for d in diagnostics],
			"applied_files": applied,
		}
		if args.diff:
			payload["diffs"] = diffs
		print(json.dumps(payload))
	else:
		for diff in diffs.values():
			sys.stdout.write(diff)
		for d in diagnostics:
			print(d.format_human(), file=sys.stderr)
		if args.apply and applied:
			print(f"precondfix: rewrote {applied} file(s)", file=sys.stderr)
	return exit_code


__all__ = ["main"]
