# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Host interfaces the rule depends on.

The rule never touches a parser or a file. Everything it needs about a call
site comes through these protocols; the reference Java host in this package
implements them, and tests substitute small fakes.

Contract shared by every collaborator: a failure to resolve something is
reported by raising `precondfix.core.errors.ResolutionError`. The rule turns
that into "no match" for the call site.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence

from precondfix.core.diagnostics import Diagnostic
from precondfix.core.span import Span


@dataclass(frozen=True)
class ResolvedCall:
	"""Statically bound view of one invocation."""

	owner_type: str
	method_name: str
	args: Sequence[Any]
	is_static: bool = True


class TreeInspector(Protocol):
	def method_name(self, site: Any) -> str:
		"""Simple name of the invoked method; never fails."""
		...

	def resolve_call(self, site: Any) -> ResolvedCall:
		...

	def static_type(self, expr: Any, site: Any) -> str:
		"""Fully qualified static type of `expr` (primitives by keyword)."""
		...

	def source_text(self, node: Any) -> str:
		...

	def call_span(self, site: Any) -> Span:
		...

	def replacement_span(self, site: Any) -> Optional[Span]:
		"""Span a statement-level rewrite may replace, or None if the call's value is used."""
		...


class ConstantClassifier(Protocol):
	def is_compile_time_constant(self, expr: Any, site: Any) -> bool:
		...


class SideEffectClassifier(Protocol):
	def has_side_effect(self, expr: Any, site: Any) -> bool:
		...


class TestCodeClassifier(Protocol):
	def is_test_code(self, site: Any) -> bool:
		...


class DiagnosticSink(Protocol):
	def report(self, diagnostic: Diagnostic) -> None:
		...


@dataclass(frozen=True)
class HostServices:
	"""Bundle of host collaborators handed to the rule for one compilation unit."""

	inspector: TreeInspector
	constants: ConstantClassifier
	side_effects: SideEffectClassifier
	test_code: TestCodeClassifier


__all__ = [
	"ResolvedCall",
	"TreeInspector",
	"ConstantClassifier",
	"SideEffectClassifier",
	"TestCodeClassifier",
	"DiagnosticSink",
	"HostServices",
]
