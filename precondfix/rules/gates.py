# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Semantic gate chain.

Each gate is a pure predicate over an immutable `GateContext`. `evaluate`
runs them in order and stops at the first one that fails. A
`ResolutionError` from a host collaborator fails the gate that hit it;
nothing else is caught.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from precondfix.core.errors import ResolutionError
from precondfix.host.protocols import HostServices

from .catalog import CallShape, is_known_method, lookup

logger = logging.getLogger(__name__)

STRING_TYPE = "java.lang.String"


@dataclass(frozen=True)
class CandidateCall:
	site: Any
	owner_type: str
	method_name: str
	args: Sequence[Any]
	is_static: bool = True


@dataclass(frozen=True)
class GateContext:
	candidate: CandidateCall
	host: HostServices
	shape: Optional[CallShape]

	@property
	def site(self) -> Any:
		return self.candidate.site

	@property
	def message(self) -> Any:
		assert self.shape is not None
		return self.candidate.args[self.shape.message_arg_index]

	@property
	def condition(self) -> Any:
		assert self.shape is not None
		return self.candidate.args[self.shape.condition_arg_index]


@dataclass(frozen=True)
class MatchDecision:
	matched: bool
	exception_type: Optional[str] = None
	condition_text: Optional[str] = None
	message_text: Optional[str] = None
	method_name: Optional[str] = None
	null_check: bool = False
	rejected_by: Optional[str] = None


Gate = Callable[[GateContext], bool]


def shape_gate(ctx: GateContext) -> bool:
	"""Owner and method are in the catalog, bound statically, with exactly two arguments."""
	shape = ctx.shape
	return shape is not None and ctx.candidate.is_static and len(ctx.candidate.args) == shape.arity


def message_type_gate(ctx: GateContext) -> bool:
	return ctx.host.inspector.static_type(ctx.message, ctx.site) == STRING_TYPE


def non_constant_message_gate(ctx: GateContext) -> bool:
	return not ctx.host.constants.is_compile_time_constant(ctx.message, ctx.site)


def context_gate(ctx: GateContext) -> bool:
	return not ctx.host.test_code.is_test_code(ctx.site)


def side_effect_gate(ctx: GateContext) -> bool:
	return not ctx.host.side_effects.has_side_effect(ctx.message, ctx.site)


def statement_gate(ctx: GateContext) -> bool:
	"""The call is a whole expression statement, so a statement can replace it."""
	return ctx.host.inspector.replacement_span(ctx.site) is not None


GATES: Tuple[Tuple[str, Gate], ...] = (
	("shape", shape_gate),
	("message-type", message_type_gate),
	("non-constant-message", non_constant_message_gate),
	("context", context_gate),
	("side-effect", side_effect_gate),
	("statement", statement_gate),
)


def _no_match(gate: str) -> MatchDecision:
	return MatchDecision(matched=False, rejected_by=gate)


def _passes(name: str, gate: Gate, ctx: GateContext) -> bool:
	try:
		return gate(ctx)
	except ResolutionError as exc:
		logger.debug("gate %s could not resolve %s: %s", name, ctx.candidate.method_name, exc)
		return False


def evaluate(site: Any, host: HostServices, gates: Sequence[Tuple[str, Gate]] = GATES) -> MatchDecision:
	inspector = host.inspector
	if not is_known_method(inspector.method_name(site)):
		return _no_match("shape")
	try:
		resolved = inspector.resolve_call(site)
	except ResolutionError as exc:
		logger.debug("cannot resolve %s: %s", inspector.method_name(site), exc)
		return _no_match("shape")

	candidate = CandidateCall(
		site=site,
		owner_type=resolved.owner_type,
		method_name=resolved.method_name,
		args=tuple(resolved.args),
		is_static=resolved.is_static,
	)
	ctx = GateContext(candidate=candidate, host=host, shape=lookup(candidate.owner_type, candidate.method_name))
	for name, gate in gates:
		if not _passes(name, gate, ctx):
			logger.debug("%s.%s rejected by %s gate", candidate.owner_type, candidate.method_name, name)
			return _no_match(name)

	shape = ctx.shape
	assert shape is not None
	return MatchDecision(
		matched=True,
		exception_type=shape.exception_type(candidate.method_name),
		condition_text=inspector.source_text(ctx.condition),
		message_text=inspector.source_text(ctx.message),
		method_name=candidate.method_name,
		null_check=shape.is_null_check(candidate.method_name),
	)


__all__ = [
	"CandidateCall",
	"GateContext",
	"MatchDecision",
	"Gate",
	"GATES",
	"evaluate",
	"shape_gate",
	"message_type_gate",
	"non_constant_message_gate",
	"context_gate",
	"side_effect_gate",
	"statement_gate",
]
