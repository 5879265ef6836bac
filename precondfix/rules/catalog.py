# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Call-shape catalog: the precondition APIs the rule knows how to rewrite.

Each `CallShape` describes one owner type. Whether a method checks for null
(and so takes the `== null` template) is stated per method in `null_checks`
rather than inferred from the method's name.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Optional, Tuple

ILLEGAL_ARGUMENT = "IllegalArgumentException"
ILLEGAL_STATE = "IllegalStateException"
NULL_POINTER = "NullPointerException"


@dataclass(frozen=True)
class CallShape:
	owner_type: str
	method_names: FrozenSet[str]
	exception_for: Mapping[str, str]
	null_checks: FrozenSet[str] = frozenset()
	arity: int = 2
	condition_arg_index: int = 0
	message_arg_index: int = 1

	def __post_init__(self) -> None:
		unknown = (set(self.exception_for) | set(self.null_checks)) - set(self.method_names)
		if unknown:
			raise ValueError(f"{self.owner_type}: methods {sorted(unknown)} not in method_names")
		missing = set(self.method_names) - set(self.exception_for)
		if missing:
			raise ValueError(f"{self.owner_type}: no exception for {sorted(missing)}")
		if self.arity != 2 or {self.condition_arg_index, self.message_arg_index} != {0, 1}:
			raise ValueError(f"{self.owner_type}: only (condition, message) calls are supported")

	def exception_type(self, method_name: str) -> str:
		return self.exception_for[method_name]

	def is_null_check(self, method_name: str) -> bool:
		return method_name in self.null_checks


def _shape(owner_type: str, methods: Iterable[Tuple[str, str, bool]]) -> CallShape:
	"""Build a shape from `(method, exception, null_check)` rows."""
	rows = list(methods)
	return CallShape(
		owner_type=owner_type,
		method_names=frozenset(name for name, _, _ in rows),
		exception_for=MappingProxyType({name: exc for name, exc, _ in rows}),
		null_checks=frozenset(name for name, _, null_check in rows if null_check),
	)


CATALOG: Tuple[CallShape, ...] = (
	_shape(
		"com.google.common.base.Preconditions",
		[
			("checkArgument", ILLEGAL_ARGUMENT, False),
			("checkState", ILLEGAL_STATE, False),
			("checkNotNull", NULL_POINTER, True),
		],
	),
	_shape(
		"java.util.Objects",
		[
			("requireNonNull", NULL_POINTER, True),
		],
	),
	_shape(
		"org.apache.commons.lang3.Validate",
		[
			("isTrue", ILLEGAL_ARGUMENT, False),
			("validState", ILLEGAL_STATE, False),
			("notNull", NULL_POINTER, True),
		],
	),
)

_BY_OWNER: Mapping[str, CallShape] = MappingProxyType({shape.owner_type: shape for shape in CATALOG})
_ALL_METHODS: FrozenSet[str] = frozenset(name for shape in CATALOG for name in shape.method_names)


def lookup(owner_type: str, method_name: str) -> Optional[CallShape]:
	shape = _BY_OWNER.get(owner_type)
	if shape is None or method_name not in shape.method_names:
		return None
	return shape


def is_known_method(method_name: str) -> bool:
	"""Cheap pre-filter: could a call with this name match any shape at all."""
	return method_name in _ALL_METHODS


__all__ = [
	"CallShape",
	"CATALOG",
	"lookup",
	"is_known_method",
	"ILLEGAL_ARGUMENT",
	"ILLEGAL_STATE",
	"NULL_POINTER",
]
