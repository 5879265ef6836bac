# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Compile-time constant classification (JLS 15.29, restricted to what the
parser models).

A constant is built from literals (not `null`), casts to primitive or String,
unary and binary operators, conditionals, parentheses, and names of `final`
variables of primitive or String type initialized with a constant. Parameters
annotated `@CompileTimeConstant` also count: callers are required to pass a
constant for them.
"""

from __future__ import annotations

from typing import FrozenSet, Optional

from precondfix.core.errors import ResolutionError
from precondfix.parser import ast as A

from .inspector import STRING_TYPE, JavaTreeInspector
from .scope import PRIMITIVES, VarInfo
from .walker import CallSite

COMPILE_TIME_CONSTANT_ANNOTATIONS = frozenset({"CompileTimeConstant"})

_CONSTANT_TYPES = (PRIMITIVES - {"void"}) | {STRING_TYPE}


class ConstantExpressionClassifier:
	def __init__(self, inspector: JavaTreeInspector) -> None:
		self.inspector = inspector

	def is_compile_time_constant(self, expr: A.Expr, site: CallSite) -> bool:
		return self._constant(expr, site, frozenset())

	def _constant(self, expr: A.Expr, site: CallSite, seen: FrozenSet[str]) -> bool:
		if isinstance(expr, A.Literal):
			return expr.kind != "null"
		if isinstance(expr, A.Paren):
			return self._constant(expr.expr, site, seen)
		if isinstance(expr, A.Cast):
			return self._constant_type(self.inspector.type_of_ref(expr.type_ref, site)) and self._constant(expr.expr, site, seen)
		if isinstance(expr, A.Unary):
			return expr.op not in ("++", "--") and self._constant(expr.operand, site, seen)
		if isinstance(expr, A.Binary):
			return self._constant(expr.left, site, seen) and self._constant(expr.right, site, seen)
		if isinstance(expr, A.Conditional):
			return all(self._constant(e, site, seen) for e in (expr.condition, expr.then_value, expr.else_value))
		if isinstance(expr, A.Name):
			return self._constant_var(site.scope.lookup(expr.ident), site, seen)
		if isinstance(expr, A.FieldAccess):
			type_name = self.inspector.as_type_name(expr.target, site)
			if type_name is None:
				return False
			owner = site.index.class_by_fqn(site.index.resolve_type_name(type_name))
			return owner is not None and self._constant_var(owner.fields.get(expr.name), site, seen)
		return False

	def _constant_var(self, var: Optional[VarInfo], site: CallSite, seen: FrozenSet[str]) -> bool:
		if var is None:
			return False
		if var.kind == "param":
			return bool(COMPILE_TIME_CONSTANT_ANNOTATIONS.intersection(var.annotations))
		key = f"{var.owner or ''}#{var.name}"
		if not var.final or var.init is None or key in seen:
			return False
		try:
			var_type = self.inspector.var_type(var, site)
		except ResolutionError:
			return False
		return self._constant_type(var_type) and self._constant(var.init, site, seen | {key})

	@staticmethod
	def _constant_type(type_name: str) -> bool:
		return type_name in _CONSTANT_TYPES


__all__ = ["ConstantExpressionClassifier", "COMPILE_TIME_CONSTANT_ANNOTATIONS"]
