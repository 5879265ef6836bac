# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Conservative side-effect classifier.

Any expression that could run user code or mutate state is treated as
side-effecting: assignments (plain and compound), increments and decrements,
method invocations and instance or array creation. Lambda and method
reference bodies only run when invoked, so they are not scanned.
"""

from __future__ import annotations

from precondfix.parser import ast as A

from .walker import CallSite, expr_children

_EFFECTFUL = (A.Assign, A.Postfix, A.MethodCall, A.NewInstance, A.NewArray)
_DEFERRED = (A.Lambda, A.MethodRef)
_INERT = (A.Literal, A.Name, A.This, A.Super, A.ClassLiteral)
_COMPOSITE = (
	A.Paren,
	A.FieldAccess,
	A.ArrayAccess,
	A.ArrayInit,
	A.Binary,
	A.InstanceOf,
	A.Unary,
	A.Conditional,
	A.Cast,
)


class SideEffectAnalysis:
	def has_side_effect(self, expr: A.Expr, site: CallSite) -> bool:
		if isinstance(expr, _EFFECTFUL):
			return True
		if isinstance(expr, A.Unary) and expr.op in ("++", "--"):
			return True
		if isinstance(expr, (_DEFERRED + _INERT)):
			return False
		if isinstance(expr, _COMPOSITE):
			return any(self.has_side_effect(child, site) for child in expr_children(expr))
		# Unknown node kinds are assumed to have effects.
		return True


__all__ = ["SideEffectAnalysis"]
