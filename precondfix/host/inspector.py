# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Tree inspector for the reference Java host.

Static typing here is deliberately partial: it knows literals, declared
variables and fields, string concatenation, numeric promotion, a handful of
library methods, and methods declared in the same compilation unit. Anything
else raises `ResolutionError`, which the rule treats as "no match".
"""

from __future__ import annotations

from typing import Optional, Set

from precondfix.core.errors import ResolutionError
from precondfix.core.span import Span
from precondfix.parser import ast as A

from .protocols import ResolvedCall
from .scope import ClassInfo, VarInfo
from .walker import CallSite

STRING_TYPE = "java.lang.String"
FUNCTIONAL_TYPE = "<functional>"

_LITERAL_TYPES = {
	"string": STRING_TYPE,
	"char": "char",
	"int": "int",
	"long": "long",
	"float": "float",
	"double": "double",
	"boolean": "boolean",
	"null": "null",
}

_NUMERIC_RANK = ("byte", "short", "char", "int", "long", "float", "double")

_UNBOXED = {
	"java.lang.Boolean": "boolean",
	"java.lang.Byte": "byte",
	"java.lang.Character": "char",
	"java.lang.Short": "short",
	"java.lang.Integer": "int",
	"java.lang.Long": "long",
	"java.lang.Float": "float",
	"java.lang.Double": "double",
}

_BOOLEAN_OPS = frozenset({"==", "!=", "<", ">", "<=", ">=", "&&", "||"})

_KNOWN_RETURNS = {
	(STRING_TYPE, "valueOf"): STRING_TYPE,
	(STRING_TYPE, "format"): STRING_TYPE,
	(STRING_TYPE, "join"): STRING_TYPE,
	("java.util.Objects", "toString"): STRING_TYPE,
	("java.lang.Integer", "toString"): STRING_TYPE,
	("java.lang.Long", "toString"): STRING_TYPE,
	("java.lang.Boolean", "toString"): STRING_TYPE,
	("java.lang.Double", "toString"): STRING_TYPE,
	("com.google.common.base.Strings", "nullToEmpty"): STRING_TYPE,
	("com.google.common.base.Strings", "repeat"): STRING_TYPE,
	("com.google.common.base.Strings", "lenientFormat"): STRING_TYPE,
	("org.apache.commons.lang3.StringUtils", "join"): STRING_TYPE,
}

_STRING_INSTANCE_METHODS = {
	"concat": STRING_TYPE,
	"formatted": STRING_TYPE,
	"intern": STRING_TYPE,
	"repeat": STRING_TYPE,
	"replace": STRING_TYPE,
	"strip": STRING_TYPE,
	"substring": STRING_TYPE,
	"toLowerCase": STRING_TYPE,
	"toUpperCase": STRING_TYPE,
	"trim": STRING_TYPE,
	"length": "int",
	"isEmpty": "boolean",
	"equals": "boolean",
}


def _unbox(type_name: str) -> str:
	return _UNBOXED.get(type_name, type_name)


def _promote(type_name: str) -> str:
	t = _unbox(type_name)
	if t not in _NUMERIC_RANK:
		raise ResolutionError(f"not a numeric type: {type_name}")
	return "int" if _NUMERIC_RANK.index(t) < _NUMERIC_RANK.index("int") else t


def _binary_promote(left: str, right: str) -> str:
	lt, rt = _promote(left), _promote(right)
	return max(lt, rt, key=_NUMERIC_RANK.index)


class JavaTreeInspector:
	"""Implements `TreeInspector` over `precondfix.parser.ast` nodes."""

	def __init__(self, source: str, path: Optional[str] = None) -> None:
		self.source = source
		self.path = path

	# ------------------------------------------------------------ call sites

	def method_name(self, site: CallSite) -> str:
		return site.call.name

	def resolve_call(self, site: CallSite) -> ResolvedCall:
		return self._resolve(site.call, site)

	def call_span(self, site: CallSite) -> Span:
		return Span.from_loc(site.call.loc, self.path)

	def replacement_span(self, site: CallSite) -> Optional[Span]:
		if site.statement is None or site.statement.expr is not site.call or site.before_else:
			return None
		return Span.from_loc(site.statement.loc, self.path)

	def source_text(self, node: A.Expr) -> str:
		return self.source[node.loc.start : node.loc.end]

	def _resolve(self, call: A.MethodCall, site: CallSite) -> ResolvedCall:
		args = tuple(call.args)
		if call.target is None:
			return ResolvedCall(self._unqualified_owner(call.name, site), call.name, args, is_static=True)
		type_name = self.as_type_name(call.target, site)
		if type_name is not None:
			owner = site.index.resolve_type_name(type_name)
			return ResolvedCall(owner, call.name, args, is_static=True)
		return ResolvedCall(self.static_type(call.target, site), call.name, args, is_static=False)

	def _unqualified_owner(self, name: str, site: CallSite) -> str:
		# Methods of enclosing classes, declared or inherited, shadow statically
		# imported ones.
		if site.enclosing is not None:
			for info in site.enclosing.chain():
				owner = self._member_owner(name, info, site, set())
				if owner is not None:
					return owner
		owners = site.index.static_import_owners(name)
		if len(owners) == 1:
			return owners[0]
		if not owners:
			raise ResolutionError(f"cannot resolve method {name!r}")
		raise ResolutionError(f"ambiguous static import for {name!r}: {', '.join(owners)}")

	def _member_owner(self, name: str, info: ClassInfo, site: CallSite, seen: Set[str]) -> Optional[str]:
		"""Class declaring or inheriting `name`, searching supertypes declared in this unit."""
		if info.fqn in seen:
			return None
		seen.add(info.fqn)
		if name in info.methods:
			return info.fqn
		for ref in info.decl.supertypes:
			fqn = site.index.resolve_type_name(ref.name)
			super_info = site.index.class_by_fqn(fqn)
			if super_info is None:
				raise ResolutionError(f"{info.fqn} inherits from {fqn}, which is not declared here")
			owner = self._member_owner(name, super_info, site, seen)
			if owner is not None:
				return owner
		return None

	def as_type_name(self, expr: A.Expr, site: CallSite) -> Optional[str]:
		"""Dotted source text of `expr` when it names a type rather than a value."""
		if isinstance(expr, A.Name):
			return expr.ident if site.scope.lookup(expr.ident) is None else None
		if isinstance(expr, A.FieldAccess):
			head = self.as_type_name(expr.target, site)
			if head is None:
				return None
			info = site.index.class_by_fqn(site.index.resolve_type_name(head))
			if info is not None and expr.name in info.fields:
				return None
			return f"{head}.{expr.name}"
		return None

	# ------------------------------------------------------------ typing

	def type_of_ref(self, ref: A.TypeRef, site: CallSite) -> str:
		return site.index.resolve_type_name(ref.name) + "[]" * ref.dims

	def var_type(self, var: VarInfo, site: CallSite) -> str:
		if var.type_ref is None:
			raise ResolutionError(f"untyped variable {var.name!r}")
		if var.type_ref.name == "var" and not var.type_ref.dims:
			if var.init is None:
				raise ResolutionError(f"cannot infer type of {var.name!r}")
			return self.static_type(var.init, site)
		return self.type_of_ref(var.type_ref, site)

	def static_type(self, expr: A.Expr, site: CallSite) -> str:
		if isinstance(expr, A.Literal):
			return _LITERAL_TYPES[expr.kind]
		if isinstance(expr, A.Paren):
			return self.static_type(expr.expr, site)
		if isinstance(expr, A.Name):
			var = site.scope.lookup(expr.ident)
			if var is None:
				raise ResolutionError(f"unknown variable {expr.ident!r}")
			return self.var_type(var, site)
		if isinstance(expr, A.FieldAccess):
			return self._field_type(expr, site)
		if isinstance(expr, A.MethodCall):
			return self._call_type(expr, site)
		if isinstance(expr, A.Binary):
			return self._binary_type(expr, site)
		if isinstance(expr, A.Unary):
			if expr.op == "!":
				return "boolean"
			operand = self.static_type(expr.operand, site)
			return operand if expr.op in ("++", "--") else _promote(operand)
		if isinstance(expr, A.Postfix):
			return self.static_type(expr.operand, site)
		if isinstance(expr, A.Assign):
			return self.static_type(expr.target, site)
		if isinstance(expr, A.Conditional):
			return self._conditional_type(expr, site)
		if isinstance(expr, (A.Cast, A.NewInstance)):
			return self.type_of_ref(expr.type_ref, site)
		if isinstance(expr, A.NewArray):
			return self.type_of_ref(expr.type_ref, site)
		if isinstance(expr, A.ArrayAccess):
			array = self.static_type(expr.array, site)
			if not array.endswith("[]"):
				raise ResolutionError(f"indexing non-array type {array}")
			return array[:-2]
		if isinstance(expr, A.InstanceOf):
			return "boolean"
		if isinstance(expr, A.ClassLiteral):
			return "java.lang.Class"
		if isinstance(expr, (A.Lambda, A.MethodRef)):
			return FUNCTIONAL_TYPE
		if isinstance(expr, A.This) and site.enclosing is not None:
			return site.enclosing.fqn
		raise ResolutionError(f"cannot type {type(expr).__name__}")

	def _owner_class(self, target: A.Expr, site: CallSite) -> Optional[ClassInfo]:
		type_name = self.as_type_name(target, site)
		if type_name is not None:
			return site.index.class_by_fqn(site.index.resolve_type_name(type_name))
		if isinstance(target, A.This):
			return site.enclosing
		return site.index.class_by_fqn(self.static_type(target, site))

	def _field_type(self, expr: A.FieldAccess, site: CallSite) -> str:
		if expr.name == "length" and self.as_type_name(expr.target, site) is None:
			target = self.static_type(expr.target, site)
			if target.endswith("[]"):
				return "int"
		owner = self._owner_class(expr.target, site)
		if owner is None or expr.name not in owner.fields:
			raise ResolutionError(f"unknown field {expr.name!r}")
		return self.var_type(owner.fields[expr.name], site)

	def _call_type(self, call: A.MethodCall, site: CallSite) -> str:
		if call.name == "toString" and not call.args:
			return STRING_TYPE
		resolved = self._resolve(call, site)
		known = _KNOWN_RETURNS.get((resolved.owner_type, resolved.method_name))
		if known is not None:
			return known
		if resolved.owner_type == STRING_TYPE and not resolved.is_static and call.name in _STRING_INSTANCE_METHODS:
			return _STRING_INSTANCE_METHODS[call.name]
		info = site.index.class_by_fqn(resolved.owner_type)
		if info is not None:
			arity = len(call.args)
			returns = {
				self.type_of_ref(m.return_type, site)
				for m in info.methods.get(call.name, [])
				if m.return_type is not None
				and (len(m.params) == arity or (m.params and m.params[-1].varargs and arity >= len(m.params) - 1))
			}
			if len(returns) == 1:
				return returns.pop()
		raise ResolutionError(f"unknown return type of {resolved.owner_type}.{call.name}")

	def _binary_type(self, expr: A.Binary, site: CallSite) -> str:
		if expr.op in _BOOLEAN_OPS:
			return "boolean"
		left = self.static_type(expr.left, site)
		right = self.static_type(expr.right, site)
		if expr.op == "+" and STRING_TYPE in (left, right):
			return STRING_TYPE
		if expr.op in ("&", "|", "^") and _unbox(left) == _unbox(right) == "boolean":
			return "boolean"
		if expr.op in ("<<", ">>", ">>>"):
			return _promote(left)
		return _binary_promote(left, right)

	def _conditional_type(self, expr: A.Conditional, site: CallSite) -> str:
		then_t = self.static_type(expr.then_value, site)
		else_t = self.static_type(expr.else_value, site)
		if then_t == else_t:
			return then_t
		if then_t == "null":
			return else_t
		if else_t == "null":
			return then_t
		return _binary_promote(then_t, else_t)


__all__ = ["JavaTreeInspector", "STRING_TYPE", "FUNCTIONAL_TYPE"]
