# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Compilation-unit index and lexical scopes for the reference Java host.

`UnitIndex` answers "what type does this simple name denote" from the
unit's package, imports and declared classes. `Scope` is a persistent
(immutable, parent-linked) chain of variable bindings: binding a name
returns a new Scope, so a call site can hold on to the exact set of names
visible at that point of the traversal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from precondfix.core.errors import ResolutionError
from precondfix.parser import ast as A

PRIMITIVES = frozenset({"boolean", "byte", "char", "short", "int", "long", "float", "double", "void"})

_JAVA_LANG = frozenset(
	{
		"Boolean",
		"Byte",
		"Character",
		"CharSequence",
		"Class",
		"Double",
		"Enum",
		"Error",
		"Exception",
		"Float",
		"IllegalArgumentException",
		"IllegalStateException",
		"Integer",
		"Iterable",
		"Long",
		"Math",
		"NullPointerException",
		"Number",
		"Object",
		"Override",
		"Runnable",
		"RuntimeException",
		"Short",
		"String",
		"StringBuilder",
		"System",
		"Thread",
		"Throwable",
		"Void",
	}
)

# Library types worth resolving through on-demand imports. A simple name that
# matches none of these under a wildcard import is left to the same-package
# fallback, which never aliases a library type.
WELL_KNOWN_TYPES = frozenset(
	{f"java.lang.{name}" for name in _JAVA_LANG}
	| {
		"com.google.common.base.Preconditions",
		"com.google.common.base.Strings",
		"java.util.Objects",
		"java.util.List",
		"java.util.Map",
		"java.util.Set",
		"java.util.Optional",
		"java.util.function.Supplier",
		"org.apache.commons.lang3.Validate",
		"org.apache.commons.lang3.StringUtils",
	}
)


@dataclass(frozen=True)
class VarInfo:
	name: str
	type_ref: Optional[A.TypeRef]
	kind: str  # "local" | "param" | "field"
	final: bool = False
	static: bool = False
	init: Optional[A.Expr] = field(default=None, compare=False)
	annotations: Tuple[str, ...] = ()
	owner: Optional[str] = None  # declaring class FQN, fields only


@dataclass(frozen=True)
class Scope:
	bindings: Tuple[Tuple[str, VarInfo], ...] = ()
	parent: Optional["Scope"] = None

	def lookup(self, name: str) -> Optional[VarInfo]:
		scope: Optional[Scope] = self
		while scope is not None:
			for bound, info in reversed(scope.bindings):
				if bound == name:
					return info
			scope = scope.parent
		return None

	def bind(self, *infos: VarInfo) -> "Scope":
		if not infos:
			return self
		return Scope(bindings=tuple((info.name, info) for info in infos), parent=self)


@dataclass
class ClassInfo:
	decl: A.TypeDecl
	fqn: str
	outer: Optional["ClassInfo"] = None
	fields: Dict[str, VarInfo] = field(default_factory=dict)
	methods: Dict[str, List[A.MethodDecl]] = field(default_factory=dict)

	def chain(self) -> Iterator["ClassInfo"]:
		"""This class and its lexically enclosing classes, innermost first."""
		info: Optional[ClassInfo] = self
		while info is not None:
			yield info
			info = info.outer

	def declares_method(self, name: str) -> bool:
		return any(name in info.methods for info in self.chain())

	def field_scope(self, parent: Optional[Scope] = None) -> Scope:
		scope = parent or Scope()
		for info in reversed(list(self.chain())):
			scope = scope.bind(*info.fields.values())
		return scope

	def annotated(self, simple_names: Iterable[str]) -> bool:
		wanted = set(simple_names)
		return any(a.simple_name in wanted for a in self.decl.annotations)


def var_from_param(param: A.Param) -> VarInfo:
	return VarInfo(
		name=param.name,
		type_ref=param.type_ref,
		kind="param",
		final="final" in param.modifiers,
		annotations=tuple(a.simple_name for a in param.annotations),
	)


def vars_from_local(decl: A.LocalVarDecl) -> List[VarInfo]:
	final = "final" in decl.modifiers
	out: List[VarInfo] = []
	for d in decl.declarators:
		type_ref = decl.type_ref
		if d.dims:
			type_ref = A.TypeRef(name=type_ref.name, args=type_ref.args, dims=type_ref.dims + d.dims, loc=type_ref.loc)
		out.append(
			VarInfo(
				name=d.name,
				type_ref=type_ref,
				kind="local",
				final=final,
				init=d.init,
				annotations=tuple(a.simple_name for a in decl.annotations),
			)
		)
	return out


def build_class_info(decl: A.TypeDecl, fqn: str, outer: Optional[ClassInfo] = None) -> ClassInfo:
	info = ClassInfo(decl=decl, fqn=fqn, outer=outer)
	implicit_constant = decl.kind == "interface"
	for const in decl.constants:
		info.fields[const.name] = VarInfo(
			name=const.name,
			type_ref=A.TypeRef(name=fqn),
			kind="field",
			final=True,
			static=True,
			owner=fqn,
		)
	for member in decl.members:
		if isinstance(member, A.FieldDecl):
			final = implicit_constant or "final" in member.modifiers
			static = implicit_constant or "static" in member.modifiers
			for d in member.declarators:
				type_ref = member.type_ref
				if d.dims:
					type_ref = A.TypeRef(name=type_ref.name, args=type_ref.args, dims=type_ref.dims + d.dims)
				info.fields[d.name] = VarInfo(
					name=d.name,
					type_ref=type_ref,
					kind="field",
					final=final,
					static=static,
					init=d.init,
					annotations=tuple(a.simple_name for a in member.annotations),
					owner=fqn,
				)
		elif isinstance(member, A.MethodDecl) and not member.is_constructor:
			info.methods.setdefault(member.name, []).append(member)
	return info


class UnitIndex:
	"""Imports and declared types of one compilation unit."""

	def __init__(self, unit: A.CompilationUnit, path: Optional[str] = None) -> None:
		self.unit = unit
		self.path = path
		self.package = unit.package
		self.single_imports: Dict[str, str] = {}
		self.on_demand: List[str] = []
		self.static_members: Dict[str, List[str]] = {}
		self.static_on_demand: List[str] = []
		self.classes: Dict[str, ClassInfo] = {}
		self._by_decl: Dict[int, ClassInfo] = {}
		for imp in unit.imports:
			self._add_import(imp)
		for decl in unit.types:
			prefix = f"{self.package}." if self.package else ""
			self._index_class(decl, prefix + decl.name, None)

	def _add_import(self, imp: A.ImportDecl) -> None:
		if imp.static:
			if imp.on_demand:
				self.static_on_demand.append(imp.name)
			else:
				owner, _, member = imp.name.rpartition(".")
				self.static_members.setdefault(member, []).append(owner)
			return
		if imp.on_demand:
			self.on_demand.append(imp.name)
		else:
			self.single_imports[imp.name.rsplit(".", 1)[-1]] = imp.name

	def _index_class(self, decl: A.TypeDecl, fqn: str, outer: Optional[ClassInfo]) -> None:
		info = build_class_info(decl, fqn, outer)
		self._by_decl[id(decl)] = info
		self.classes.setdefault(decl.name, info)
		for member in decl.members:
			if isinstance(member, A.TypeDecl):
				self._index_class(member, f"{fqn}.{member.name}", info)

	def find_class(self, decl: A.TypeDecl) -> Optional[ClassInfo]:
		return self._by_decl.get(id(decl))

	def class_for(self, decl: A.TypeDecl) -> ClassInfo:
		return self._by_decl[id(decl)]

	def class_by_fqn(self, fqn: str) -> Optional[ClassInfo]:
		return next((info for info in self._by_decl.values() if info.fqn == fqn), None)

	def resolve_type_name(self, name: str) -> str:
		"""
		Resolve a (possibly dotted) type name as written in source to a FQN.

		Order: declared in this unit, single-type import, on-demand import of a
		well-known type, java.lang, then the unit's own package. A name that only
		an on-demand import supplies raises `ResolutionError` when the unit
		declares a package.
		"""
		if name in PRIMITIVES:
			return name
		head, dot, rest = name.partition(".")
		if dot:
			resolved_head = self._resolve_simple(head, allow_package_fallback=False)
			if resolved_head is not None:
				return f"{resolved_head}.{rest}"
			return name
		return self._resolve_simple(name, allow_package_fallback=True)  # type: ignore[return-value]

	def _resolve_simple(self, name: str, *, allow_package_fallback: bool) -> Optional[str]:
		if name in self.classes:
			return self.classes[name].fqn
		if name in self.single_imports:
			return self.single_imports[name]
		candidates = [f"{pkg}.{name}" for pkg in self.on_demand if f"{pkg}.{name}" in WELL_KNOWN_TYPES]
		if len(candidates) == 1:
			# A type of the same name elsewhere in this package would shadow the
			# on-demand import, and other files are not visible here.
			if self.package:
				raise ResolutionError(f"{name!r} may come from {candidates[0]} or from package {self.package}")
			return candidates[0]
		if name in _JAVA_LANG:
			return f"java.lang.{name}"
		if not allow_package_fallback:
			return None
		return f"{self.package}.{name}" if self.package else name

	def static_import_owners(self, member: str) -> List[str]:
		"""Owners a bare `member(...)` call may bind to through static imports."""
		explicit = self.static_members.get(member)
		if explicit:
			return list(dict.fromkeys(explicit))
		return list(dict.fromkeys(self.static_on_demand))


__all__ = [
	"PRIMITIVES",
	"WELL_KNOWN_TYPES",
	"VarInfo",
	"Scope",
	"ClassInfo",
	"UnitIndex",
	"build_class_info",
	"var_from_param",
	"vars_from_local",
]
