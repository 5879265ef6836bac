# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Traversal that turns a parsed compilation unit into call sites.

Statements are visited in source order while a persistent `Scope` is threaded
through each block, so every recorded `CallSite` knows exactly which locals,
parameters and fields are visible at the invocation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Iterable, Iterator, List, Optional

from precondfix.parser import ast as A

from .scope import ClassInfo, Scope, UnitIndex, VarInfo, build_class_info, var_from_param, vars_from_local

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallSite:
	"""One method invocation plus everything needed to reason about it."""

	call: A.MethodCall
	# The expression statement whose whole expression is `call`, if any.
	statement: Optional[A.ExprStmt]
	scope: Scope
	enclosing: Optional[ClassInfo]
	method: Optional[A.MethodDecl]
	index: UnitIndex
	# The statement is the unbraced tail of an `if` branch followed by `else`;
	# replacing it with an `if` statement would capture that `else`.
	before_else: bool = False

	@property
	def path(self) -> Optional[str]:
		return self.index.path


def expr_children(expr: A.Expr) -> Iterator[A.Expr]:
	"""Direct sub-expressions of `expr` in field order (lambda bodies included)."""
	for f in fields(expr):  # type: ignore[arg-type]
		if f.name == "loc":
			continue
		value = getattr(expr, f.name)
		if isinstance(value, A.Expr):
			yield value
		elif isinstance(value, list):
			for item in value:
				if isinstance(item, A.Expr):
					yield item


class CallSiteWalker:
	def __init__(self, index: UnitIndex, *, skip_annotations: Iterable[str] = ()) -> None:
		self.index = index
		self.skip_annotations = frozenset(skip_annotations)
		self._sites: List[CallSite] = []
		self._anonymous = 0

	def walk(self) -> List[CallSite]:
		self._sites = []
		for decl in self.index.unit.types:
			self._visit_type(self.index.class_for(decl), None)
		return self._sites

	# ------------------------------------------------------------ declarations

	def _visit_type(self, info: ClassInfo, scope: Optional[Scope]) -> None:
		if self.skip_annotations and info.annotated(self.skip_annotations):
			logger.debug("skipping annotated class %s", info.fqn)
			return
		class_scope = info.field_scope() if scope is None else scope.bind(*info.fields.values())
		for const in info.decl.constants:
			for arg in const.args:
				self._visit_expr(arg, class_scope, info, None)
			if const.body is not None:
				self._visit_anonymous(const.body, const.loc, class_scope, info)
		self._visit_members(info, info.decl.members, class_scope)

	def _visit_members(self, info: ClassInfo, members: List[A.Member], scope: Scope) -> None:
		for member in members:
			if isinstance(member, A.FieldDecl):
				for d in member.declarators:
					if d.init is not None:
						self._visit_expr(d.init, scope, info, None)
			elif isinstance(member, A.MethodDecl):
				if member.body is not None:
					inner = scope.bind(*[var_from_param(p) for p in member.params])
					self._visit_block(member.body.statements, inner, info, member)
			elif isinstance(member, A.Initializer):
				self._visit_block(member.body.statements, scope, info, None)
			elif isinstance(member, A.TypeDecl):
				nested = self.index.find_class(member) or build_class_info(member, f"{info.fqn}.{member.name}", info)
				self._visit_type(nested, None)

	def _visit_anonymous(
		self,
		members: List[A.Member],
		loc: A.Located,
		scope: Scope,
		outer: Optional[ClassInfo],
		supertype: Optional[A.TypeRef] = None,
	) -> None:
		self._anonymous += 1
		base = outer.fqn if outer is not None else (self.index.package or "")
		decl = A.TypeDecl(loc=loc, kind="class", name="", members=members, supertypes=[supertype] if supertype is not None else [])
		info = build_class_info(decl, f"{base}${self._anonymous}", outer)
		self._visit_members(info, members, scope.bind(*info.fields.values()))

	# ------------------------------------------------------------ statements

	def _visit_block(self, statements: List[A.Stmt], scope: Scope, cls: Optional[ClassInfo], method: Optional[A.MethodDecl]) -> Scope:
		for stmt in statements:
			scope = self._visit_stmt(stmt, scope, cls, method)
		return scope

	def _visit_stmt(
		self,
		stmt: A.Stmt,
		scope: Scope,
		cls: Optional[ClassInfo],
		method: Optional[A.MethodDecl],
		before_else: bool = False,
	) -> Scope:
		"""
		Visit `stmt`; returns the scope in effect for the statements after it.

		`before_else` is set while visiting an unbraced statement that ends
		right before the `else` of an enclosing `if`.
		"""
		expr = lambda e: self._visit_expr(e, scope, cls, method)  # noqa: E731
		nested = lambda s, tail=before_else: self._visit_stmt(s, scope, cls, method, tail)  # noqa: E731

		if isinstance(stmt, A.Block):
			self._visit_block(stmt.statements, scope, cls, method)
		elif isinstance(stmt, A.LocalVarDecl):
			inner = scope.bind(*vars_from_local(stmt))
			for d in stmt.declarators:
				if d.init is not None:
					self._visit_expr(d.init, inner, cls, method)
			return inner
		elif isinstance(stmt, A.ExprStmt):
			self._visit_expr(stmt.expr, scope, cls, method, statement=stmt, before_else=before_else)
		elif isinstance(stmt, A.IfStmt):
			expr(stmt.condition)
			nested(stmt.then_stmt, before_else or stmt.else_stmt is not None)
			if stmt.else_stmt is not None:
				nested(stmt.else_stmt)
		elif isinstance(stmt, A.WhileStmt):
			expr(stmt.condition)
			nested(stmt.body)
		elif isinstance(stmt, A.DoStmt):
			nested(stmt.body, False)
			expr(stmt.condition)
		elif isinstance(stmt, A.ForStmt):
			inner = scope
			for item in stmt.init:
				if isinstance(item, A.LocalVarDecl):
					inner = self._visit_stmt(item, inner, cls, method)
				else:
					self._visit_expr(item, inner, cls, method)  # type: ignore[arg-type]
			if stmt.condition is not None:
				self._visit_expr(stmt.condition, inner, cls, method)
			for update in stmt.update:
				self._visit_expr(update, inner, cls, method)
			self._visit_stmt(stmt.body, inner, cls, method, before_else)
		elif isinstance(stmt, A.ForEachStmt):
			expr(stmt.iterable)
			self._visit_stmt(stmt.body, scope.bind(var_from_param(stmt.var)), cls, method, before_else)
		elif isinstance(stmt, (A.ReturnStmt, A.ThrowStmt)):
			if stmt.value is not None:
				expr(stmt.value)
		elif isinstance(stmt, A.TryStmt):
			inner = scope
			for res in stmt.resources:
				if isinstance(res, A.LocalVarDecl):
					inner = self._visit_stmt(res, inner, cls, method)
				else:
					self._visit_expr(res, inner, cls, method)
			self._visit_block(stmt.body.statements, inner, cls, method)
			for clause in stmt.catches:
				caught = VarInfo(
					name=clause.name,
					type_ref=clause.types[0] if len(clause.types) == 1 else None,
					kind="local",
				)
				self._visit_block(clause.body.statements, scope.bind(caught), cls, method)
			if stmt.finally_block is not None:
				self._visit_block(stmt.finally_block.statements, scope, cls, method)
		elif isinstance(stmt, A.SyncStmt):
			expr(stmt.lock)
			self._visit_block(stmt.body.statements, scope, cls, method)
		elif isinstance(stmt, A.AssertStmt):
			expr(stmt.condition)
			if stmt.message is not None:
				expr(stmt.message)
		elif isinstance(stmt, A.SwitchStmt):
			expr(stmt.selector)
			inner = scope
			for group in stmt.groups:
				for label in group.labels:
					if label is not None:
						self._visit_expr(label, inner, cls, method)
				inner = self._visit_block(group.statements, inner, cls, method)
		elif isinstance(stmt, A.LabeledStmt):
			nested(stmt.body)
		return scope

	# ------------------------------------------------------------ expressions

	def _visit_expr(
		self,
		expr: A.Expr,
		scope: Scope,
		cls: Optional[ClassInfo],
		method: Optional[A.MethodDecl],
		statement: Optional[A.ExprStmt] = None,
		before_else: bool = False,
	) -> None:
		if isinstance(expr, A.MethodCall):
			self._sites.append(
				CallSite(
					call=expr,
					statement=statement if statement is not None and statement.expr is expr else None,
					scope=scope,
					enclosing=cls,
					method=method,
					index=self.index,
					before_else=before_else,
				)
			)
		elif isinstance(expr, A.Lambda):
			inner = scope.bind(*[var_from_param(p) for p in expr.params])
			if isinstance(expr.body, A.Block):
				self._visit_block(expr.body.statements, inner, cls, method)
			else:
				self._visit_expr(expr.body, inner, cls, method)
			return
		elif isinstance(expr, A.NewInstance) and expr.body is not None:
			for arg in expr.args:
				self._visit_expr(arg, scope, cls, method)
			self._visit_anonymous(expr.body, expr.loc, scope, cls, expr.type_ref)
			return
		for child in expr_children(expr):
			self._visit_expr(child, scope, cls, method)


def collect_call_sites(unit: A.CompilationUnit, path: Optional[str] = None, *, skip_annotations: Iterable[str] = ()) -> List[CallSite]:
	return CallSiteWalker(UnitIndex(unit, path), skip_annotations=skip_annotations).walk()


__all__ = ["CallSite", "CallSiteWalker", "collect_call_sites", "expr_children"]
