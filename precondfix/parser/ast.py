# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Java-subset AST produced by `precondfix.parser`.

Every node carries a `Located` with both line/column and character offsets
so the rule can slice verbatim argument text out of the original source.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class Located:
	line: int
	column: int
	end_line: int
	end_column: int
	start: int
	end: int


@dataclass
class TypeRef:
	name: str
	args: List["TypeRef"] = field(default_factory=list)
	dims: int = 0
	loc: Optional[Located] = None

	@property
	def simple_name(self) -> str:
		return self.name.rsplit(".", 1)[-1]


@dataclass
class Annotation:
	name: str
	args: List["Expr"] = field(default_factory=list)
	loc: Optional[Located] = None

	@property
	def simple_name(self) -> str:
		return self.name.rsplit(".", 1)[-1]


@dataclass
class ImportDecl:
	loc: Located
	name: str
	static: bool = False
	on_demand: bool = False


@dataclass
class VarDeclarator:
	loc: Located
	name: str
	dims: int = 0
	init: Optional["Expr"] = None


@dataclass
class Param:
	loc: Located
	name: str
	type_ref: Optional[TypeRef]
	modifiers: List[str] = field(default_factory=list)
	annotations: List[Annotation] = field(default_factory=list)
	varargs: bool = False


# ---------------------------------------------------------------- declarations


class Member:
	loc: Located


@dataclass
class FieldDecl(Member):
	loc: Located
	type_ref: TypeRef
	declarators: List[VarDeclarator]
	modifiers: List[str] = field(default_factory=list)
	annotations: List[Annotation] = field(default_factory=list)


@dataclass
class MethodDecl(Member):
	loc: Located
	name: str
	return_type: Optional[TypeRef]  # None for constructors; TypeRef("void") for void methods
	params: List[Param]
	body: Optional["Block"]
	modifiers: List[str] = field(default_factory=list)
	annotations: List[Annotation] = field(default_factory=list)
	is_constructor: bool = False


@dataclass
class Initializer(Member):
	loc: Located
	body: "Block"
	static: bool = False


@dataclass
class EnumConstant:
	loc: Located
	name: str
	args: List["Expr"] = field(default_factory=list)
	body: Optional[List[Member]] = None


@dataclass
class TypeDecl(Member):
	loc: Located
	kind: str  # "class" | "interface" | "enum"
	name: str
	members: List[Member]
	modifiers: List[str] = field(default_factory=list)
	annotations: List[Annotation] = field(default_factory=list)
	constants: List[EnumConstant] = field(default_factory=list)
	# `extends` and `implements` clauses, as written.
	supertypes: List[TypeRef] = field(default_factory=list)


@dataclass
class CompilationUnit:
	loc: Located
	package: Optional[str]
	imports: List[ImportDecl]
	types: List[TypeDecl]


# ---------------------------------------------------------------- statements


class Stmt:
	loc: Located


@dataclass
class Block(Stmt):
	loc: Located
	statements: List[Stmt]


@dataclass
class LocalVarDecl(Stmt):
	loc: Located
	type_ref: TypeRef
	declarators: List[VarDeclarator]
	modifiers: List[str] = field(default_factory=list)
	annotations: List[Annotation] = field(default_factory=list)


@dataclass
class ExprStmt(Stmt):
	loc: Located
	expr: "Expr"


@dataclass
class IfStmt(Stmt):
	loc: Located
	condition: "Expr"
	then_stmt: Stmt
	else_stmt: Optional[Stmt] = None


@dataclass
class WhileStmt(Stmt):
	loc: Located
	condition: "Expr"
	body: Stmt


@dataclass
class DoStmt(Stmt):
	loc: Located
	body: Stmt
	condition: "Expr"


@dataclass
class ForStmt(Stmt):
	loc: Located
	init: List[Union[Stmt, "Expr"]]
	condition: Optional["Expr"]
	update: List["Expr"]
	body: Stmt


@dataclass
class ForEachStmt(Stmt):
	loc: Located
	var: Param
	iterable: "Expr"
	body: Stmt


@dataclass
class ReturnStmt(Stmt):
	loc: Located
	value: Optional["Expr"]


@dataclass
class ThrowStmt(Stmt):
	loc: Located
	value: "Expr"


@dataclass
class BreakStmt(Stmt):
	loc: Located
	label: Optional[str] = None


@dataclass
class ContinueStmt(Stmt):
	loc: Located
	label: Optional[str] = None


@dataclass
class CatchClause:
	loc: Located
	types: List[TypeRef]
	name: str
	body: Block


@dataclass
class TryStmt(Stmt):
	loc: Located
	resources: List[Union[LocalVarDecl, "Expr"]]
	body: Block
	catches: List[CatchClause]
	finally_block: Optional[Block] = None


@dataclass
class SyncStmt(Stmt):
	loc: Located
	lock: "Expr"
	body: Block


@dataclass
class AssertStmt(Stmt):
	loc: Located
	condition: "Expr"
	message: Optional["Expr"] = None


@dataclass
class SwitchGroup:
	loc: Located
	labels: List[Optional["Expr"]]  # None marks `default:`
	statements: List[Stmt]


@dataclass
class SwitchStmt(Stmt):
	loc: Located
	selector: "Expr"
	groups: List[SwitchGroup]


@dataclass
class LabeledStmt(Stmt):
	loc: Located
	label: str
	body: Stmt


@dataclass
class EmptyStmt(Stmt):
	loc: Located


# ---------------------------------------------------------------- expressions


class Expr:
	loc: Located


@dataclass
class Literal(Expr):
	loc: Located
	kind: str  # "string" | "char" | "int" | "long" | "float" | "double" | "boolean" | "null"
	text: str


@dataclass
class Name(Expr):
	loc: Located
	ident: str


@dataclass
class This(Expr):
	loc: Located


@dataclass
class Super(Expr):
	loc: Located


@dataclass
class Paren(Expr):
	loc: Located
	expr: Expr


@dataclass
class FieldAccess(Expr):
	loc: Located
	target: Expr
	name: str


@dataclass
class MethodCall(Expr):
	loc: Located
	target: Optional[Expr]  # None for unqualified calls
	name: str
	args: List[Expr]


@dataclass
class ArrayAccess(Expr):
	loc: Located
	array: Expr
	index: Expr


@dataclass
class NewInstance(Expr):
	loc: Located
	type_ref: TypeRef
	args: List[Expr]
	body: Optional[List[Member]] = None


@dataclass
class NewArray(Expr):
	loc: Located
	type_ref: TypeRef
	dims: List[Expr]
	init: Optional["ArrayInit"] = None


@dataclass
class ArrayInit(Expr):
	loc: Located
	elements: List[Expr]


@dataclass
class ClassLiteral(Expr):
	loc: Located
	type_ref: TypeRef


@dataclass
class MethodRef(Expr):
	loc: Located
	target: Union[Expr, TypeRef]
	name: str


@dataclass
class Binary(Expr):
	loc: Located
	op: str
	left: Expr
	right: Expr


@dataclass
class InstanceOf(Expr):
	loc: Located
	expr: Expr
	type_ref: TypeRef


@dataclass
class Unary(Expr):
	"""Prefix operator (`+ - ! ~ ++ --`)."""

	loc: Located
	op: str
	operand: Expr


@dataclass
class Postfix(Expr):
	loc: Located
	op: str
	operand: Expr


@dataclass
class Assign(Expr):
	loc: Located
	op: str  # "=" or a compound operator such as "+="
	target: Expr
	value: Expr


@dataclass
class Conditional(Expr):
	loc: Located
	condition: Expr
	then_value: Expr
	else_value: Expr


@dataclass
class Cast(Expr):
	loc: Located
	type_ref: TypeRef
	expr: Expr


@dataclass
class Lambda(Expr):
	loc: Located
	params: List[Param]
	body: Union[Expr, Block]
