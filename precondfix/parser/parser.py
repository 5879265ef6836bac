from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from .ast import (
	Annotation,
	ArrayAccess,
	ArrayInit,
	Assign,
	AssertStmt,
	Binary,
	Block,
	BreakStmt,
	Cast,
	CatchClause,
	ClassLiteral,
	CompilationUnit,
	Conditional,
	ContinueStmt,
	DoStmt,
	EmptyStmt,
	EnumConstant,
	Expr,
	ExprStmt,
	FieldAccess,
	FieldDecl,
	ForEachStmt,
	ForStmt,
	IfStmt,
	ImportDecl,
	Initializer,
	InstanceOf,
	LabeledStmt,
	Lambda,
	Literal,
	LocalVarDecl,
	Located,
	Member,
	MethodCall,
	MethodDecl,
	MethodRef,
	Name,
	NewArray,
	NewInstance,
	Param,
	Paren,
	Postfix,
	ReturnStmt,
	Stmt,
	Super,
	SwitchGroup,
	SwitchStmt,
	SyncStmt,
	This,
	ThrowStmt,
	TryStmt,
	TypeDecl,
	TypeRef,
	Unary,
	VarDeclarator,
	WhileStmt,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="earley",
	lexer="basic",
	start="compilation_unit",
	propagate_positions=True,
	maybe_placeholders=False,
)


class JavaSyntaxError(ValueError):
	"""Raised when the source is outside the supported Java subset."""

	def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None, path: Optional[str] = None) -> None:
		super().__init__(message)
		self.message = message
		self.line = line
		self.column = column
		self.path = path


def parse_java(source: str, path: Optional[str] = None) -> CompilationUnit:
	try:
		tree = _PARSER.parse(source)
	except UnexpectedInput as exc:
		line = getattr(exc, "line", None)
		column = getattr(exc, "column", None)
		if line is not None and line < 0:
			line, column = None, None
		detail = str(exc).strip().splitlines()[0] if str(exc).strip() else type(exc).__name__
		raise JavaSyntaxError(f"syntax error: {detail}", line=line, column=column, path=path) from exc
	return _build_unit(tree)


# ---------------------------------------------------------------- helpers


def _name(tree: Tree) -> str:
	return str(tree.data)


def _loc(node: Tree | Token) -> Located:
	if isinstance(node, Token):
		return Located(
			line=node.line or 1,
			column=node.column or 1,
			end_line=node.end_line or node.line or 1,
			end_column=node.end_column or node.column or 1,
			start=node.start_pos or 0,
			end=node.end_pos or 0,
		)
	meta = node.meta
	if getattr(meta, "empty", True):
		return Located(line=1, column=1, end_line=1, end_column=1, start=0, end=0)
	return Located(
		line=meta.line,
		column=meta.column,
		end_line=meta.end_line,
		end_column=meta.end_column,
		start=meta.start_pos,
		end=meta.end_pos,
	)


def _trees(tree: Tree) -> List[Tree]:
	return [child for child in tree.children if isinstance(child, Tree)]


def _tokens(tree: Tree, ttype: Optional[str] = None) -> List[Token]:
	return [
		child
		for child in tree.children
		if isinstance(child, Token) and (ttype is None or child.type == ttype)
	]


def _child(tree: Tree, name: str) -> Optional[Tree]:
	return next((child for child in _trees(tree) if _name(child) == name), None)


def _ident(tree: Tree) -> str:
	tok = next((t for t in _tokens(tree, "NAME")), None)
	if tok is None:
		raise TypeError(f"{_name(tree)} node missing NAME token")
	return tok.value


def _qualified(tree: Tree) -> str:
	return ".".join(tok.value for tok in _tokens(tree, "NAME"))


def _op_text(node: Tree | Token) -> str:
	if isinstance(node, Token):
		return node.value
	return "".join(tok.value for tok in node.scan_values(lambda v: isinstance(v, Token)))


# ---------------------------------------------------------------- declarations


def _build_unit(tree: Tree) -> CompilationUnit:
	package: Optional[str] = None
	imports: List[ImportDecl] = []
	types: List[TypeDecl] = []
	for child in _trees(tree):
		kind = _name(child)
		if kind == "package_decl":
			qn = _child(child, "qualified_name")
			package = _qualified(qn) if qn is not None else None
		elif kind == "import_decl":
			imports.append(_build_import(child))
		elif kind in _TYPE_DECL_BUILDERS:
			types.append(_TYPE_DECL_BUILDERS[kind](child))
	return CompilationUnit(loc=_loc(tree), package=package, imports=imports, types=types)


def _build_import(tree: Tree) -> ImportDecl:
	qn = _child(tree, "qualified_name")
	return ImportDecl(
		loc=_loc(tree),
		name=_qualified(qn) if qn is not None else "",
		static=bool(_tokens(tree, "STATIC")),
		on_demand=_child(tree, "import_all") is not None,
	)


def _build_modifiers(tree: Optional[Tree]) -> Tuple[List[str], List[Annotation]]:
	mods: List[str] = []
	annotations: List[Annotation] = []
	if tree is None:
		return mods, annotations
	for child in _trees(tree):
		kind = _name(child)
		if kind == "modifier":
			mods.extend(tok.value for tok in _tokens(child))
		elif kind == "annotation":
			annotations.append(_build_annotation(child))
	return mods, annotations


def _build_annotation(tree: Tree) -> Annotation:
	qn = _child(tree, "qualified_name")
	args: List[Expr] = []
	args_node = _child(tree, "annotation_args")
	if args_node is not None:
		for child in _trees(args_node):
			value = child
			if _name(child) == "element_pair":
				value = _trees(child)[0]
			built = _build_element_value(value)
			if built is not None:
				args.append(built)
	return Annotation(name=_qualified(qn) if qn is not None else "", args=args, loc=_loc(tree))


def _build_element_value(tree: Tree) -> Optional[Expr]:
	kind = _name(tree)
	if kind == "annotation":
		# Nested annotations are not expressions; the rule never inspects them.
		return None
	if kind == "element_array":
		elements = [e for e in (_build_element_value(c) for c in _trees(tree)) if e is not None]
		return ArrayInit(loc=_loc(tree), elements=elements)
	return _build_expr(tree)


def _build_class_like(tree: Tree, kind: str) -> TypeDecl:
	mods, annotations = _build_modifiers(_child(tree, "modifiers"))
	body = _child(tree, "enum_body") if kind == "enum" else _child(tree, "class_body")
	members: List[Member] = []
	constants: List[EnumConstant] = []
	if body is not None:
		for child in _trees(body):
			if _name(child) == "enum_constant":
				constants.append(_build_enum_constant(child))
				continue
			member = _build_member(child)
			if member is not None:
				members.append(member)
	return TypeDecl(
		loc=_loc(tree),
		kind=kind,
		name=_ident(tree),
		members=members,
		modifiers=mods,
		annotations=annotations,
		constants=constants,
		supertypes=_build_supertypes(tree),
	)


def _build_supertypes(tree: Tree) -> List[TypeRef]:
	supertypes: List[TypeRef] = []
	for child in _trees(tree):
		kind = _name(child)
		if kind == "superclass":
			supertypes.append(_build_type(_trees(child)[0]))
		elif kind in ("interfaces", "interface_extends"):
			supertypes.extend(_build_type(t) for t in _trees(_trees(child)[0]))
	return supertypes


def _build_enum_constant(tree: Tree) -> EnumConstant:
	args_node = _child(tree, "arguments")
	body_node = _child(tree, "class_body")
	return EnumConstant(
		loc=_loc(tree),
		name=_ident(tree),
		args=_build_arguments(args_node) if args_node is not None else [],
		body=_build_class_body(body_node) if body_node is not None else None,
	)


def _build_class_body(tree: Tree) -> List[Member]:
	members: List[Member] = []
	for child in _trees(tree):
		member = _build_member(child)
		if member is not None:
			members.append(member)
	return members


def _build_member(tree: Tree) -> Optional[Member]:
	kind = _name(tree)
	if kind in _TYPE_DECL_BUILDERS:
		return _TYPE_DECL_BUILDERS[kind](tree)
	if kind == "field_decl":
		mods, annotations = _build_modifiers(_child(tree, "modifiers"))
		return FieldDecl(
			loc=_loc(tree),
			type_ref=_build_type(_child(tree, "type")),  # type: ignore[arg-type]
			declarators=_build_declarators(_child(tree, "var_declarators")),
			modifiers=mods,
			annotations=annotations,
		)
	if kind in ("method_decl", "constructor_decl"):
		return _build_method(tree, is_constructor=(kind == "constructor_decl"))
	if kind == "initializer":
		return Initializer(
			loc=_loc(tree),
			body=_build_block(_child(tree, "block")),  # type: ignore[arg-type]
			static=bool(_tokens(tree, "STATIC")),
		)
	# empty_member
	return None


def _build_method(tree: Tree, *, is_constructor: bool) -> MethodDecl:
	mods, annotations = _build_modifiers(_child(tree, "modifiers"))
	return_type: Optional[TypeRef] = None
	result = _child(tree, "result_type")
	if result is not None:
		type_node = _child(result, "type")
		return_type = _build_type(type_node) if type_node is not None else TypeRef(name="void", loc=_loc(result))
	params_node = _child(tree, "formal_params")
	params = [_build_formal_param(p) for p in _trees(params_node)] if params_node is not None else []
	body_node = _child(tree, "block")
	return MethodDecl(
		loc=_loc(tree),
		name=_ident(tree),
		return_type=return_type,
		params=params,
		body=_build_block(body_node) if body_node is not None else None,
		modifiers=mods,
		annotations=annotations,
		is_constructor=is_constructor,
	)


def _build_formal_param(tree: Tree) -> Param:
	mods, annotations = _build_modifiers(_child(tree, "modifiers"))
	type_ref = _build_type(_child(tree, "type"))  # type: ignore[arg-type]
	extra_dims = _child(tree, "dims")
	if extra_dims is not None:
		type_ref.dims += _dim_count(extra_dims)
	varargs = bool(_tokens(tree, "ELLIPSIS"))
	if varargs:
		type_ref.dims += 1
	return Param(
		loc=_loc(tree),
		name=_ident(tree),
		type_ref=type_ref,
		modifiers=mods,
		annotations=annotations,
		varargs=varargs,
	)


def _build_declarators(tree: Optional[Tree]) -> List[VarDeclarator]:
	if tree is None:
		return []
	out: List[VarDeclarator] = []
	for decl in _trees(tree):
		dims_node = _child(decl, "dims")
		init_nodes = [c for c in _trees(decl) if _name(c) != "dims"]
		out.append(
			VarDeclarator(
				loc=_loc(decl),
				name=_ident(decl),
				dims=_dim_count(dims_node) if dims_node is not None else 0,
				init=_build_expr(init_nodes[0]) if init_nodes else None,
			)
		)
	return out


# ---------------------------------------------------------------- types


def _dim_count(tree: Tree) -> int:
	return len(_tokens(tree)) // 2


def _build_type(tree: Tree) -> TypeRef:
	"""Build a TypeRef from a `type`, `class_type` or `primitive_type` node."""
	kind = _name(tree)
	if kind == "primitive_type":
		return TypeRef(name=_tokens(tree)[0].value, loc=_loc(tree))
	if kind == "class_type":
		parts = _trees(tree)
		name = ".".join(_ident(part) for part in parts)
		args: List[TypeRef] = []
		for part in parts:
			type_args = _child(part, "type_args")
			if type_args is not None:
				args = [_build_type_arg(a) for a in _trees(type_args)]
		return TypeRef(name=name, args=args, loc=_loc(tree))
	if kind == "wildcard":
		return _build_type_arg(tree)
	base = _build_type(_trees(tree)[0])
	dims_node = _child(tree, "dims")
	if dims_node is not None:
		base.dims += _dim_count(dims_node)
	base.loc = _loc(tree)
	return base


def _build_type_arg(tree: Tree) -> TypeRef:
	if _name(tree) == "wildcard":
		bound = _child(tree, "type")
		return TypeRef(name="?", args=[_build_type(bound)] if bound is not None else [], loc=_loc(tree))
	return _build_type(tree)


# ---------------------------------------------------------------- statements


def _build_block(tree: Tree) -> Block:
	return Block(loc=_loc(tree), statements=[_build_stmt(c) for c in _trees(tree)])


def _build_local_var_decl(tree: Tree) -> LocalVarDecl:
	mods, annotations = _build_modifiers(_child(tree, "modifiers"))
	return LocalVarDecl(
		loc=_loc(tree),
		type_ref=_build_type(_child(tree, "type")),  # type: ignore[arg-type]
		declarators=_build_declarators(_child(tree, "var_declarators")),
		modifiers=mods,
		annotations=annotations,
	)


def _build_if(tree: Tree) -> Stmt:
	parts = _trees(tree)
	return IfStmt(
		loc=_loc(tree),
		condition=_build_expr(parts[0]),
		then_stmt=_build_stmt(parts[1]),
		else_stmt=_build_stmt(parts[2]) if len(parts) > 2 else None,
	)


def _build_for(tree: Tree) -> Stmt:
	init: List[Stmt | Expr] = []
	condition: Optional[Expr] = None
	update: List[Expr] = []
	parts = _trees(tree)
	for part in parts[:-1]:
		kind = _name(part)
		if kind == "for_init":
			for item in _trees(part):
				if _name(item) == "local_var_decl":
					init.append(_build_local_var_decl(item))
				else:
					init.append(_build_expr(item))
		elif kind == "for_cond":
			condition = _build_expr(_trees(part)[0])
		elif kind == "for_update":
			update = [_build_expr(item) for item in _trees(part)]
	return ForStmt(loc=_loc(tree), init=init, condition=condition, update=update, body=_build_stmt(parts[-1]))


def _build_foreach(tree: Tree) -> Stmt:
	mods, annotations = _build_modifiers(_child(tree, "modifiers"))
	var = Param(
		loc=_loc(tree),
		name=_ident(tree),
		type_ref=_build_type(_child(tree, "type")),  # type: ignore[arg-type]
		modifiers=mods,
		annotations=annotations,
	)
	parts = [c for c in _trees(tree) if _name(c) not in ("modifiers", "type")]
	return ForEachStmt(loc=_loc(tree), var=var, iterable=_build_expr(parts[0]), body=_build_stmt(parts[1]))


def _build_try(tree: Tree) -> Stmt:
	resources: List[LocalVarDecl | Expr] = []
	res_node = _child(tree, "resources")
	if res_node is not None:
		for res in _trees(res_node):
			if _child(res, "modifiers") is not None:
				mods, annotations = _build_modifiers(_child(res, "modifiers"))
				init = [c for c in _trees(res) if _name(c) not in ("modifiers", "type")]
				resources.append(
					LocalVarDecl(
						loc=_loc(res),
						type_ref=_build_type(_child(res, "type")),  # type: ignore[arg-type]
						declarators=[VarDeclarator(loc=_loc(res), name=_ident(res), init=_build_expr(init[0]))],
						modifiers=mods,
						annotations=annotations,
					)
				)
			else:
				resources.append(_build_expr(_trees(res)[0]))
	catches: List[CatchClause] = []
	for clause in _trees(tree):
		if _name(clause) != "catch_clause":
			continue
		catch_type = _child(clause, "catch_type")
		catches.append(
			CatchClause(
				loc=_loc(clause),
				types=[_build_type(t) for t in _trees(catch_type)] if catch_type is not None else [],
				name=_ident(clause),
				body=_build_block(_child(clause, "block")),  # type: ignore[arg-type]
			)
		)
	finally_node = _child(tree, "finally_clause")
	return TryStmt(
		loc=_loc(tree),
		resources=resources,
		body=_build_block(_child(tree, "block")),  # type: ignore[arg-type]
		catches=catches,
		finally_block=_build_block(_trees(finally_node)[0]) if finally_node is not None else None,
	)


def _build_switch(tree: Tree) -> Stmt:
	parts = _trees(tree)
	groups: List[SwitchGroup] = []
	for group in parts[1:]:
		labels: List[Optional[Expr]] = []
		statements: List[Stmt] = []
		for child in _trees(group):
			if _name(child) == "switch_label":
				label_parts = _trees(child)
				labels.append(_build_expr(label_parts[0]) if label_parts else None)
			else:
				statements.append(_build_stmt(child))
		groups.append(SwitchGroup(loc=_loc(group), labels=labels, statements=statements))
	return SwitchStmt(loc=_loc(tree), selector=_build_expr(parts[0]), groups=groups)


def _optional_expr(tree: Tree) -> Optional[Expr]:
	parts = _trees(tree)
	return _build_expr(parts[0]) if parts else None


def _optional_label(tree: Tree) -> Optional[str]:
	toks = _tokens(tree, "NAME")
	return toks[0].value if toks else None


_STMT_DISPATCH: Dict[str, Callable[[Tree], Stmt]] = {
	"block": _build_block,
	"local_var_decl": _build_local_var_decl,
	"empty_stmt": lambda t: EmptyStmt(loc=_loc(t)),
	"expr_stmt": lambda t: ExprStmt(loc=_loc(t), expr=_build_expr(_trees(t)[0])),
	"if_stmt": _build_if,
	"while_stmt": lambda t: WhileStmt(loc=_loc(t), condition=_build_expr(_trees(t)[0]), body=_build_stmt(_trees(t)[1])),
	"do_stmt": lambda t: DoStmt(loc=_loc(t), body=_build_stmt(_trees(t)[0]), condition=_build_expr(_trees(t)[1])),
	"for_stmt": _build_for,
	"foreach_stmt": _build_foreach,
	"return_stmt": lambda t: ReturnStmt(loc=_loc(t), value=_optional_expr(t)),
	"throw_stmt": lambda t: ThrowStmt(loc=_loc(t), value=_build_expr(_trees(t)[0])),
	"break_stmt": lambda t: BreakStmt(loc=_loc(t), label=_optional_label(t)),
	"continue_stmt": lambda t: ContinueStmt(loc=_loc(t), label=_optional_label(t)),
	"try_stmt": _build_try,
	"sync_stmt": lambda t: SyncStmt(loc=_loc(t), lock=_build_expr(_trees(t)[0]), body=_build_block(_trees(t)[1])),
	"assert_stmt": lambda t: AssertStmt(
		loc=_loc(t),
		condition=_build_expr(_trees(t)[0]),
		message=_build_expr(_trees(t)[1]) if len(_trees(t)) > 1 else None,
	),
	"switch_stmt": _build_switch,
	"labeled_stmt": lambda t: LabeledStmt(loc=_loc(t), label=_ident(t), body=_build_stmt(_trees(t)[0])),
}


def _build_stmt(tree: Tree) -> Stmt:
	fn = _STMT_DISPATCH.get(_name(tree))
	if fn is None:
		raise NotImplementedError(f"Unsupported statement node: {_name(tree)}")
	return fn(tree)


# ---------------------------------------------------------------- expressions


def _literal_kind(tok: Token) -> str:
	if tok.type == "STRING":
		return "string"
	if tok.type == "CHAR":
		return "char"
	if tok.type in ("TRUE", "FALSE"):
		return "boolean"
	if tok.type == "NULL":
		return "null"
	text = tok.value.lower()
	if text.startswith(("0x", "0b")):
		return "long" if text.endswith("l") else "int"
	if text.endswith("l"):
		return "long"
	if text.endswith("f"):
		return "float"
	if text.endswith("d") or "." in text or "e" in text:
		return "double"
	return "int"


def _build_literal(tree: Tree) -> Expr:
	tok = _tokens(tree)[0]
	return Literal(loc=_loc(tree), kind=_literal_kind(tok), text=tok.value)


def _build_arguments(tree: Tree) -> List[Expr]:
	return [_build_expr(c) for c in _trees(tree)]


def _build_method_call(tree: Tree) -> Expr:
	target: Optional[Expr] = None
	args: List[Expr] = []
	for child in _trees(tree):
		kind = _name(child)
		if kind == "arguments":
			args = _build_arguments(child)
		elif kind != "type_args":
			target = _build_expr(child)
	return MethodCall(loc=_loc(tree), target=target, name=_ident(tree), args=args)


def _build_new_instance(tree: Tree) -> Expr:
	body = _child(tree, "class_body")
	return NewInstance(
		loc=_loc(tree),
		type_ref=_build_type(_child(tree, "class_type")),  # type: ignore[arg-type]
		args=_build_arguments(_child(tree, "arguments")),  # type: ignore[arg-type]
		body=_build_class_body(body) if body is not None else None,
	)


def _build_new_array(tree: Tree) -> Expr:
	parts = _trees(tree)
	type_ref = _build_type(parts[0])
	dims: List[Expr] = []
	init: Optional[ArrayInit] = None
	for part in parts[1:]:
		kind = _name(part)
		if kind == "dim_expr":
			dims.append(_build_expr(_trees(part)[0]))
			type_ref.dims += 1
		elif kind == "dims":
			type_ref.dims += _dim_count(part)
		elif kind == "array_init":
			init = _build_array_init(part)  # type: ignore[assignment]
	return NewArray(loc=_loc(tree), type_ref=type_ref, dims=dims, init=init)


def _build_array_init(tree: Tree) -> Expr:
	return ArrayInit(loc=_loc(tree), elements=[_build_expr(c) for c in _trees(tree)])


def _build_class_literal(tree: Tree) -> Expr:
	parts = _trees(tree)
	if parts and _name(parts[0]) in ("primitive_type", "class_type"):
		type_ref = _build_type(parts[0])
	else:
		type_ref = TypeRef(name="void")
	dims_node = _child(tree, "dims")
	if dims_node is not None:
		type_ref.dims += _dim_count(dims_node)
	return ClassLiteral(loc=_loc(tree), type_ref=type_ref)


def _build_method_ref(tree: Tree) -> Expr:
	head = _trees(tree)[0]
	target: Expr | TypeRef = _build_type(head) if _name(head) == "class_type" else _build_expr(head)
	tok = [t for t in _tokens(tree) if t.type in ("NAME", "NEW")][-1]
	return MethodRef(loc=_loc(tree), target=target, name=tok.value)


def _build_binary(tree: Tree) -> Expr:
	left, op, right = tree.children
	return Binary(loc=_loc(tree), op=_op_text(op), left=_build_expr(left), right=_build_expr(right))


def _build_prefix(tree: Tree) -> Expr:
	op, operand = tree.children
	return Unary(loc=_loc(tree), op=_op_text(op), operand=_build_expr(operand))


def _build_postfix(tree: Tree) -> Expr:
	operand, op = tree.children
	return Postfix(loc=_loc(tree), op=_op_text(op), operand=_build_expr(operand))


def _build_assign(tree: Tree) -> Expr:
	target, op, value = _trees(tree)
	return Assign(loc=_loc(tree), op=_op_text(op), target=_build_expr(target), value=_build_expr(value))


def _build_cast(tree: Tree) -> Expr:
	parts = _trees(tree)
	type_ref = _build_type(parts[0])
	for part in parts[1:-1]:
		if _name(part) == "dims":
			type_ref.dims += _dim_count(part)
	return Cast(loc=_loc(tree), type_ref=type_ref, expr=_build_expr(parts[-1]))


def _build_lambda(tree: Tree) -> Expr:
	params_node, body_node = _trees(tree)
	params: List[Param] = []
	single = _tokens(params_node, "NAME")
	if single:
		params.append(Param(loc=_loc(single[0]), name=single[0].value, type_ref=None))
	for p in _trees(params_node):
		type_node = _child(p, "type")
		mods, annotations = _build_modifiers(_child(p, "modifiers"))
		params.append(
			Param(
				loc=_loc(p),
				name=_ident(p),
				type_ref=_build_type(type_node) if type_node is not None else None,
				modifiers=mods,
				annotations=annotations,
			)
		)
	body: Expr | Block = _build_block(body_node) if _name(body_node) == "block" else _build_expr(body_node)
	return Lambda(loc=_loc(tree), params=params, body=body)


_EXPR_DISPATCH: Dict[str, Callable[[Tree], Expr]] = {
	"literal": _build_literal,
	"paren": lambda t: Paren(loc=_loc(t), expr=_build_expr(_trees(t)[0])),
	"this_ref": lambda t: This(loc=_loc(t)),
	"super_ref": lambda t: Super(loc=_loc(t)),
	"name": lambda t: Name(loc=_loc(t), ident=_ident(t)),
	"field_access": lambda t: FieldAccess(loc=_loc(t), target=_build_expr(_trees(t)[0]), name=_ident(t)),
	"method_call": _build_method_call,
	"array_access": lambda t: ArrayAccess(loc=_loc(t), array=_build_expr(_trees(t)[0]), index=_build_expr(_trees(t)[1])),
	"new_instance": _build_new_instance,
	"new_array": _build_new_array,
	"array_init": _build_array_init,
	"class_literal": _build_class_literal,
	"method_ref": _build_method_ref,
	"binary": _build_binary,
	"instanceof": lambda t: InstanceOf(loc=_loc(t), expr=_build_expr(_trees(t)[0]), type_ref=_build_type(_trees(t)[1])),
	"prefix": _build_prefix,
	"pre_incdec": _build_prefix,
	"post_incdec": _build_postfix,
	"assign": _build_assign,
	"ternary": lambda t: Conditional(
		loc=_loc(t),
		condition=_build_expr(_trees(t)[0]),
		then_value=_build_expr(_trees(t)[1]),
		else_value=_build_expr(_trees(t)[2]),
	),
	"cast": _build_cast,
	"lambda_expr": _build_lambda,
}


def _build_expr(tree: Tree) -> Expr:
	fn = _EXPR_DISPATCH.get(_name(tree))
	if fn is None:
		raise NotImplementedError(f"Unsupported expression node: {_name(tree)}")
	return fn(tree)


_TYPE_DECL_BUILDERS: Dict[str, Callable[[Tree], TypeDecl]] = {
	"class_decl": lambda t: _build_class_like(t, "class"),
	"interface_decl": lambda t: _build_class_like(t, "interface"),
	"enum_decl": lambda t: _build_class_like(t, "enum"),
}
