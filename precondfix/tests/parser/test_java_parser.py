# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from precondfix.parser import JavaSyntaxError, ast as A, parse_java

SOURCE = """package com.example.app;

import java.util.List;
import java.util.*;
import static com.google.common.base.Preconditions.checkArgument;
import static java.util.Objects.*;

public final class Sample<T extends Comparable<T>> {
	private static final String PREFIX = "p: ";
	int[] counts, more = {1, 2};

	public Sample(List<T> items) {
		checkArgument(items != null, PREFIX + items);
	}

	<R> R map(java.util.function.Function<T, R> fn, String... rest) {
		var total = 0L;
		return fn.apply(null);
	}
}
"""


@pytest.fixture(scope="module")
def unit() -> A.CompilationUnit:
	return parse_java(SOURCE, "Sample.java")


def test_package_and_imports(unit):
	assert unit.package == "com.example.app"
	assert [(i.name, i.static, i.on_demand) for i in unit.imports] == [
		("java.util.List", False, False),
		("java.util", False, True),
		("com.google.common.base.Preconditions.checkArgument", True, False),
		("java.util.Objects", True, True),
	]


def test_type_declaration_members(unit):
	(decl,) = unit.types
	assert decl.kind == "class"
	assert decl.name == "Sample"
	fields = [m for m in decl.members if isinstance(m, A.FieldDecl)]
	assert [d.name for f in fields for d in f.declarators] == ["PREFIX", "counts", "more"]
	assert "static" in fields[0].modifiers and "final" in fields[0].modifiers
	assert fields[1].type_ref.dims == 1

	ctor, method = [m for m in decl.members if isinstance(m, A.MethodDecl)]
	assert ctor.is_constructor and ctor.return_type is None
	assert ctor.params[0].type_ref.name == "List"
	assert ctor.params[0].type_ref.args[0].name == "T"
	assert method.name == "map"
	assert method.params[1].varargs


def test_expression_statement_wraps_call(unit):
	ctor = next(m for m in unit.types[0].members if isinstance(m, A.MethodDecl) and m.is_constructor)
	(stmt,) = ctor.body.statements
	assert isinstance(stmt, A.ExprStmt)
	call = stmt.expr
	assert isinstance(call, A.MethodCall)
	assert call.target is None
	assert call.name == "checkArgument"
	condition, message = call.args
	assert isinstance(condition, A.Binary) and condition.op == "!="
	assert isinstance(message, A.Binary) and message.op == "+"


def test_locations_recover_verbatim_text(unit):
	ctor = next(m for m in unit.types[0].members if isinstance(m, A.MethodDecl) and m.is_constructor)
	(stmt,) = ctor.body.statements
	call = stmt.expr
	assert SOURCE[call.loc.start:call.loc.end] == "checkArgument(items != null, PREFIX + items)"
	assert SOURCE[stmt.loc.start:stmt.loc.end] == "checkArgument(items != null, PREFIX + items);"
	assert SOURCE[call.args[1].loc.start:call.args[1].loc.end] == "PREFIX + items"
	assert call.loc.line == 13
	assert call.loc.column == 3


def test_local_var_and_null_literal(unit):
	method = next(m for m in unit.types[0].members if isinstance(m, A.MethodDecl) and m.name == "map")
	local, ret = method.body.statements
	assert isinstance(local, A.LocalVarDecl)
	assert local.type_ref.name == "var"
	assert isinstance(local.declarators[0].init, A.Literal)
	assert local.declarators[0].init.kind == "long"
	assert isinstance(ret, A.ReturnStmt)
	assert isinstance(ret.value, A.MethodCall)
	assert ret.value.args[0].kind == "null"


@pytest.mark.parametrize(
	"text, kind",
	[
		('"s"', "string"),
		("'c'", "char"),
		("42", "int"),
		("42L", "long"),
		("1.5f", "float"),
		("1.5", "double"),
		("true", "boolean"),
		("null", "null"),
	],
)
def test_literal_kinds(text, kind):
	unit = parse_java(f"class L {{ Object x = {text}; }}")
	(field,) = unit.types[0].members
	literal = field.declarators[0].init
	assert isinstance(literal, A.Literal)
	assert literal.kind == kind
	assert literal.text == text


def test_lambda_and_method_reference():
	unit = parse_java("class L { void f() { run(x -> x + 1, String::valueOf, (int a, int b) -> { g(); }); } }")
	(method,) = unit.types[0].members
	call = method.body.statements[0].expr
	implicit, ref, explicit = call.args
	assert isinstance(implicit, A.Lambda)
	assert [p.name for p in implicit.params] == ["x"]
	assert implicit.params[0].type_ref is None
	assert isinstance(ref, A.MethodRef)
	assert isinstance(explicit, A.Lambda)
	assert [p.type_ref.name for p in explicit.params] == ["int", "int"]
	assert isinstance(explicit.body, A.Block)


def test_comments_are_ignored():
	unit = parse_java("// leading\nclass C { /* inline */ void f() { g(/* arg */ 1); } }\n")
	(method,) = unit.types[0].members
	assert method.body.statements[0].expr.name == "g"


def test_syntax_error_carries_position():
	with pytest.raises(JavaSyntaxError) as info:
		parse_java("class Broken {\n  void f( {\n}\n", "Broken.java")
	err = info.value
	assert err.path == "Broken.java"
	assert err.line == 2
	assert err.message.startswith("syntax error")
	assert isinstance(err, ValueError)


def test_supertypes_are_recorded():
	unit = parse_java(
		"class A extends Base<String> implements Runnable, java.io.Closeable {}\n"
		"interface I extends J, K {}\n"
		"enum E implements I { X }\n"
	)
	a, i, e = unit.types
	assert [t.name for t in a.supertypes] == ["Base", "Runnable", "java.io.Closeable"]
	assert a.supertypes[0].args[0].name == "String"
	assert [t.name for t in i.supertypes] == ["J", "K"]
	assert [t.name for t in e.supertypes] == ["I"]
