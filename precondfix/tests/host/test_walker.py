# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from precondfix.host import collect_call_sites
from precondfix.host.scope import Scope, VarInfo
from precondfix.parser import parse_java
from precondfix.test_support import find_site

SOURCE = """
import java.util.List;

class Walk {
	private int field;

	static { boot(); }

	void run(List<String> items, int n) {
		first();
		int early = 1;
		for (int i = 0; i < n; i++) {
			loop(i);
		}
		for (String item : items) {
			each(item);
		}
		try (Reader r = open()) {
			body(r);
		} catch (IllegalStateException | IllegalArgumentException e) {
			handle(e);
		} finally {
			cleanup();
		}
		items.forEach(s -> consume(s));
		switch (n) {
			case 1:
				int inCase = 2;
				one(inCase);
				break;
			default:
				other(inCase);
		}
		int late = 2;
		outer(inner(late));
	}

	enum Mode {
		ON(make()) { void g() { enumBody(); } };
		Mode(Object o) {}
	}

	@javax.annotation.Generated("x")
	class Gen {
		void h() { generated(); }
	}
}
"""


def _sites(skip=()):
	return collect_call_sites(parse_java(SOURCE, "Walk.java"), "Walk.java", skip_annotations=skip)


def test_sites_are_in_source_order():
	names = [s.call.name for s in _sites()]
	assert names == [
		"boot",
		"first",
		"loop",
		"each",
		"open",
		"body",
		"handle",
		"cleanup",
		"forEach",
		"consume",
		"one",
		"other",
		"outer",
		"inner",
		"make",
		"enumBody",
		"generated",
	]


def test_scopes_follow_declarations():
	sites = _sites()
	first = find_site(sites, "first")
	assert first.scope.lookup("items") is not None
	assert first.scope.lookup("field") is not None
	assert first.scope.lookup("early") is None
	assert find_site(sites, "loop").scope.lookup("i").type_ref.name == "int"
	assert find_site(sites, "each").scope.lookup("i") is None
	assert find_site(sites, "each").scope.lookup("item").kind == "param"
	assert find_site(sites, "body").scope.lookup("r").type_ref.name == "Reader"
	assert find_site(sites, "handle").scope.lookup("e").type_ref is None
	assert find_site(sites, "handle").scope.lookup("r") is None
	assert find_site(sites, "consume").scope.lookup("s").type_ref is None
	assert find_site(sites, "other").scope.lookup("inCase") is not None
	assert find_site(sites, "outer").scope.lookup("late").kind == "local"


def test_statement_is_recorded_only_for_the_outermost_call():
	sites = _sites()
	assert find_site(sites, "outer").statement is not None
	assert find_site(sites, "inner").statement is None
	assert find_site(sites, "consume").statement is None
	assert find_site(sites, "open").statement is None


def test_enclosing_class_and_method():
	sites = _sites()
	assert find_site(sites, "first").method.name == "run"
	assert find_site(sites, "boot").method is None
	assert find_site(sites, "enumBody").enclosing.outer.fqn == "Walk.Mode"
	assert find_site(sites, "generated").enclosing.fqn == "Walk.Gen"


def test_annotated_classes_can_be_skipped():
	names = [s.call.name for s in _sites(skip={"Generated"})]
	assert "generated" not in names
	assert "first" in names


def test_scope_is_persistent():
	base = Scope()
	a = base.bind(VarInfo(name="a", type_ref=None, kind="local"))
	b = a.bind(VarInfo(name="a", type_ref=None, kind="param"))
	assert base.lookup("a") is None
	assert a.lookup("a").kind == "local"
	assert b.lookup("a").kind == "param"
	assert base.bind() is base


def test_statements_ending_before_an_else_are_marked():
	source = """
class Branches {
	void f(boolean b, int[] xs) {
		if (b) first(); else second();
		if (b) for (int x : xs) third(); else fourth();
		if (b) { fifth(); } else sixth();
		if (b) seventh();
		if (b) eighth(); else if (b) ninth(); else tenth();
	}
}
"""
	sites = collect_call_sites(parse_java(source), None)
	marked = {s.call.name: s.before_else for s in sites}
	assert marked == {
		"first": True,
		"second": False,
		"third": True,
		"fourth": False,
		"fifth": False,
		"sixth": False,
		"seventh": False,
		"eighth": True,
		"ninth": True,
		"tenth": False,
	}
