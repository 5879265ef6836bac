# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from precondfix.core.errors import ResolutionError
from precondfix.test_support import find_site, host_and_sites

SOURCE = """
package com.example;

import com.google.common.base.Preconditions;
import java.util.Objects;
import static org.apache.commons.lang3.Validate.notNull;

class Sample {
	private static final int LIMIT = 10;
	private String name;

	String label(int n) { return "n" + n; }

	void run(String param, int count, long big, char c, String[] parts, Integer boxed) {
		var inferred = param + count;
		Preconditions.checkArgument(count > 0, "a" + param);
		Objects.requireNonNull(param, "b" + count);
		notNull(param, param + c);
		Objects.requireNonNull(param, count + big);
		Objects.requireNonNull(param, parts[0]);
		Objects.requireNonNull(param, this.name);
		Objects.requireNonNull(param, inferred);
		Objects.requireNonNull(param, label(count));
		Objects.requireNonNull(param, count > 0 ? "x" : null);
		Objects.requireNonNull(param, boxed + 1);
		Objects.requireNonNull(param, (String) name);
		Objects.requireNonNull(param, String.valueOf(count));
		Objects.requireNonNull(param, parts.length);
		Objects.requireNonNull(param, Sample.LIMIT);
		Objects.requireNonNull(param, unknown);
		param.trim();
	}
}
"""


@pytest.fixture(scope="module")
def analyzed():
	return host_and_sites(SOURCE, "src/main/java/com/example/Sample.java")


def _message_type(analyzed, nth):
	host, sites = analyzed
	site = find_site(sites, "requireNonNull", nth)
	return host.inspector.static_type(site.call.args[1], site)


def test_imported_owner_resolves(analyzed):
	host, sites = analyzed
	resolved = host.inspector.resolve_call(find_site(sites, "checkArgument"))
	assert resolved.owner_type == "com.google.common.base.Preconditions"
	assert resolved.is_static
	assert len(resolved.args) == 2


def test_single_type_import(analyzed):
	host, sites = analyzed
	assert host.inspector.resolve_call(find_site(sites, "requireNonNull")).owner_type == "java.util.Objects"


def test_static_import(analyzed):
	host, sites = analyzed
	resolved = host.inspector.resolve_call(find_site(sites, "notNull"))
	assert resolved.owner_type == "org.apache.commons.lang3.Validate"
	assert resolved.is_static


def test_instance_call_on_variable(analyzed):
	host, sites = analyzed
	resolved = host.inspector.resolve_call(find_site(sites, "trim"))
	assert resolved.owner_type == "java.lang.String"
	assert not resolved.is_static


def test_local_method_resolves_to_enclosing_class(analyzed):
	host, sites = analyzed
	assert host.inspector.resolve_call(find_site(sites, "label")).owner_type == "com.example.Sample"


@pytest.mark.parametrize(
	"nth, expected",
	[
		(0, "java.lang.String"),  # "b" + count
		(1, "long"),  # count + big
		(2, "java.lang.String"),  # parts[0]
		(3, "java.lang.String"),  # this.name
		(4, "java.lang.String"),  # var inferred
		(5, "java.lang.String"),  # label(count)
		(6, "java.lang.String"),  # ternary with null
		(7, "int"),  # boxed + 1
		(8, "java.lang.String"),  # cast
		(9, "java.lang.String"),  # String.valueOf
		(10, "int"),  # parts.length
		(11, "int"),  # Sample.LIMIT
	],
)
def test_static_types(analyzed, nth, expected):
	assert _message_type(analyzed, nth) == expected


def test_concatenation_with_char_is_string(analyzed):
	host, sites = analyzed
	site = find_site(sites, "notNull")
	assert host.inspector.static_type(site.call.args[1], site) == "java.lang.String"


def test_unknown_name_raises(analyzed):
	with pytest.raises(ResolutionError):
		_message_type(analyzed, 12)


def test_source_text_and_spans(analyzed):
	host, sites = analyzed
	site = find_site(sites, "checkArgument")
	assert host.inspector.source_text(site.call.args[0]) == "count > 0"
	assert host.inspector.source_text(site.call.args[1]) == '"a" + param'
	span = host.inspector.replacement_span(site)
	assert span is not None
	assert SOURCE[span.start : span.end] == 'Preconditions.checkArgument(count > 0, "a" + param);'
	assert span.line == 16
	call = host.inspector.call_span(site)
	assert SOURCE[call.start : call.end] == 'Preconditions.checkArgument(count > 0, "a" + param)'


def test_nested_call_has_no_replacement_span(analyzed):
	host, sites = analyzed
	assert host.inspector.replacement_span(find_site(sites, "label")) is None


def test_variable_named_like_owner_is_an_instance_call():
	source = """
import java.util.Objects;
class A {
	void f(Helper Objects, String p) {
		Objects.requireNonNull(p, "x" + p);
	}
}
"""
	host, sites = host_and_sites(source)
	resolved = host.inspector.resolve_call(find_site(sites, "requireNonNull"))
	assert not resolved.is_static
	assert resolved.owner_type == "Helper"


def test_ambiguous_static_on_demand_imports_raise():
	source = """
import static com.google.common.base.Preconditions.*;
import static org.apache.commons.lang3.Validate.*;
class A {
	void f(String p) {
		checkArgument(p != null, "x" + p);
	}
}
"""
	host, sites = host_and_sites(source)
	with pytest.raises(ResolutionError):
		host.inspector.resolve_call(find_site(sites, "checkArgument"))


def test_unresolvable_unqualified_call_raises():
	source = "class A { void f() { helper(); } }"
	host, sites = host_and_sites(source)
	with pytest.raises(ResolutionError):
		host.inspector.resolve_call(find_site(sites, "helper"))


ON_DEMAND = """
import com.google.common.base.*;
class A {
	void f(String p) {
		Preconditions.checkArgument(p != null, "x" + p);
	}
}
"""


def test_on_demand_import_resolves_well_known_type():
	host, sites = host_and_sites(ON_DEMAND)
	owner = host.inspector.resolve_call(find_site(sites, "checkArgument")).owner_type
	assert owner == "com.google.common.base.Preconditions"


def test_on_demand_import_in_a_package_is_uncertain():
	# Another file of com.example may declare its own Preconditions.
	host, sites = host_and_sites("package com.example;\n" + ON_DEMAND)
	with pytest.raises(ResolutionError):
		host.inspector.resolve_call(find_site(sites, "checkArgument"))


INHERITED = """
import static com.google.common.base.Preconditions.checkArgument;
class Local {
	void checkArgument(boolean ok, String message) {}
}
class Plain {}
class Child extends Local {
	void f(String p) { checkArgument(p != null, "a" + p); }
}
class Other extends Plain implements Iface {
	void f(String p) { checkArgument(p != null, "b" + p); }
}
class Outside extends Base {
	void f(String p) { checkArgument(p != null, "c" + p); }
}
class Holder {
	void f(String p) {
		new Base() {
			void g() { checkArgument(p != null, "d" + p); }
		};
	}
}
interface Iface {}
"""


@pytest.fixture(scope="module")
def inherited():
	return host_and_sites(INHERITED)


def test_method_inherited_from_declared_supertype_shadows_static_import(inherited):
	host, sites = inherited
	assert host.inspector.resolve_call(find_site(sites, "checkArgument", 0)).owner_type == "Local"


def test_declared_supertypes_without_the_method_fall_back_to_static_import(inherited):
	host, sites = inherited
	owner = host.inspector.resolve_call(find_site(sites, "checkArgument", 1)).owner_type
	assert owner == "com.google.common.base.Preconditions"


@pytest.mark.parametrize("nth", [2, 3])
def test_supertype_from_another_file_makes_unqualified_call_uncertain(inherited, nth):
	host, sites = inherited
	with pytest.raises(ResolutionError):
		host.inspector.resolve_call(find_site(sites, "checkArgument", nth))
