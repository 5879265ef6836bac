# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from precondfix.host import JavaTestCodeClassifier
from precondfix.host.protocols import TestCodeClassifier
from precondfix.test_support import find_site, host_and_sites

PLAIN = """
class Service {
	void f() { work(); }
	void work() {}
}
"""

WITH_TEST_METHOD = """
import org.junit.jupiter.params.ParameterizedTest;
class ServiceCheck {
	@ParameterizedTest
	void param() {}
	class Nested {
		void g() { work(); }
		void work() {}
	}
}
"""


@pytest.mark.parametrize(
	"path, expected",
	[
		("src/main/java/Service.java", False),
		("src/test/java/Service.java", True),
		("lib/src/test/java/a/Service.java", True),
		("lib/src/integrationTest/java/Service.java", True),
		("lib/src/testFixtures/java/Service.java", True),
		("C:\\repo\\src\\test\\java\\Service.java", True),
		("Test.java", False),
	],
)
def test_test_source_sets_by_path(path, expected):
	host, sites = host_and_sites(PLAIN, path)
	assert host.test_code.is_test_code(find_site(sites, "work")) is expected


def test_test_only_run():
	host, sites = host_and_sites(PLAIN, "src/main/java/Service.java", test_only=True)
	assert host.test_code.is_test_code(find_site(sites, "work"))


def test_class_nested_in_test_class():
	host, sites = host_and_sites(WITH_TEST_METHOD, "src/main/java/ServiceCheck.java")
	assert host.test_code.is_test_code(find_site(sites, "work"))


def test_custom_globs():
	host, sites = host_and_sites(PLAIN, "checks/Service.java", test_globs=["checks/**"])
	assert host.test_code.is_test_code(find_site(sites, "work"))


def test_classifier_protocol_is_plain_library_code():
	assert "__test__" not in vars(TestCodeClassifier)
	classifier: TestCodeClassifier = JavaTestCodeClassifier(test_only=True)
	_, sites = host_and_sites(PLAIN)
	assert classifier.is_test_code(find_site(sites, "work"))
