# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from precondfix.test_support import find_site, host_and_sites

SOURCE = """
import com.google.errorprone.annotations.CompileTimeConstant;
import java.util.Objects;

class Consts {
	static final String PREFIX = "p";
	static final String CHAIN = PREFIX + 1;
	static final int WIDTH = (int) 3L;
	static String mutable = "m";
	final String instanceNull = null;
	static final String LOOP_A = LOOP_B;
	static final String LOOP_B = LOOP_A;

	void f(String p, @CompileTimeConstant String fixed, final String plain, int[] xs, int i) {
		final String local = "l" + WIDTH;
		String notFinal = "n";
		Objects.requireNonNull(p, "a" + "b");
		Objects.requireNonNull(p, CHAIN);
		Objects.requireNonNull(p, Consts.PREFIX);
		Objects.requireNonNull(p, fixed);
		Objects.requireNonNull(p, local);
		Objects.requireNonNull(p, true ? "x" : "y");
		Objects.requireNonNull(p, -WIDTH);
		Objects.requireNonNull(p, mutable);
		Objects.requireNonNull(p, instanceNull);
		Objects.requireNonNull(p, notFinal);
		Objects.requireNonNull(p, plain);
		Objects.requireNonNull(p, null);
		Objects.requireNonNull(p, LOOP_A);
		Objects.requireNonNull(p, "a" + p);
		Objects.requireNonNull(p, p += "x");
		Objects.requireNonNull(p, "a" + i++);
		Objects.requireNonNull(p, "a" + --i);
		Objects.requireNonNull(p, "a" + p.trim());
		Objects.requireNonNull(p, "a" + new StringBuilder());
		Objects.requireNonNull(p, "a" + new int[i]);
		Objects.requireNonNull(p, "a" + (xs[i] = 1));
		Objects.requireNonNull(p, () -> p.trim());
		Objects.requireNonNull(p, "a" + (i > 0 ? xs[i] : -i));
	}
}
"""


@pytest.fixture(scope="module")
def analyzed():
	return host_and_sites(SOURCE)


def _message(analyzed, nth):
	host, sites = analyzed
	site = find_site(sites, "requireNonNull", nth)
	return host, site, site.call.args[1]


@pytest.mark.parametrize("nth", range(0, 7))
def test_compile_time_constants(analyzed, nth):
	host, site, message = _message(analyzed, nth)
	assert host.constants.is_compile_time_constant(message, site)


@pytest.mark.parametrize("nth", range(7, 14))
def test_not_compile_time_constants(analyzed, nth):
	host, site, message = _message(analyzed, nth)
	assert not host.constants.is_compile_time_constant(message, site)


@pytest.mark.parametrize("nth", range(14, 21))
def test_side_effects(analyzed, nth):
	host, site, message = _message(analyzed, nth)
	assert host.side_effects.has_side_effect(message, site)


@pytest.mark.parametrize("nth", [0, 7, 13, 21, 22])
def test_no_side_effects(analyzed, nth):
	host, site, message = _message(analyzed, nth)
	assert not host.side_effects.has_side_effect(message, site)
