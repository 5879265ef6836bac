# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Iterable, Optional


def matches_any(path: Optional[str], patterns: Iterable[str]) -> bool:
	"""
	Glob-match `path` (any separator style) against `patterns`.

	`*` also crosses directory separators, and a leading `**/` may match
	nothing, so `**/src/test/**` matches both `src/test/A.java` and
	`mod/src/test/A.java`.
	"""
	if not path:
		return False
	posix = path.replace("\\", "/")
	for pattern in patterns:
		if fnmatchcase(posix, pattern):
			return True
		if pattern.startswith("**/") and fnmatchcase(posix, pattern[3:]):
			return True
	return False


__all__ = ["matches_any"]
