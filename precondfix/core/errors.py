# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PrecondfixError(Exception):
	"""
	A structured, serializable error for precondfix tooling.

	Raised for problems with the run itself (configuration, unreadable input),
	never for findings in analyzed code.
	"""

	reason_code: str
	message: str
	path: str | None = None

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {"reason_code": self.reason_code, "message": self.message, "path": self.path}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.path:
			parts.append(f"path={self.path}")
		return " ".join(parts)


@dataclass(frozen=True)
class ConfigError(PrecondfixError):
	"""Invalid or unreadable configuration."""


class ResolutionError(ValueError):
	"""Raised when the host cannot resolve a symbol or a static type."""


__all__ = ["PrecondfixError", "ConfigError", "ResolutionError"]
