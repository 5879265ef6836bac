# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Run configuration.

Format (JSON, every key optional):
{
  "enabled": true,
  "severity": "suggestion",            // off | suggestion | warning | error
  "test_globs": ["**/src/test/**"],
  "generated_globs": ["**/generated/**"],
  "skip_generated": true,
  "test_only": false,
  "exclude": ["**/legacy/**"]
}

Looked up as `precondfix.json` in the working directory unless a path is given
explicitly; an explicit path must exist.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from precondfix.core.errors import ConfigError
from precondfix.host.test_code import DEFAULT_TEST_GLOBS

CONFIG_FILENAME = "precondfix.json"
SEVERITIES = ("off", "suggestion", "warning", "error")
DEFAULT_GENERATED_GLOBS = ("**/generated/**", "**/build/generated*/**")


@dataclass(frozen=True)
class Config:
	enabled: bool = True
	severity: str = "suggestion"
	test_globs: Tuple[str, ...] = DEFAULT_TEST_GLOBS
	generated_globs: Tuple[str, ...] = DEFAULT_GENERATED_GLOBS
	skip_generated: bool = True
	test_only: bool = False
	exclude: Tuple[str, ...] = ()

	@property
	def active(self) -> bool:
		return self.enabled and self.severity != "off"

	def with_overrides(self, **overrides: Any) -> "Config":
		"""Copy with every non-None override applied (CLI flags win over the file)."""
		changes = {k: v for k, v in overrides.items() if v is not None}
		if not changes:
			return self
		return config_from_dict({**_as_dict(self), **changes}, source="<overrides>")


def _as_dict(config: Config) -> dict[str, Any]:
	return {f.name: getattr(config, f.name) for f in fields(config)}


_BOOL_KEYS = ("enabled", "skip_generated", "test_only")
_GLOB_KEYS = ("test_globs", "generated_globs", "exclude")


def config_from_dict(data: Mapping[str, Any], source: str = "<dict>") -> Config:
	if not isinstance(data, Mapping):
		raise ConfigError("config-invalid", "configuration must be a JSON object", path=source)
	known = {f.name for f in fields(Config)}
	unknown = sorted(set(data) - known)
	if unknown:
		raise ConfigError("config-unknown-key", f"unknown configuration keys: {', '.join(unknown)}", path=source)

	values: dict[str, Any] = {}
	for key in _BOOL_KEYS:
		if key in data:
			if not isinstance(data[key], bool):
				raise ConfigError("config-invalid", f"'{key}' must be a boolean", path=source)
			values[key] = data[key]
	for key in _GLOB_KEYS:
		if key in data:
			value = data[key]
			if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
				raise ConfigError("config-invalid", f"'{key}' must be a list of glob strings", path=source)
			values[key] = tuple(value)
	if "severity" in data:
		severity = data["severity"]
		if severity not in SEVERITIES:
			raise ConfigError("config-invalid", f"'severity' must be one of {', '.join(SEVERITIES)}", path=source)
		values["severity"] = severity
	return replace(Config(), **values)


def load_config(path: Optional[Path] = None, *, cwd: Optional[Path] = None) -> Config:
	explicit = path is not None
	config_path = path if path is not None else (cwd or Path.cwd()) / CONFIG_FILENAME
	if not config_path.exists():
		if explicit:
			raise ConfigError("config-not-found", f"config file not found: {config_path}", path=str(config_path))
		return Config()
	try:
		data = json.loads(config_path.read_text(encoding="utf-8"))
	except json.JSONDecodeError as exc:
		raise ConfigError("config-invalid", f"malformed JSON: {exc}", path=str(config_path)) from exc
	except OSError as exc:
		raise ConfigError("config-unreadable", str(exc), path=str(config_path)) from exc
	return config_from_dict(data, source=str(config_path))


__all__ = ["Config", "CONFIG_FILENAME", "SEVERITIES", "DEFAULT_GENERATED_GLOBS", "config_from_dict", "load_config"]
