# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from .diagnostics import Diagnostic, Fix
from .errors import ConfigError, PrecondfixError, ResolutionError
from .span import Span

__all__ = ["Diagnostic", "Fix", "Span", "PrecondfixError", "ConfigError", "ResolutionError"]
