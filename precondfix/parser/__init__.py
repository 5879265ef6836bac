# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Java-subset front end.

Parses Java source into `precondfix.parser.ast` nodes. Every node keeps
character offsets so consumers can recover verbatim source text.
"""

from . import ast
from .parser import JavaSyntaxError, parse_java

__all__ = ["ast", "parse_java", "JavaSyntaxError"]
