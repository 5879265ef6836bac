# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
precondfix: rewrites eager precondition messages into conditional throws.

Layout:
  parser: Java-subset front end (lark grammar -> AST with source offsets)
  host:   tree inspection and classifiers the rule depends on
  rules:  call-shape catalog, gate chain, fix synthesis, reporting
  driver: file walking, fix application, configuration and CLI
"""

__version__ = "0.1.0"

__all__ = ["core", "parser", "host", "rules", "driver"]
