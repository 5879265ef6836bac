# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from .config import Config, load_config
from .runner import FileResult, analyze_file, analyze_source, iter_java_files
from .sink import ListSink, apply_fixes

__all__ = [
	"Config",
	"load_config",
	"FileResult",
	"analyze_file",
	"analyze_source",
	"iter_java_files",
	"ListSink",
	"apply_fixes",
]
