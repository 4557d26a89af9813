# Lightweight package init: the CLI imports only what a run needs.
__all__ = ["prettify", "parse_line", "TestRunner"]

def __getattr__(name):
    if name == "prettify":
        from .parsing.sentence import prettify as _prettify
        return _prettify
    if name == "parse_line":
        from .parsing.classifier import parse_line as _parse_line
        return _parse_line
    if name == "TestRunner":
        from .runners.runner import TestRunner as _TestRunner
        return _TestRunner
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
