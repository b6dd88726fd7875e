"""Generalised LL recognition of context-free grammars, with a sentence generator and a test runner."""

__version__ = "0.1.0"

__all__ = ["cli", "descriptors", "generator", "grammar", "gss", "parser", "runner"]