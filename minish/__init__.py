"""Tokenizing, expansion, syntax checking, pipeline splitting, redirections and signal setup for a small shell."""

__version__ = "0.1.0"
__all__ = ["strutil", "tokens", "expansion", "lexer", "syntax", "parsing", "signals"]