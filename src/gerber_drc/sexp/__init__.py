"""S-expression reading and writing for KiCad rule files."""

from .parser import Parser, SExp, parse_all, parse_string

__all__ = ["SExp", "Parser", "parse_all", "parse_string"]
