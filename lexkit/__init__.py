"""Byte-level lexing helpers, number conversion, a JSON parser and an XML lexer."""

__version__ = "0.1.0"
__all__ = ["util", "position", "numconv", "jsonparse", "xmlutil", "xmllex"]