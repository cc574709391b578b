"""Static test declaration scanner."""

from traceproject.scanner.parser import ParsedFile, ParsedTest, SourceLocation, parse

__all__ = ["ParsedFile", "ParsedTest", "SourceLocation", "parse"]
