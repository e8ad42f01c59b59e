"""
Exception hierarchy for gerber-drc.

All errors raised by the library derive from GerberDrcError and carry:
- Context information (file paths, line numbers, rule names, etc.)
- Suggestions for how to fix the issue
- A formatted, multi-line message

Example::

    from gerber_drc.exceptions import ParseError

    raise ParseError(
        "Unknown constraint type: track_widht",
        context={"rule": "Minimum Trace Width"},
        suggestions=["Check the constraint name against the KiCad DRC syntax"],
        line=12,
        column=18,
    )
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class GerberDrcError(Exception):
    """
    Base exception for all gerber-drc errors.

    Attributes:
        context: Dictionary of contextual information (file, line, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ParseError(GerberDrcError):
    """
    Rule file parsing failed.

    Raised for malformed S-expressions, malformed JSON, unknown constraint
    kinds and unparseable numeric values. Parsers fail fast: the first
    problem aborts the parse call.

    Example::

        raise ParseError(
            "Unexpected end of input, expected ')'",
            context={"file": "pcbway.kicad_dru"},
            line=42,
            column=1,
        )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        file_path: Optional[Union[str, Path]] = None,
    ):
        # Build context from convenience parameters
        ctx = context or {}
        if file_path and "file" not in ctx:
            ctx["file"] = str(file_path)
        if line is not None and "line" not in ctx:
            ctx["line"] = line
        if column is not None and "column" not in ctx:
            ctx["column"] = column

        self.line = line
        self.column = column
        super().__init__(message, ctx, suggestions)


class ConfigurationError(GerberDrcError):
    """
    Missing or invalid configuration.

    Raised when a required collaborator was not supplied, such as running
    the cost advisor without a manufacturer profile.

    Example::

        raise ConfigurationError(
            "ManufacturerProfile must be set before analysis",
            suggestions=["Pass profile=get_profile('nextpcb-2layer')"],
        )
    """

    pass


class RuleSetNotFoundError(GerberDrcError):
    """
    A built-in rule set or rule file could not be located.

    Example::

        raise RuleSetNotFoundError(
            "Unknown built-in rule set: 'jlc'",
            context={"available": ["nextpcb", "pcbway"]},
        )
    """

    pass


__all__ = [
    "GerberDrcError",
    "ParseError",
    "ConfigurationError",
    "RuleSetNotFoundError",
]
