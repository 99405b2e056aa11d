"""Exception types shared by the computation and API layers."""

from __future__ import annotations

from typing import Any, Dict, Mapping


class ResearchSuiteError(Exception):
    """Base class for failures reported back to callers as structured errors."""

    code = "research_suite_error"

    def __init__(self, message: str, *, code: str | None = None, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.context: Dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        return self.message


class UnknownIdentifierError(ResearchSuiteError, KeyError):
    """Raised when a protein, ligand or cell-line identifier is not in its table."""

    code = "unknown_identifier"


class InvalidParameterError(ResearchSuiteError, ValueError):
    """Raised when a numeric input falls outside the domain of a computation."""

    code = "invalid_parameter"


__all__ = ["InvalidParameterError", "ResearchSuiteError", "UnknownIdentifierError"]
