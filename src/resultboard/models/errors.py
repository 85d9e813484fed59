"""Structured validation findings with YAML source position tracking."""

from __future__ import annotations

from pydantic import BaseModel


class SourceSpan(BaseModel):
    """Points to exact location in YAML source for error reporting."""

    file: str
    line: int
    column: int


class SemanticError(BaseModel):
    """A structured finding with optional source position and suggestions."""

    code: str
    message: str
    path: str | None = None
    span: SourceSpan | None = None
    suggestions: list[str] = []


class ValidationResult(BaseModel):
    """Result of validating a group-alias table."""

    valid: bool
    errors: list[SemanticError] = []
    warnings: list[SemanticError] = []
