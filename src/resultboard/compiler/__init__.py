"""Filter compilation for resultboard report queries."""

from resultboard.compiler.filters import FilterCompiler, compile_filter, escape_literal
from resultboard.compiler.where import WhereClauseBuilder, WhereResult, predicate_condition

__all__ = [
    "FilterCompiler",
    "WhereClauseBuilder",
    "WhereResult",
    "compile_filter",
    "escape_literal",
    "predicate_condition",
]
