"""resultboard — filter compiler for exam-result reporting dashboards."""

__version__ = "0.3.0"

from resultboard.compiler.filters import compile_filter  # noqa: E402
from resultboard.dates.normalizer import normalize_date  # noqa: E402

__all__ = [
    "__version__",
    "compile_filter",
    "normalize_date",
]
