"""SQL dialect plugin system for resultboard."""

# Import dialects to trigger registration
import resultboard.dialect.mysql as _mysql  # noqa: F401
import resultboard.dialect.postgres as _postgres  # noqa: F401
from resultboard.dialect.base import Dialect, DialectCapabilities
from resultboard.dialect.registry import DialectRegistry, UnsupportedDialectError

__all__ = [
    "Dialect",
    "DialectCapabilities",
    "DialectRegistry",
    "UnsupportedDialectError",
]
