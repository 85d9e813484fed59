"""Name-to-dialect lookup shared by the service and the API."""

from __future__ import annotations

from resultboard.dialect.base import Dialect


class UnsupportedDialectError(Exception):
    """Raised when a requested dialect is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.dialect_name = name
        self.available = available
        super().__init__(f"Unsupported dialect '{name}'. Available: {', '.join(available)}")


class DialectRegistry:
    """Holds one shared instance per dialect; dialects carry no state."""

    _dialects: dict[str, Dialect] = {}
    _aliases: dict[str, str] = {}

    @classmethod
    def register(cls, dialect_class: type[Dialect]) -> type[Dialect]:
        """Class decorator: register the dialect under its name and aliases."""
        instance = dialect_class()
        cls._dialects[instance.name] = instance
        for alias in instance.aliases:
            cls._aliases[alias] = instance.name
        return dialect_class

    @classmethod
    def get(cls, name: str) -> Dialect:
        """Look up a dialect by name or alias, ignoring case and padding."""
        key = name.strip().lower()
        key = cls._aliases.get(key, key)
        if key not in cls._dialects:
            raise UnsupportedDialectError(name, available=cls.available())
        return cls._dialects[key]

    @classmethod
    def available(cls) -> list[str]:
        """Canonical names of registered dialects."""
        return sorted(cls._dialects)
