"""Errors raised while reading configuration from the environment."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """The environment does not describe a usable broker and feed setup."""


class MissingConfigurationError(ConfigurationError):
    """One or more required environment variables are unset or blank."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(sorted(names))
        super().__init__(f"Missing configuration for: {', '.join(self.names)}")
