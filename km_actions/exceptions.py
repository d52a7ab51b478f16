"""Custom exception types for the km_actions serializer and engine layer."""

from __future__ import annotations

from typing import Optional


class KMError(RuntimeError):
    """Base class for Keyboard Maestro serialization and engine failures."""


class ActionConfigurationError(KMError, ValueError):
    """Raised when action or condition options cannot be turned into XML."""


class UnsupportedKeyError(ActionConfigurationError):
    """Raised when a keystroke token has no known key code."""


class StyledTextError(KMError, ValueError):
    """Raised when a StyledText payload cannot be decoded."""


class EngineProcessError(KMError):
    """Raised when an osascript invocation fails or exits non-zero."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.status = status
        self.stdout = stdout
        self.stderr = stderr


class EngineUnavailableError(EngineProcessError):
    """Raised when osascript cannot be launched on this host."""


class UnknownTokenError(ActionConfigurationError, KeyError):
    """Raised when a token query matches no known Keyboard Maestro token."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class ConversionError(KMError, ValueError):
    """Raised when an XML or JSON snippet cannot be converted or rewritten."""
