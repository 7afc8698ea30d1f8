"""Wecraft scoring engine exception classes."""
from typing import Iterable, Optional


class WecraftError(Exception):
    """Base exception for all scoring engine errors."""


class UnknownRoleError(WecraftError, ValueError):
    """Raised when a role query names a role with no knowledge base entry."""

    def __init__(self, role: str, supported: Optional[Iterable[str]] = None):
        self.role = role
        self.supported = sorted(supported or [])
        message = f"Unknown role: {role!r}"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class InvalidConfigError(WecraftError, ValueError):
    """Raised when a calculator config override fails validation."""

    def __init__(self, config_name: str, detail: str):
        self.config_name = config_name
        self.detail = detail
        super().__init__(f"Invalid {config_name}: {detail}")
