"""Custom exception hierarchy for the integration runtime.

Every failure raised by the package derives from :class:`IntegrationError` so
callers can catch broadly or specifically depending on context.  Capability
absence is deliberately *not* represented here: a ``has_*`` probe answering
``False`` is a regular result.
"""

from __future__ import annotations

from typing import Optional, Sequence


class IntegrationError(RuntimeError):
    """Base exception for integration runtime failures."""


class ConfigurationError(IntegrationError):
    """Raised when the runtime or the per-game settings are misconfigured."""


class LoadError(IntegrationError):
    """Raised when a manifest or its integration script cannot be loaded."""


class ScriptCallError(IntegrationError):
    """Raised when a script entry point is missing or raises during a call.

    Attributes
    ----------
    entry_point:
        Name of the script function that was being invoked.
    """

    def __init__(self, entry_point: str, message: str) -> None:
        self.entry_point = entry_point
        super().__init__(f"{entry_point}: {message}")


class MarshalError(IntegrationError):
    """Raised when a script value does not match the expected schema."""


class IntegrityError(IntegrationError):
    """Raised when a digest cannot be computed for the requested algorithm."""


class ScanError(IntegrationError):
    """Raised by strict scans once every task has finished.

    Attributes
    ----------
    failures:
        Every failure recorded during the scan, in completion order.
    """

    def __init__(self, failures: Sequence[object], message: Optional[str] = None) -> None:
        self.failures = tuple(failures)
        if message is None:
            reasons = "\n".join(f"- {failure}" for failure in self.failures)
            message = f"Scan finished with {len(self.failures)} failure(s):\n{reasons}"
        super().__init__(message)


__all__ = [
    "IntegrationError",
    "ConfigurationError",
    "LoadError",
    "ScriptCallError",
    "MarshalError",
    "IntegrityError",
    "ScanError",
]
