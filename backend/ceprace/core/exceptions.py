from __future__ import annotations

from typing import Mapping


class AddressLookupError(RuntimeError):
    """Base class for lookups that end without an address."""


class AllProvidersFailed(AddressLookupError):
    """Raised when every provider reported a failure before the deadline."""

    def __init__(self, reasons: Mapping[str, str]) -> None:
        self.reasons = dict(reasons)
        summary = "; ".join(
            f"{name}: {reason}" for name, reason in self.reasons.items()
        )
        super().__init__(f"All providers failed ({summary})")


class LookupTimeout(AddressLookupError):
    """Raised when the overall deadline elapses with no successful provider."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"No provider answered within {timeout:g}s")


class ProviderConfigurationError(RuntimeError):
    """Raised when a provider cannot be configured with provided settings."""
