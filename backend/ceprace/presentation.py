from __future__ import annotations

from ceprace.core.exceptions import (
    AddressLookupError,
    AllProvidersFailed,
    LookupTimeout,
)
from ceprace.schemas.address import Address


_LABELS = (
    ("Postal code", "postal_code"),
    ("Street", "street"),
    ("Neighborhood", "neighborhood"),
    ("City", "city"),
    ("Region", "region"),
    ("Complement", "complement"),
)


def format_address(address: Address) -> str:
    lines = [f"Result from {address.source}:"]
    lines.extend(f"{label}: {getattr(address, field)}" for label, field in _LABELS)
    lines.append(f"Source: {address.source}")
    return "\n".join(lines)


def format_error(error: AddressLookupError) -> str:
    if isinstance(error, LookupTimeout):
        return f"Lookup timed out: no provider answered within {error.timeout:g}s."
    if isinstance(error, AllProvidersFailed):
        lines = ["Lookup failed: every provider returned an error."]
        lines.extend(f"  - {name}: {reason}" for name, reason in error.reasons.items())
        return "\n".join(lines)
    return f"Lookup failed: {error}"


def render_result(result: Address | AddressLookupError) -> str:
    """Render the outcome of a lookup for the console."""

    if isinstance(result, Address):
        return format_address(result)
    return format_error(result)
