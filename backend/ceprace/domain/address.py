from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ceprace.schemas.address import Address


ADDRESS_FIELDS = (
    "postal_code",
    "street",
    "neighborhood",
    "city",
    "region",
    "complement",
)
REQUIRED_FIELDS = ("postal_code", "street", "neighborhood", "city", "region")


class MalformedPayloadError(ValueError):
    """Raised when a provider payload cannot be mapped to an address."""


@dataclass(frozen=True, slots=True)
class FieldMap:
    """Provider response keys for each normalized address field.

    A field mapped to ``None`` is not offered by the provider and is
    normalized to an empty string.
    """

    postal_code: str
    street: str
    neighborhood: str
    city: str
    region: str
    complement: str | None = None

    def key_for(self, field_name: str) -> str | None:
        return getattr(self, field_name)


def normalize_payload(
    payload: Any,
    field_map: FieldMap,
    source: str,
) -> Address:
    """Map a decoded provider payload onto an :class:`Address`.

    Required keys must be present; ``null`` values become empty strings.
    The mapping is pure, so the same payload always yields an equal address.
    """

    if not isinstance(payload, Mapping):
        raise MalformedPayloadError(
            f"expected a JSON object, got {type(payload).__name__}"
        )

    missing = [
        key
        for name in REQUIRED_FIELDS
        if (key := field_map.key_for(name)) is not None and key not in payload
    ]
    if missing:
        raise MalformedPayloadError(f"missing fields: {', '.join(missing)}")

    values: dict[str, str] = {}
    for name in ADDRESS_FIELDS:
        key = field_map.key_for(name)
        values[name] = _coerce_text(payload.get(key)) if key else ""

    return Address(source=source, **values)


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise MalformedPayloadError(f"unexpected value type {type(value).__name__}")
