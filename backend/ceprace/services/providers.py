from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Protocol, Sequence

import httpx

from ceprace.core.config import Settings
from ceprace.core.exceptions import ProviderConfigurationError
from ceprace.core.logging import get_logger
from ceprace.domain.address import FieldMap, MalformedPayloadError, normalize_payload
from ceprace.services.models import Failure, ProviderOutcome, Success


_logger = get_logger(__name__)
_PLACEHOLDER = "{postal_code}"

BRASILAPI_FIELDS = FieldMap(
    postal_code="cep",
    street="street",
    neighborhood="neighborhood",
    city="city",
    region="state",
)
VIACEP_FIELDS = FieldMap(
    postal_code="cep",
    street="logradouro",
    neighborhood="bairro",
    city="localidade",
    region="uf",
    complement="complemento",
)


@dataclass(frozen=True, slots=True)
class ProviderSpec:
    """Endpoint and response shape of one lookup service."""

    name: str
    url_template: str
    fields: FieldMap
    not_found_flag: str | None = None

    def build_url(self, postal_code: str) -> str:
        return self.url_template.replace(_PLACEHOLDER, postal_code)


class AddressProvider(Protocol):
    name: str

    async def fetch(self, postal_code: str, timeout: float) -> ProviderOutcome: ...


def build_provider_specs(settings: Settings) -> list[ProviderSpec]:
    """Return the BrasilAPI and ViaCEP specs configured in ``settings``."""

    specs = [
        ProviderSpec("BrasilAPI", settings.brasilapi_url, BRASILAPI_FIELDS),
        ProviderSpec(
            "ViaCEP", settings.viacep_url, VIACEP_FIELDS, not_found_flag="erro"
        ),
    ]
    for spec in specs:
        if _PLACEHOLDER not in spec.url_template:
            raise ProviderConfigurationError(
                f"Provider '{spec.name}' URL must contain {_PLACEHOLDER}"
            )
    return specs


class ProviderClient:
    """Fetch one postal code from one provider and normalize the answer."""

    def __init__(self, spec: ProviderSpec, http_client: httpx.AsyncClient) -> None:
        self.spec = spec
        self.name = spec.name
        self._http = http_client

    async def fetch(self, postal_code: str, timeout: float) -> ProviderOutcome:
        try:
            outcome = await asyncio.wait_for(self._fetch(postal_code, timeout), timeout)
        except asyncio.TimeoutError:
            outcome = Failure(f"timed out after {timeout:g}s")

        if isinstance(outcome, Failure):
            _logger.warning(
                "Provider lookup failed",
                provider=self.name,
                postal_code=postal_code,
                reason=outcome.reason,
            )
        else:
            _logger.debug(
                "Provider lookup succeeded", provider=self.name, postal_code=postal_code
            )
        return outcome

    async def _fetch(self, postal_code: str, timeout: float) -> ProviderOutcome:
        try:
            request = self._http.build_request(
                "GET", self.spec.build_url(postal_code), timeout=timeout
            )
        except (httpx.InvalidURL, ValueError) as exc:
            return Failure(f"could not build request: {exc}")

        try:
            response = await self._http.send(request)
        except httpx.TimeoutException:
            return Failure(f"timed out after {timeout:g}s")
        except httpx.HTTPError as exc:
            return Failure(f"request failed: {exc}")

        if not response.is_success:
            return Failure(
                f"unexpected status {response.status_code} {response.reason_phrase}"
            )

        try:
            payload = json.loads(response.content)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            return Failure(f"invalid JSON body: {exc}")

        if self.spec.not_found_flag and isinstance(payload, dict):
            if payload.get(self.spec.not_found_flag) in (True, "true"):
                return Failure("postal code not found")

        try:
            address = normalize_payload(payload, self.spec.fields, self.name)
        except MalformedPayloadError as exc:
            return Failure(f"malformed response: {exc}")

        return Success(address)


def build_provider_clients(
    settings: Settings, http_client: httpx.AsyncClient
) -> Sequence[ProviderClient]:
    return [
        ProviderClient(spec, http_client) for spec in build_provider_specs(settings)
    ]
