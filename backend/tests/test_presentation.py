from __future__ import annotations

from ceprace.core.exceptions import AllProvidersFailed, LookupTimeout
from ceprace.presentation import render_result
from ceprace.schemas.address import Address


def test_render_address_includes_fields_and_source():
    address = Address(
        postal_code="01310-100",
        street="Avenida Paulista",
        neighborhood="Bela Vista",
        city="São Paulo",
        region="SP",
        complement="lado par",
        source="ViaCEP",
    )

    rendered = render_result(address)

    assert rendered.splitlines() == [
        "Result from ViaCEP:",
        "Postal code: 01310-100",
        "Street: Avenida Paulista",
        "Neighborhood: Bela Vista",
        "City: São Paulo",
        "Region: SP",
        "Complement: lado par",
        "Source: ViaCEP",
    ]


def test_render_timeout():
    assert render_result(LookupTimeout(2.0)) == (
        "Lookup timed out: no provider answered within 2s."
    )


def test_render_all_failed_lists_each_reason():
    error = AllProvidersFailed(
        {
            "BrasilAPI": "unexpected status 404 Not Found",
            "ViaCEP": "postal code not found",
        }
    )

    rendered = render_result(error)

    first_line = rendered.splitlines()[0]
    assert first_line == "Lookup failed: every provider returned an error."
    assert "  - BrasilAPI: unexpected status 404 Not Found" in rendered
    assert "  - ViaCEP: postal code not found" in rendered
