from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ceprace.core.exceptions import AllProvidersFailed, LookupTimeout
from ceprace.schemas.address import Address, LookupFailureResponse
from ceprace.services.lookup import lookup_postal_code


router = APIRouter()

LookupCallable = Callable[[str], Awaitable[Address]]


def get_lookup() -> LookupCallable:
    return lookup_postal_code


@router.get(
    "/{postal_code}",
    response_model=Address,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_502_BAD_GATEWAY: {"model": LookupFailureResponse},
        status.HTTP_504_GATEWAY_TIMEOUT: {"model": LookupFailureResponse},
    },
)
async def get_address(
    postal_code: str,
    lookup: LookupCallable = Depends(get_lookup),
) -> Address | JSONResponse:
    try:
        return await lookup(postal_code)
    except LookupTimeout as exc:
        failure = LookupFailureResponse(detail=str(exc))
        return JSONResponse(
            failure.model_dump(), status_code=status.HTTP_504_GATEWAY_TIMEOUT
        )
    except AllProvidersFailed as exc:
        failure = LookupFailureResponse(detail=str(exc), reasons=exc.reasons)
        return JSONResponse(
            failure.model_dump(), status_code=status.HTTP_502_BAD_GATEWAY
        )
