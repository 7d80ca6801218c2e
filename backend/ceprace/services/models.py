from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from ceprace.schemas.address import Address


T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Failure:
    reason: str


Outcome = Union[Success[T], Failure]
ProviderOutcome = Union[Success[Address], Failure]
