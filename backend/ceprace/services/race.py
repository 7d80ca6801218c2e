from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, Mapping, TypeVar

from ceprace.core.logging import get_logger
from ceprace.services.models import Failure, Outcome, Success


T = TypeVar("T")
Operation = Callable[[], Awaitable[Outcome[T]]]

_logger = get_logger(__name__)


class RaceFailed(Exception):
    """Every raced operation finished with a failure."""

    def __init__(self, failures: Mapping[str, str]) -> None:
        self.failures = dict(failures)
        super().__init__(f"{len(self.failures)} operations failed")


class RaceTimedOut(Exception):
    """The race deadline elapsed before any operation succeeded."""

    def __init__(self, timeout: float, failures: Mapping[str, str]) -> None:
        self.timeout = timeout
        self.failures = dict(failures)
        super().__init__(f"race timed out after {timeout:g}s")


@dataclass(slots=True)
class RaceWinner(Generic[T]):
    name: str
    value: T
    elapsed: float
    failures: dict[str, str] = field(default_factory=dict)


async def race_first_success(
    operations: Mapping[str, Operation[T]],
    timeout: float,
) -> RaceWinner[T]:
    """Run ``operations`` concurrently and return the first success.

    Each operation posts its outcome once onto an unbounded queue, so a
    result arriving after the decision never blocks its task. Failures are
    collected until either a success arrives, every operation has failed
    (:class:`RaceFailed`) or ``timeout`` elapses (:class:`RaceTimedOut`).
    Operations still running once the race is decided are cancelled and
    their outcomes are never read.
    """

    if not operations:
        raise RaceFailed({})

    loop = asyncio.get_running_loop()
    started = loop.time()
    deadline = started + timeout
    completions: asyncio.Queue[tuple[str, Outcome[T]]] = asyncio.Queue()

    async def _run(name: str, operation: Operation[T]) -> None:
        try:
            outcome = await operation()
        except Exception as exc:  # operations are expected to return Failure
            _logger.warning("Raced operation raised", operation=name, error=str(exc))
            outcome = Failure(f"unexpected error: {exc}")
        completions.put_nowait((name, outcome))

    tasks = [
        asyncio.create_task(_run(name, operation), name=f"race:{name}")
        for name, operation in operations.items()
    ]
    failures: dict[str, str] = {}

    try:
        while len(failures) < len(tasks):
            remaining = deadline - loop.time()
            if remaining <= 0:
                raise RaceTimedOut(timeout, failures)
            try:
                name, outcome = await asyncio.wait_for(completions.get(), remaining)
            except asyncio.TimeoutError:
                raise RaceTimedOut(timeout, failures) from None

            if isinstance(outcome, Success):
                return RaceWinner(
                    name=name,
                    value=outcome.value,
                    elapsed=loop.time() - started,
                    failures=failures,
                )
            failures[name] = outcome.reason

        raise RaceFailed(failures)
    finally:
        _abandon(tasks)


def _abandon(tasks: list[asyncio.Task[None]]) -> None:
    for task in tasks:
        if not task.done():
            _logger.debug("Abandoning raced operation", task=task.get_name())
            task.cancel()
