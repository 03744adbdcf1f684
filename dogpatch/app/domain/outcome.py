"""Outcome of one dogs fetch: exactly one of Success or Failure."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from dogpatch.app.domain.models import Dog


@dataclass(frozen=True)
class Success:
    dogs: list[Dog]


@dataclass(frozen=True)
class Failure:
    """error is None when the server answered with a non-200 status and no transport error."""

    error: BaseException | None = None


Outcome = Union[Success, Failure]


def completion_args(outcome: Outcome) -> tuple[list[Dog] | None, BaseException | None]:
    if isinstance(outcome, Success):
        return outcome.dogs, None
    return None, outcome.error
