"""Two-variant outcome type for fallible operations.

Certificate parsing, key matching and per-namespace fetches return
``Ok(value)`` or ``Err(error)`` instead of raising, so callers decide
whether to absorb or propagate a failure::

    result = parse_certificate(pem)
    if result.ok:
        info = result.value
    else:
        logger.error("bad certificate: %s", result.error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> Literal[True]:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    @property
    def ok(self) -> Literal[False]:
        return False


Result = Union[Ok[T], Err[E]]
