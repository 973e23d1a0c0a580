"""Discriminated results returned by the vocabulary mappers.

Mappers never raise for expected failures. They return ``Ok(value)`` or
``Err(error)``; the tool mapper may also return ``NotConvertible`` for a
tool the provider cannot represent, which the converter filters out
instead of failing.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from promptconv.core.conversion.errors import ConversionError, ToolNotConvertibleError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful mapping."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed mapping; fatal to the conversion."""

    error: ConversionError


@dataclass(frozen=True)
class NotConvertible:
    """A tool the target provider cannot represent; filtered, not fatal."""

    error: ToolNotConvertibleError


MapResult = Union[Ok[T], Err]


def collect(results: Iterable[MapResult[T]]) -> MapResult[list[T]]:
    """Gather results into one, short-circuiting on the first ``Err``."""
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)
