"""Projection of domain objects into JSON objects and arrays through fillers."""

from typing import Iterable, Iterator, TypeVar
from .types import Filler, JsonArray, JsonObject
from .sequence import LazySequence
from .utils.validation import ValidationUtils

T = TypeVar("T")


def to_json(filler: Filler[T], origin: T) -> JsonObject:
    """
    Returns a JSON object that results from applying the filler to the origin.

    Args:
        filler: Callable receiving a fresh dict and the origin; populates the dict
        origin: The original object to be transformed

    Returns:
        A fresh dict filled in by the filler
    """
    ValidationUtils.ensure_valid(ValidationUtils.validate_filler(filler))
    return _fill(filler, origin)


def to_json_array(filler: Filler[T], origins: Iterable[T]) -> JsonArray:
    """
    Returns a JSON array that results from applying the filler to each origin.

    Three shapes of ``origins`` are accepted:

    - a finite iterable (list, tuple, ...) is iterated from its start;
    - a LazySequence must not have been operated upon and is fully consumed;
    - an iterator or generator contributes only its remaining elements.

    The filler is called exactly once per element, in iteration order. If the
    filler or the source raises, the exception propagates unchanged and no
    partial array is returned. ``None`` elements are passed to the filler.

    Args:
        filler: Callable receiving a fresh dict and one origin
        origins: The original objects to be transformed

    Returns:
        A fresh list of fresh dicts, one per origin

    Raises:
        PreconditionError: If the filler or the source is missing or unusable
        SequenceStateError: If a LazySequence source was already operated upon
    """
    ValidationUtils.ensure_valid(
        ValidationUtils.validate_filler(filler),
        ValidationUtils.validate_source(origins),
    )
    if isinstance(origins, LazySequence):
        return _fill_remaining(filler, origins.claim("to_json_array"))
    return _fill_remaining(filler, iter(origins))


def _fill(filler: Filler[T], origin: T) -> JsonObject:
    result: JsonObject = {}
    filler(result, origin)
    return result


def _fill_remaining(filler: Filler[T], origins: Iterator[T]) -> JsonArray:
    result: JsonArray = []
    for origin in origins:
        result.append(_fill(filler, origin))
    return result
