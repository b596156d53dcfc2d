"""Collectors folding sequences of JSON elements into JSON arrays."""

import math
import operator
from dataclasses import dataclass
from itertools import islice
from typing import Any, Callable, FrozenSet, Generic, Iterable, List, Optional, TypeVar
from .types import Characteristics, CollectorInterface, JsonArray, JsonValue
from .sequence import LazySequence
from .utils.validation import ValidationUtils

T = TypeVar("T")
A = TypeVar("A")
R = TypeVar("R")

# Chunk size used by collect_split when the source reports no size hint.
DEFAULT_CHUNK_SIZE = 1024


def _identity(container: Any) -> Any:
    return container


@dataclass(frozen=True)
class Collector(CollectorInterface, Generic[T, A, R]):
    """
    Fold descriptor of (supplier, accumulator, combiner, finisher).

    The combiner must be associative and merge its arguments left before
    right; ordered reducers rely on that to preserve encounter order.
    """

    supplier: Callable[[], A]
    accumulator: Callable[[A, T], None]
    combiner: Callable[[A, A], A]
    finisher: Callable[[A], R] = _identity
    characteristics: FrozenSet[Characteristics] = frozenset()

    @classmethod
    def of(cls, supplier: Callable[[], A],
           accumulator: Callable[[A, T], None],
           combiner: Callable[[A, A], A],
           finisher: Optional[Callable[[A], R]] = None,
           *characteristics: Characteristics) -> "Collector[T, A, R]":
        """
        Build a collector.

        Without a finisher the container is the result and the collector
        declares IDENTITY_FINISH.
        """
        declared = set(characteristics)
        if finisher is None:
            finisher = _identity
            declared.add(Characteristics.IDENTITY_FINISH)
        return cls(supplier, accumulator, combiner, finisher, frozenset(declared))

    def supply(self) -> A:
        return self.supplier()

    def accumulate(self, container: A, element: T) -> None:
        self.accumulator(container, element)

    def combine(self, left: A, right: A) -> A:
        return self.combiner(left, right)

    def finish(self, container: A) -> R:
        if Characteristics.IDENTITY_FINISH in self.characteristics:
            return container
        return self.finisher(container)


def _append(array: JsonArray, element: JsonValue) -> None:
    array.append(element)


def _extend(one: JsonArray, other: JsonArray) -> JsonArray:
    one.extend(other)
    return one


def json_array_collector() -> Collector[JsonValue, JsonArray, JsonArray]:
    """
    Returns a collector that accumulates JSON elements into a new JSON array.

    The collector is ordered and non-concurrent; its finisher is the identity.
    """
    return Collector.of(list, _append, _extend)


def collect(source: Iterable[T], collector: CollectorInterface) -> Any:
    """
    Sequentially fold ``source`` with ``collector``.

    Args:
        source: Elements to fold; a LazySequence must not have been operated upon
        collector: Fold descriptor

    Returns:
        The collector's finished result
    """
    ValidationUtils.ensure_valid(
        ValidationUtils.validate_source(source),
        ValidationUtils.validate_collector(collector),
    )
    if isinstance(source, LazySequence):
        return source.collect(collector)

    container = collector.supply()
    for element in source:
        collector.accumulate(container, element)
    return collector.finish(container)


def collect_split(source: Iterable[T], collector: CollectorInterface, parts: int = 2) -> Any:
    """
    Fold ``source`` by ordered split-and-merge on the caller's thread.

    The source is cut into contiguous chunks, sized from its length hint so
    that roughly ``parts`` chunks result. Each chunk is accumulated into its own
    container and neighbouring containers are merged left to right, so the
    result keeps encounter order. A source that fits into a single chunk is
    never passed to the combiner.

    Args:
        source: Elements to fold
        collector: Fold descriptor with an associative combiner
        parts: Number of chunks to aim for

    Returns:
        The collector's finished result
    """
    ValidationUtils.ensure_valid(
        ValidationUtils.validate_source(source),
        ValidationUtils.validate_collector(collector),
        ValidationUtils.validate_parts(parts),
    )
    hint = operator.length_hint(source, 0)
    chunk_size = math.ceil(hint / parts) if hint > 0 else DEFAULT_CHUNK_SIZE

    if isinstance(source, LazySequence):
        iterator = source.claim("collect_split")
    else:
        iterator = iter(source)
    containers: List[Any] = []
    while True:
        container = collector.supply()
        count = 0
        for element in islice(iterator, chunk_size):
            collector.accumulate(container, element)
            count += 1
        if count == 0:
            if not containers:
                containers.append(container)
            break
        containers.append(container)
        if count < chunk_size:
            break

    return collector.finish(_merge(containers, collector))


def _merge(containers: List[Any], collector: CollectorInterface) -> Any:
    """Merge neighbouring containers pairwise until one remains."""
    while len(containers) > 1:
        merged = [
            collector.combine(containers[i], containers[i + 1])
            for i in range(0, len(containers) - 1, 2)
        ]
        if len(containers) % 2:
            merged.append(containers[-1])
        containers = merged
    return containers[0]
