"""Lazy sequences and views of JSON arrays as lazy sequences."""

from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, Type, TypeVar, cast
from .types import (
    CollectorInterface,
    ElementTypeError,
    JsonArray,
    JsonValue,
    SequenceState,
    SequenceStateError,
)
from .utils.validation import ValidationUtils

T = TypeVar("T")
U = TypeVar("U")


class LazySequence(Generic[T]):
    """
    Single-pass, pull-based producer of values.

    The sequence is never parallel. When the total size is known up front it
    is reported exactly through ``__length_hint__`` so that consumers can size
    their containers before pulling elements.

    Intermediate operations (``map``, ``filter``) and terminal operations
    (``collect``, ``to_list``, ``for_each``) may only be applied to a sequence
    that has not been operated upon yet. A sequence handed to such an
    operation can no longer be pulled directly.
    """

    def __init__(self, source: Iterable[T], size: Optional[int] = None):
        """
        Initialize the sequence.

        Args:
            source: Iterable supplying the elements, iterated lazily
            size: Exact number of elements, if known
        """
        self._iterator = iter(source)
        self._remaining = size
        self._state = SequenceState.NOT_STARTED
        self._linked = False

    @property
    def state(self) -> SequenceState:
        """Current position in the not-started/in-progress/exhausted lifecycle."""
        return self._state

    @property
    def is_parallel(self) -> bool:
        return False

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if self._linked:
            raise SequenceStateError(
                "Cannot pull directly: sequence is owned by another operation",
                context={"operation": "next", "state": self._state.value}
            )
        return self._pull()

    def __length_hint__(self) -> int:
        if self._remaining is None:
            return NotImplemented
        return self._remaining

    def __repr__(self) -> str:
        size = "unknown" if self._remaining is None else self._remaining
        return f"LazySequence(state={self._state.value}, remaining={size})"

    def estimate_size(self) -> Optional[int]:
        """Exact number of remaining elements, or None when unknown."""
        return self._remaining

    def claim(self, operation: str) -> Iterator[T]:
        """
        Mark the sequence as operated upon and hand over its elements.

        Once claimed, the sequence can no longer be pulled directly; only the
        returned iterator yields its elements.

        Args:
            operation: Name of the operation taking ownership of the sequence

        Returns:
            Iterator over the elements of the sequence

        Raises:
            SequenceStateError: If the sequence was already consumed or claimed
        """
        if self._linked or self._state is not SequenceState.NOT_STARTED:
            raise SequenceStateError(
                f"Cannot apply '{operation}': sequence has already been operated upon",
                context={"operation": operation, "state": self._state.value}
            )
        self._linked = True
        return self._elements()

    def map(self, fn: Callable[[T], U]) -> "LazySequence[U]":
        """Lazily apply ``fn`` to every element; the size is preserved."""
        elements = self.claim("map")
        return LazySequence((fn(element) for element in elements), size=self._remaining)

    def filter(self, predicate: Callable[[T], bool]) -> "LazySequence[T]":
        """Lazily keep the elements matching ``predicate``; the size becomes unknown."""
        elements = self.claim("filter")
        return LazySequence(element for element in elements if predicate(element))

    def collect(self, collector: CollectorInterface) -> Any:
        """
        Fold every element into a container provided by ``collector``.

        Args:
            collector: Fold descriptor

        Returns:
            The collector's finished result
        """
        ValidationUtils.ensure_valid(ValidationUtils.validate_collector(collector))
        elements = self.claim("collect")
        container = collector.supply()
        for element in elements:
            collector.accumulate(container, element)
        return collector.finish(container)

    def to_list(self) -> List[T]:
        return list(self.claim("to_list"))

    def for_each(self, action: Callable[[T], Any]) -> None:
        for element in self.claim("for_each"):
            action(element)

    def _pull(self) -> T:
        if self._state is SequenceState.EXHAUSTED:
            raise StopIteration
        self._state = SequenceState.IN_PROGRESS
        try:
            element = next(self._iterator)
        except StopIteration:
            self._state = SequenceState.EXHAUSTED
            if self._remaining is not None:
                self._remaining = 0
            raise
        if self._remaining is not None:
            self._remaining = max(0, self._remaining - 1)
        return element

    def _elements(self) -> Iterator[T]:
        while True:
            try:
                element = self._pull()
            except StopIteration:
                return
            yield element


def stream_elements(array: JsonArray) -> LazySequence[JsonValue]:
    """
    View a JSON array as a lazy sequence of general JSON elements.

    The array is neither copied nor mutated. Each call returns an independent
    traversal whose size hint is ``len(array)``.

    Args:
        array: The source array

    Returns:
        The new sequence
    """
    ValidationUtils.ensure_valid(ValidationUtils.validate_json_array(array))
    return LazySequence(array, size=len(array))


def stream_of(array: JsonArray, element_type: Optional[Type[U]] = None) -> LazySequence[U]:
    """
    View a JSON array as a lazy sequence typed as ``element_type``.

    The element type is not checked. For convenience any JSON element type may
    be requested even though the array carries no information about it: a
    caller who knows the array is homogeneous avoids per-element casts, while
    an element of another type only surfaces when the consumer uses it. Use
    ``stream_checked`` when the structure of the array is unknown.

    Args:
        array: The source array
        element_type: The element type assumed by the caller

    Returns:
        The new sequence
    """
    ValidationUtils.ensure_valid(ValidationUtils.validate_json_array(array))
    if element_type is not None:
        ValidationUtils.ensure_valid(ValidationUtils.validate_element_type(element_type))
    return cast(LazySequence[U], LazySequence(array, size=len(array)))


def stream_checked(array: JsonArray, element_type: Type[U]) -> LazySequence[U]:
    """
    View a JSON array as a lazy sequence whose elements are checked on arrival.

    Construction does not inspect the array; an element that is not an instance
    of ``element_type`` raises ElementTypeError when it is pulled.
    """
    ValidationUtils.ensure_valid(
        ValidationUtils.validate_json_array(array),
        ValidationUtils.validate_element_type(element_type),
    )
    return LazySequence(_checked_elements(array, element_type), size=len(array))


def _checked_elements(array: JsonArray, element_type: Type[U]) -> Iterator[U]:
    for index, element in enumerate(array):
        if not isinstance(element, element_type):
            raise ElementTypeError(
                f"Element at index {index} is {type(element).__name__}, "
                f"expected {_type_name(element_type)}",
                context={"index": index, "element": element}
            )
        yield element


def _type_name(element_type: Any) -> str:
    if isinstance(element_type, tuple):
        return " | ".join(t.__name__ for t in element_type)
    return element_type.__name__
