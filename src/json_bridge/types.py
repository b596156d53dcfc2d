"""Core type definitions for the JSON Bridge."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar, Union


T = TypeVar("T")

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]
JsonObject = Dict[str, Any]
JsonArray = List[Any]

# A filler populates a fresh JSON object from one domain value.
Filler = Callable[[JsonObject, T], None]


class ErrorType(Enum):
    """Enumeration of error types."""
    PRECONDITION = "precondition"
    SEQUENCE_STATE = "sequence_state"
    ELEMENT_TYPE = "element_type"


class SequenceState(Enum):
    """Lifecycle of a lazy sequence."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    EXHAUSTED = "exhausted"


class Characteristics(Enum):
    """Declared algebraic properties of a collector."""
    IDENTITY_FINISH = "identity_finish"
    UNORDERED = "unordered"
    CONCURRENT = "concurrent"


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


class ProcessingError(Exception):
    """Base exception for errors raised by the bridge itself."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class PreconditionError(ProcessingError, ValueError):
    """A required input is absent or unusable."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.PRECONDITION, context)


class SequenceStateError(ProcessingError, RuntimeError):
    """A lazy sequence has already been operated upon."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.SEQUENCE_STATE, context)


class ElementTypeError(ProcessingError, TypeError):
    """An array element does not match the requested element type."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.ELEMENT_TYPE, context)


# Abstract base classes for interfaces

class CollectorInterface(ABC):
    """Abstract fold descriptor: supplier, accumulator, combiner and finisher."""

    @abstractmethod
    def supply(self) -> Any:
        """Create a fresh empty container."""
        pass

    @abstractmethod
    def accumulate(self, container: Any, element: Any) -> None:
        """Fold one element into the container."""
        pass

    @abstractmethod
    def combine(self, left: Any, right: Any) -> Any:
        """Merge two partial containers, left before right."""
        pass

    @abstractmethod
    def finish(self, container: Any) -> Any:
        """Turn the container into the final result."""
        pass


class JSONBridgeInterface(ABC):
    """Abstract interface for the JSON Bridge facade."""

    @abstractmethod
    def to_json(self, filler: Filler, origin: Any) -> JsonObject:
        """Populate a fresh JSON object from one origin value."""
        pass

    @abstractmethod
    def to_json_array(self, filler: Filler, origins: Iterable[Any]) -> JsonArray:
        """Project every origin value into a fresh JSON array."""
        pass

    @abstractmethod
    def collect(self, elements: Iterable[JsonValue]) -> JsonArray:
        """Collect JSON elements into a fresh JSON array."""
        pass

    @abstractmethod
    def stream(self, array: JsonArray, element_type: Optional[Type[Any]] = None) -> Iterable[Any]:
        """View a JSON array as a lazy sequence."""
        pass
