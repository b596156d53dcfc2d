"""
JSON Bridge - Adapters between lazy sequences and the JSON tree model.

Projects domain objects into JSON arrays through fillers, collects JSON
elements into arrays and views JSON arrays as lazy sequences.
"""

from .bridge import JSONBridge
from .collector import Collector, collect, collect_split, json_array_collector
from .projection import to_json, to_json_array
from .sequence import LazySequence, stream_checked, stream_elements, stream_of
from .types import (
    Characteristics,
    ElementTypeError,
    PreconditionError,
    ProcessingError,
    SequenceState,
    SequenceStateError,
)

__version__ = "1.0.0"
__all__ = [
    "JSONBridge",
    "Collector",
    "collect",
    "collect_split",
    "json_array_collector",
    "to_json",
    "to_json_array",
    "LazySequence",
    "stream_checked",
    "stream_elements",
    "stream_of",
    "Characteristics",
    "ElementTypeError",
    "PreconditionError",
    "ProcessingError",
    "SequenceState",
    "SequenceStateError",
]
