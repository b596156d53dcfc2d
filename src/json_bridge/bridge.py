"""Configurable facade over the JSON Bridge operations."""

import logging
from contextlib import nullcontext
from typing import Any, Iterable, Optional, Type
from .types import (
    Filler,
    JSONBridgeInterface,
    JsonArray,
    JsonObject,
    JsonValue,
)
from .collector import collect, collect_split, json_array_collector
from .projection import to_json, to_json_array
from .sequence import LazySequence, stream_checked, stream_elements, stream_of
from .profiler import PerformanceProfiler
from .utils.validation import ValidationUtils


class JSONBridge(JSONBridgeInterface):
    """
    Facade bundling projection, collection and array views.

    Configuration is passed through the constructor. Failures raised by fillers
    or sources propagate unchanged and are not logged.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 check_element_types: bool = False,
                 split_parts: int = 1,
                 enable_profiling: bool = False):
        """
        Initialize the bridge.

        Args:
            logger: Optional logger instance
            check_element_types: Check elements against the requested type in stream()
            split_parts: Chunks used by collect(); 1 collects sequentially
            enable_profiling: Record performance metrics for each operation
        """
        ValidationUtils.ensure_valid(ValidationUtils.validate_parts(split_parts))

        self.logger = logger or logging.getLogger(__name__)
        self.check_element_types = check_element_types
        self.split_parts = split_parts
        self.collector = json_array_collector()
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None

    def to_json(self, filler: Filler, origin: Any) -> JsonObject:
        """Populate a fresh JSON object from one origin value."""
        with self._profile("to_json") as session:
            result = to_json(filler, origin)
            if session is not None:
                session.record_elements(1)
        return result

    def to_json_array(self, filler: Filler, origins: Iterable[Any]) -> JsonArray:
        """
        Project every origin value into a fresh JSON array.

        Args:
            filler: Callable populating a fresh dict from one origin
            origins: Iterable, LazySequence or iterator of origins

        Returns:
            A fresh list with one filled dict per origin
        """
        with self._profile("to_json_array") as session:
            result = to_json_array(filler, origins)
            if session is not None:
                session.record_elements(len(result))
        self.logger.debug(f"Projected {len(result)} origins into a JSON array")
        return result

    def collect(self, elements: Iterable[JsonValue]) -> JsonArray:
        """
        Collect JSON elements into a fresh JSON array.

        Args:
            elements: Iterable or LazySequence of JSON elements

        Returns:
            A fresh list holding the elements in encounter order
        """
        with self._profile("collect") as session:
            if self.split_parts > 1:
                result = collect_split(elements, self.collector, self.split_parts)
            else:
                result = collect(elements, self.collector)
            if session is not None:
                session.record_elements(len(result))
        self.logger.debug(f"Collected {len(result)} elements into a JSON array "
                          f"(split_parts={self.split_parts})")
        return result

    def stream(self, array: JsonArray, element_type: Optional[Type[Any]] = None) -> LazySequence:
        """
        View a JSON array as a lazy sequence.

        Without ``element_type`` the elements are general JSON values. With it,
        the view is checked on arrival when ``check_element_types`` is set and
        unchecked otherwise.
        """
        if element_type is None:
            view = stream_elements(array)
        elif self.check_element_types:
            view = stream_checked(array, element_type)
        else:
            view = stream_of(array, element_type)
        if element_type is not None:
            for warning in ValidationUtils.validate_element_type(element_type).warnings:
                self.logger.debug(f"Element type warning: {warning}")
        self.logger.debug(f"Created view over {len(array)} array elements")
        return view

    def _profile(self, operation_name: str):
        if self.profiler is None:
            return nullcontext()
        return self.profiler.profile_operation(operation_name)
