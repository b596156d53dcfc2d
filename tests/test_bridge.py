"""Tests for the JSON Bridge facade."""

import logging
import pytest
from json_bridge.bridge import JSONBridge
from json_bridge.sequence import LazySequence
from json_bridge.types import ElementTypeError, PreconditionError


class TestJSONBridge:
    """Tests for JSONBridge class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.bridge = JSONBridge()

    def test_defaults(self):
        """Test default configuration."""
        assert self.bridge.check_element_types is False
        assert self.bridge.split_parts == 1
        assert self.bridge.profiler is None

    def test_invalid_split_parts(self):
        """Test configuration is validated."""
        with pytest.raises(PreconditionError):
            JSONBridge(split_parts=0)

    def test_to_json(self, users, user_filler):
        """Test single projection through the facade."""
        assert self.bridge.to_json(user_filler, users[2]) == {"name": "Carol", "age": 41}

    def test_to_json_array(self, users, user_filler):
        """Test array projection through the facade."""
        result = self.bridge.to_json_array(user_filler, users)

        assert [obj["name"] for obj in result] == ["Alice", "Bob", "Carol"]

    def test_collect_sequential(self):
        """Test sequential collection."""
        assert self.bridge.collect(iter([1, "a", True])) == [1, "a", True]

    def test_collect_split(self):
        """Test split-and-merge collection keeps order."""
        bridge = JSONBridge(split_parts=3)

        assert bridge.collect(list(range(10))) == list(range(10))

    def test_stream_without_type(self, heterogeneous_array):
        """Test the general view."""
        view = self.bridge.stream(heterogeneous_array)

        assert isinstance(view, LazySequence)
        assert list(view) == heterogeneous_array

    def test_stream_unchecked(self):
        """Test mismatching elements pass through when unchecked."""
        assert list(self.bridge.stream([1, "a"], int)) == [1, "a"]

    def test_stream_checked(self):
        """Test mismatching elements raise when checking is enabled."""
        bridge = JSONBridge(check_element_types=True)
        view = bridge.stream([1, "a"], int)

        assert next(view) == 1
        with pytest.raises(ElementTypeError):
            next(view)

    def test_round_trip(self, heterogeneous_array):
        """Test viewing then collecting yields an equal fresh array."""
        result = self.bridge.collect(self.bridge.stream(heterogeneous_array))

        assert result == heterogeneous_array
        assert result is not heterogeneous_array

    def test_debug_logging(self, caplog, value_filler):
        """Test successful operations log at debug level."""
        with caplog.at_level(logging.DEBUG, logger="json_bridge.bridge"):
            self.bridge.to_json_array(value_filler, ["a", "b"])

        assert "Projected 2 origins into a JSON array" in caplog.text

    def test_errors_propagate_without_logging(self, caplog):
        """Test filler failures surface unchanged and are not logged."""
        def fill(obj, value):
            raise LookupError(value)

        with caplog.at_level(logging.DEBUG, logger="json_bridge.bridge"):
            with pytest.raises(LookupError, match="x"):
                self.bridge.to_json_array(fill, ["x"])

        assert caplog.records == []

    def test_custom_logger(self, caplog):
        """Test an injected logger is used."""
        logger = logging.getLogger("custom.bridge")
        bridge = JSONBridge(logger=logger)

        with caplog.at_level(logging.DEBUG, logger="custom.bridge"):
            bridge.collect([1])

        assert any(record.name == "custom.bridge" for record in caplog.records)

    def test_profiling(self, users, user_filler):
        """Test profiling records every successful operation."""
        bridge = JSONBridge(enable_profiling=True)

        bridge.to_json(user_filler, users[0])
        bridge.to_json_array(user_filler, users)
        bridge.collect([1, 2])

        history = bridge.profiler.metrics_history
        assert [m.operation_name for m in history] == ["to_json", "to_json_array", "collect"]
        assert [m.element_count for m in history] == [1, 3, 2]

    def test_profiling_skips_failures(self):
        """Test failed operations leave no metrics."""
        bridge = JSONBridge(enable_profiling=True)

        with pytest.raises(PreconditionError):
            bridge.to_json_array(None, [1])

        assert bridge.profiler.metrics_history == []

    def test_profiling_nested_fill(self):
        """Test a filler calling back into the same bridge keeps both results."""
        bridge = JSONBridge(enable_profiling=True)

        def fill(obj, value):
            obj["n"] = value
            obj["child"] = bridge.to_json(lambda child, v: child.update(v=v), value)

        result = bridge.to_json_array(fill, [1, 2])

        assert result == [{"n": 1, "child": {"v": 1}}, {"n": 2, "child": {"v": 2}}]
        history = bridge.profiler.metrics_history
        assert [m.operation_name for m in history] == ["to_json", "to_json", "to_json_array"]
        assert history[-1].element_count == 2
        assert bridge.profiler.active_sessions == []

    def test_stream_logs_element_type_warning(self, caplog):
        """Test requesting int logs that booleans match it too."""
        with caplog.at_level(logging.DEBUG, logger="json_bridge.bridge"):
            view = self.bridge.stream([1, True], int)

        assert list(view) == [1, True]
        assert "Element type warning: bool is a subclass of int" in caplog.text

    def test_stream_without_warning(self, caplog):
        """Test unambiguous element types log no warning."""
        with caplog.at_level(logging.DEBUG, logger="json_bridge.bridge"):
            self.bridge.stream(["a"], str)

        assert "Element type warning" not in caplog.text
