"""Performance profiler for JSON Bridge operations."""

import json
import time
import psutil
import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class PerformanceMetrics:
    """Performance metrics for one bridge operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    element_count: int
    memory_start_mb: float
    memory_end_mb: float
    memory_peak_mb: float
    throughput_eps: float


@dataclass(eq=False)
class ProfileSession:
    """State of one profiled operation; sessions may nest."""
    operation_name: str
    start_time: float
    start_memory: float
    peak_memory: float
    element_count: int = 0
    closed: bool = False

    def record_elements(self, count: int) -> None:
        """Record the number of elements handled by this operation."""
        self.element_count += count
        self.sample_memory()

    def sample_memory(self) -> None:
        """Sample current process memory."""
        if self.closed:
            return
        self.peak_memory = max(self.peak_memory, PerformanceProfiler._rss_mb())


class PerformanceProfiler:
    """
    Profiler recording duration, element throughput and process memory.

    Every profiled operation gets its own session, so an operation started
    while another is running (a filler calling back into the bridge) is
    recorded independently. Only successful operations are recorded; a failed
    operation discards its session without logging.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []
        self.active_sessions: List[ProfileSession] = []

    @contextmanager
    def profile_operation(self, operation_name: str):
        """
        Context manager for profiling operations.

        Args:
            operation_name: Name of the operation being profiled

        Yields:
            The ProfileSession of this operation
        """
        session = self.start_profiling(operation_name)
        try:
            yield session
        except BaseException:
            self.discard_profiling(session)
            raise
        self.stop_profiling(session)

    def start_profiling(self, operation_name: str) -> ProfileSession:
        """
        Start profiling an operation.

        Args:
            operation_name: Name of the operation

        Returns:
            The new session
        """
        start_memory = self._rss_mb()
        session = ProfileSession(
            operation_name=operation_name,
            start_time=time.time(),
            start_memory=start_memory,
            peak_memory=start_memory
        )
        self.active_sessions.append(session)

        self.logger.debug(f"Started profiling: {operation_name}")
        return session

    def stop_profiling(self, session: ProfileSession) -> PerformanceMetrics:
        """
        Stop profiling a session and return its metrics.

        Args:
            session: Session returned by start_profiling

        Returns:
            PerformanceMetrics object with collected data
        """
        if session.closed or all(s is not session for s in self.active_sessions):
            raise ValueError("No active profiling session")

        end_time = time.time()
        duration = end_time - session.start_time
        end_memory = self._rss_mb()
        throughput = session.element_count / duration if duration > 0 else 0.0

        metrics = PerformanceMetrics(
            operation_name=session.operation_name,
            start_time=session.start_time,
            end_time=end_time,
            duration=duration,
            element_count=session.element_count,
            memory_start_mb=session.start_memory,
            memory_end_mb=end_memory,
            memory_peak_mb=max(session.peak_memory, end_memory),
            throughput_eps=throughput
        )

        self.metrics_history.append(metrics)

        self.logger.info(f"Performance Summary - {session.operation_name}: "
                         f"{session.element_count} elements in {duration:.4f}s "
                         f"({throughput:.0f} elements/s, peak {metrics.memory_peak_mb:.1f} MB)")

        self._close(session)
        return metrics

    def discard_profiling(self, session: ProfileSession) -> None:
        """Drop a session without recording it."""
        self._close(session)

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all performance metrics.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        count = len(self.metrics_history)
        total_duration = sum(m.duration for m in self.metrics_history)
        total_elements = sum(m.element_count for m in self.metrics_history)

        return {
            "total_operations": count,
            "total_duration": total_duration,
            "total_elements": total_elements,
            "average_throughput_eps": sum(m.throughput_eps for m in self.metrics_history) / count,
            "average_memory_peak_mb": sum(m.memory_peak_mb for m in self.metrics_history) / count,
            "operations": [
                {
                    "name": m.operation_name,
                    "duration": m.duration,
                    "elements": m.element_count,
                    "memory_peak": m.memory_peak_mb
                }
                for m in self.metrics_history
            ]
        }

    def export_metrics(self, format: str = "json") -> str:
        """
        Export performance metrics in specified format.

        Args:
            format: Export format ("json", "csv", "summary")

        Returns:
            Formatted metrics string
        """
        if format == "json":
            return json.dumps([
                {
                    "operation": m.operation_name,
                    "duration": m.duration,
                    "element_count": m.element_count,
                    "memory_peak_mb": m.memory_peak_mb,
                    "throughput_eps": m.throughput_eps
                }
                for m in self.metrics_history
            ], indent=2)

        elif format == "csv":
            lines = ["operation,duration,element_count,memory_peak_mb,throughput_eps"]
            for m in self.metrics_history:
                lines.append(f"{m.operation_name},{m.duration},{m.element_count},"
                             f"{m.memory_peak_mb},{m.throughput_eps}")
            return "\n".join(lines)

        elif format == "summary":
            summary = self.get_performance_summary()
            if summary["total_operations"] == 0:
                return "Performance Summary:\n  Total Operations: 0"
            lines = [
                "Performance Summary:",
                f"  Total Operations: {summary['total_operations']}",
                f"  Total Duration: {summary['total_duration']:.4f}s",
                f"  Total Elements: {summary['total_elements']}",
                f"  Average Throughput: {summary['average_throughput_eps']:.0f} elements/s",
                f"  Average Memory Peak: {summary['average_memory_peak_mb']:.1f} MB"
            ]
            return "\n".join(lines)

        else:
            raise ValueError(f"Unsupported export format: {format}")

    def _close(self, session: ProfileSession) -> None:
        session.closed = True
        self.active_sessions = [s for s in self.active_sessions if s is not session]

    @staticmethod
    def _rss_mb() -> float:
        return psutil.Process().memory_info().rss / 1024 / 1024
