# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for metrics recorders.

A ResourceClient reports every call to each of its recorders. The built-in
recorders are ClientMetrics (in-memory counters) and PrometheusClientMetrics;
any object with these three methods can be added.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsRecorderProtocol(Protocol):
    """
    Protocol for call metrics backends.

    Example:
        >>> class LogRecorder:
        ...     def record_outcome(self, method, outcome, duration): pass
        ...     def record_stream(self, method, outcome, chunks, size, duration): pass
        ...     def record_serialization_error(self, method): pass
        >>>
        >>> isinstance(LogRecorder(), MetricsRecorderProtocol)
        True
    """

    def record_outcome(self, method: str, outcome: str, duration: float) -> None:
        """
        Record a finished non-streaming call.

        Args:
            method: HTTP verb
            outcome: One of the OUTCOME_* label values
            duration: Seconds from dispatch to outcome
        """
        ...

    def record_stream(
        self,
        method: str,
        outcome: str,
        chunks: int,
        size: int,
        duration: float,
    ) -> None:
        """
        Record a finished streaming call.

        Args:
            method: HTTP verb
            outcome: OUTCOME_SUCCESS, OUTCOME_TRANSPORT_ERROR or
                OUTCOME_ABORTED
            chunks: Number of chunks delivered
            size: Number of bytes delivered
            duration: Seconds from opening to the last chunk
        """
        ...

    def record_serialization_error(self, method: str) -> None:
        """Record a call rejected before dispatch."""
        ...


__all__ = ["MetricsRecorderProtocol"]
