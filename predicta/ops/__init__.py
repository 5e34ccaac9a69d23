"""Operational helpers."""

from predicta.ops.request_queue import RequestQueue
from predicta.ops.metrics import MetricsRecorder, InMemoryMetricsRecorder, get_metrics_recorder

__all__ = ["RequestQueue", "MetricsRecorder", "InMemoryMetricsRecorder", "get_metrics_recorder"]
