"""Observability sinks for docshape."""

from .sink import LoggingSink, MemorySink, MetadataSink, NoopSink, new_attr

__all__ = [
    "MetadataSink",
    "NoopSink",
    "LoggingSink",
    "MemorySink",
    "new_attr",
]
