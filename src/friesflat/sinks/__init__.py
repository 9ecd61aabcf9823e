"""Destinations for serialized tuples."""

from .elastic import ElasticsearchSink
from .stream import StreamSink

__all__ = ["ElasticsearchSink", "StreamSink"]
