"""Flatten FRIES extraction results into relation tuples for search indexing."""

from .errors import ConfigError, DocumentError, FriesflatError
from .flatten import EventFlattener, Location, OutputTuple, Predicate
from .graph import FrameGraph
from .pipeline import ConversionPipeline, IndexSink
from .records import (
    ArgKind,
    ComplexArgument,
    EntityArgument,
    EntityRecord,
    EventArgument,
    EventRecord,
    EventType,
    SentenceRecord,
    Sign,
    Xref,
)
from .runner import ConversionRunner, RunReport

__version__ = "0.1.0"

__all__ = [
    "ArgKind",
    "ComplexArgument",
    "ConfigError",
    "ConversionPipeline",
    "ConversionRunner",
    "DocumentError",
    "EntityArgument",
    "EntityRecord",
    "EventArgument",
    "EventFlattener",
    "EventRecord",
    "EventType",
    "FrameGraph",
    "FriesflatError",
    "IndexSink",
    "Location",
    "OutputTuple",
    "Predicate",
    "RunReport",
    "SentenceRecord",
    "Sign",
    "Xref",
]
