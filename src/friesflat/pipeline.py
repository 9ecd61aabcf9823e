"""Convert one document's frame collections and hand the tuples to a sink."""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping, Protocol

from .flatten import EventFlattener, OutputTuple
from .frames import ENTITIES, EVENTS, SENTENCES, collection_frames
from .graph import FrameGraph

logger = logging.getLogger(__name__)


class IndexSink(Protocol):
    """Anything that accepts serialized tuples for indexing."""

    def submit(self, text: str) -> bool:  # pragma: no cover - Protocol
        ...


class ConversionPipeline:
    """Build the frame graph of a document, flatten its events and submit them.

    Parameters
    ----------
    sink:
        Receives each serialized tuple.  Its boolean result is only used for
        counting; a rejected tuple does not stop the conversion.
    debug:
        Log every serialized tuple, pretty printed, at ``DEBUG`` level.
    """

    def __init__(self, sink: IndexSink, *, debug: bool = False) -> None:
        self.sink = sink
        self.debug = debug

    # ------------------------------------------------------------------
    def build_graph(self, document_id: str, collections: Mapping[str, Any]) -> FrameGraph:
        """Return the :class:`FrameGraph` for ``collections``.

        Raises :class:`~friesflat.errors.DocumentError` when a collection is
        missing or its envelope is malformed.
        """

        sentences = collection_frames(document_id, SENTENCES, collections.get(SENTENCES))
        entities = collection_frames(document_id, ENTITIES, collections.get(ENTITIES))
        events = collection_frames(document_id, EVENTS, collections.get(EVENTS))
        graph = FrameGraph.build(sentences, entities, events)
        if graph.skipped:
            logger.warning("%s: skipped %d malformed frame(s)", document_id, graph.skipped)
        return graph

    def tuples(self, document_id: str, graph: FrameGraph) -> Iterator[OutputTuple]:
        """Yield the tuples of every interesting event in collection order."""

        flattener = EventFlattener(graph, document_id)
        for event in graph.events.values():
            if event.event_type is None:
                continue
            yield from flattener.flatten(event)

    def convert(self, document_id: str, collections: Mapping[str, Any]) -> int:
        """Convert one document and return the number of tuples accepted."""

        graph = self.build_graph(document_id, collections)
        accepted = 0
        for output in self.tuples(document_id, graph):
            if self.debug:
                logger.debug("%s tuple:\n%s", document_id, output.to_json(indent=2))
            if self.sink.submit(output.to_json()):
                accepted += 1
        logger.info("%s: %d tuple(s) accepted", document_id, accepted)
        return accepted


__all__ = ["ConversionPipeline", "IndexSink"]
