"""Per-document cross-reference graph of sentences, entities and events.

The graph is an arena of records keyed by frame id rather than a pointer
graph: arguments hold string links and are dereferenced on demand through the
``lookup_*`` methods.  Lookups of unknown ids return ``None``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Type

from pydantic import ValidationError

from .frames import (
    ENTITY_FRAME_TYPE,
    SENTENCE_FRAME_TYPE,
    EntityFrame,
    EventFrame,
    FrameModel,
    SentenceFrame,
    frame_type_of,
)
from .records import EntityRecord, EventRecord, SentenceRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameGraph:
    """Read-only id-keyed lookups for one document."""

    sentences: Mapping[str, SentenceRecord]
    entities: Mapping[str, EntityRecord]
    events: Mapping[str, EventRecord]
    skipped: int = 0

    @classmethod
    def build(
        cls,
        sentence_frames: Iterable[Mapping[str, Any]],
        entity_frames: Iterable[Mapping[str, Any]],
        event_frames: Iterable[Mapping[str, Any]],
    ) -> "FrameGraph":
        """Parse the three frame collections of a document.

        Sentences are built before entities and entities before events.
        Frames that fail validation are logged and left out of the graph.
        """

        counter = _SkipCounter()
        sentences = _index(
            sentence_frames,
            SentenceFrame,
            counter,
            keep=lambda frame: frame_type_of(frame) == SENTENCE_FRAME_TYPE,
        )
        entities = _index(
            entity_frames,
            EntityFrame,
            counter,
            keep=lambda frame: frame_type_of(frame) == ENTITY_FRAME_TYPE,
        )
        events = _index(event_frames, EventFrame, counter)
        return cls(
            sentences=MappingProxyType(sentences),
            entities=MappingProxyType(entities),
            events=MappingProxyType(events),
            skipped=counter.count,
        )

    def lookup_sentence(self, sentence_id: Optional[str]) -> Optional[SentenceRecord]:
        if not sentence_id:
            return None
        return self.sentences.get(sentence_id)

    def lookup_entity(self, entity_id: Optional[str]) -> Optional[EntityRecord]:
        if not entity_id:
            return None
        return self.entities.get(entity_id)

    def lookup_event(self, event_id: Optional[str]) -> Optional[EventRecord]:
        if not event_id:
            return None
        return self.events.get(event_id)


class _SkipCounter:
    def __init__(self) -> None:
        self.count = 0


def _index(
    frames: Iterable[Mapping[str, Any]],
    model: Type[FrameModel],
    counter: _SkipCounter,
    *,
    keep: Callable[[Mapping[str, Any]], bool] = lambda frame: True,
) -> Dict[str, Any]:
    records: Dict[str, Any] = {}
    for frame in frames:
        if not keep(frame):
            continue
        try:
            parsed = model.model_validate(frame)
        except ValidationError as exc:
            counter.count += 1
            logger.warning(
                "Skipping malformed %s frame %s: %s",
                model.__name__,
                frame.get("frame-id"),
                exc.errors(include_url=False),
            )
            continue
        records[parsed.frame_id] = parsed.to_record()
    return records


__all__ = ["FrameGraph"]
