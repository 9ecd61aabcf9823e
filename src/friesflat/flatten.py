"""Flatten event mentions into simple relation tuples.

Each interesting event type has one handler.  Handlers read the event's
arguments through :mod:`friesflat.resolver` and return zero or more
:class:`OutputTuple` objects:

``activation`` / ``regulation``
    One tuple per controller, with the controlled entity as theme.  A nested
    controlled event is dereferenced to its first theme and its subtype is
    promoted onto the predicate.  Regulations are kept only when they control
    a protein modification.

``complex-assembly``
    Two tuples (A -> B and B -> A) for a binding with exactly two themes.

``translocation``
    One tuple with theme, destination and optional origin.

``protein-modification``
    One tuple with the first theme.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional

from .graph import FrameGraph
from .records import (
    ComplexArgument,
    EntityRecord,
    EventArgument,
    EventRecord,
    EventType,
    Sign,
)
from .resolver import (
    first_arg_by_role,
    links_by_prefix,
    resolve_entities,
    resolve_entity,
    resolve_event,
    resolve_links,
    role_entities,
)

CONTROLLED = "controlled"
CONTROLLER = "controller"
THEME = "theme"
SOURCE = "source"
DESTINATION = "destination"

# the only nested subtype for which a regulation is kept
REGULATED_SUBTYPE = "protein-modification"


@dataclass(frozen=True)
class Predicate:
    type: str
    sign: Sign
    subtype: Optional[str] = None
    regulation_type: Optional[str] = None
    is_direct: bool = False
    is_hypothesis: bool = False
    rule: Optional[str] = None

    @classmethod
    def from_event(cls, event: EventRecord) -> "Predicate":
        return cls(
            type=event.type or "",
            sign=event.sign,
            subtype=event.subtype,
            regulation_type=event.regulation_type,
            is_direct=event.is_direct,
            is_hypothesis=event.is_hypothesis,
            rule=event.rule,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type, "sign": self.sign.value}
        if self.subtype:
            data["subtype"] = self.subtype
        if self.regulation_type:
            data["regulationType"] = self.regulation_type
        if self.is_direct:
            data["isDirect"] = True
        if self.is_hypothesis:
            data["isHypothesis"] = True
        if self.rule:
            data["rule"] = self.rule
        return data


@dataclass(frozen=True)
class Location:
    sentence: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"sentence": self.sentence} if self.sentence is not None else {}


@dataclass(frozen=True)
class OutputTuple:
    """A flat relation ready to be indexed."""

    document_id: str
    predicate: Predicate
    location: Location
    agent: Optional[EntityRecord] = None
    theme: Optional[EntityRecord] = None
    destination: Optional[EntityRecord] = None
    origin: Optional[EntityRecord] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "docId": self.document_id,
            "predicate": self.predicate.to_dict(),
            "location": self.location.to_dict(),
        }
        for key, entity in (
            ("agent", self.agent),
            ("theme", self.theme),
            ("destination", self.destination),
            ("origin", self.origin),
        ):
            if entity is not None:
                data[key] = entity.to_dict()
        return data

    def to_json(self, *, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)


Handler = Callable[[EventRecord, Predicate, Location], List[OutputTuple]]


class EventFlattener:
    """Produce output tuples for the events of one document."""

    def __init__(self, graph: FrameGraph, document_id: str) -> None:
        self.graph = graph
        self.document_id = document_id
        self._handlers: Dict[EventType, Handler] = {
            EventType.ACTIVATION: self._flatten_activation,
            EventType.REGULATION: self._flatten_regulation,
            EventType.COMPLEX_ASSEMBLY: self._flatten_complex_assembly,
            EventType.TRANSLOCATION: self._flatten_translocation,
            EventType.PROTEIN_MODIFICATION: self._flatten_protein_modification,
        }

    # ------------------------------------------------------------------
    def flatten(self, event: EventRecord) -> List[OutputTuple]:
        """Return the tuples for ``event``; uninteresting types give none."""

        event_type = event.event_type
        if event_type is None:
            return []
        handler = self._handlers[event_type]
        return handler(event, Predicate.from_event(event), self._location(event))

    def _location(self, event: EventRecord) -> Location:
        sentence = self.graph.lookup_sentence(event.sentence_id)
        return Location(sentence=sentence.text if sentence is not None else None)

    def _tuple(self, predicate: Predicate, location: Location, **payload: Optional[EntityRecord]) -> OutputTuple:
        return OutputTuple(
            document_id=self.document_id,
            predicate=predicate,
            location=location,
            **payload,
        )

    # ------------------------------------------------------------------
    def _flatten_activation(
        self, event: EventRecord, predicate: Predicate, location: Location
    ) -> List[OutputTuple]:
        return self._flatten_control(event, predicate, location, modifications_only=False)

    def _flatten_regulation(
        self, event: EventRecord, predicate: Predicate, location: Location
    ) -> List[OutputTuple]:
        return self._flatten_control(event, predicate, location, modifications_only=True)

    def _flatten_control(
        self,
        event: EventRecord,
        predicate: Predicate,
        location: Location,
        *,
        modifications_only: bool,
    ) -> List[OutputTuple]:
        patient = self._controlled(event)
        if patient is None:
            return []

        promoted = patient.subtype
        if promoted:
            predicate = replace(predicate, subtype=promoted)
            patient = patient.enriched(None)
        if modifications_only and promoted != REGULATED_SUBTYPE:
            return []

        return [
            self._tuple(predicate, location, agent=agent, theme=patient)
            for agent in self._controllers(event)
        ]

    def _controlled(self, event: EventRecord) -> Optional[EntityRecord]:
        """Return the entity controlled by ``event``.

        When the controlled argument is a nested event, its first theme is
        returned as a copy carrying the nested event's subtype; the entity in
        the graph is left untouched.
        """

        controlled = first_arg_by_role(event, CONTROLLED)
        if controlled is None:
            return None
        if not isinstance(controlled, EventArgument):
            return resolve_entity(self.graph, controlled)

        nested = resolve_event(self.graph, controlled)
        if nested is None:
            return None
        themes = role_entities(self.graph, nested, THEME)
        if not themes:
            return None
        if nested.subtype:
            return themes[0].enriched(nested.subtype)
        return themes[0]

    def _controllers(self, event: EventRecord) -> List[EntityRecord]:
        controller = first_arg_by_role(event, CONTROLLER)
        if controller is None:
            return []
        if isinstance(controller, ComplexArgument):
            return resolve_links(self.graph, links_by_prefix(controller, THEME))
        return resolve_entities(self.graph, [controller])

    # ------------------------------------------------------------------
    def _flatten_complex_assembly(
        self, event: EventRecord, predicate: Predicate, location: Location
    ) -> List[OutputTuple]:
        themes = role_entities(self.graph, event, THEME)
        if len(themes) != 2:
            return []
        first, second = themes
        return [
            self._tuple(predicate, location, agent=first, theme=second),
            self._tuple(predicate, location, agent=second, theme=first),
        ]

    def _flatten_translocation(
        self, event: EventRecord, predicate: Predicate, location: Location
    ) -> List[OutputTuple]:
        patient = _first(role_entities(self.graph, event, THEME))
        destination = _first(role_entities(self.graph, event, DESTINATION))
        if patient is None or destination is None:
            return []
        origin = _first(role_entities(self.graph, event, SOURCE))
        return [
            self._tuple(
                predicate,
                location,
                theme=patient,
                destination=destination,
                origin=origin,
            )
        ]

    def _flatten_protein_modification(
        self, event: EventRecord, predicate: Predicate, location: Location
    ) -> List[OutputTuple]:
        themes = role_entities(self.graph, event, THEME)
        if not themes:
            return []
        return [self._tuple(predicate, location, theme=themes[0])]


def _first(entities: List[EntityRecord]) -> Optional[EntityRecord]:
    return entities[0] if entities else None


__all__ = ["EventFlattener", "Location", "OutputTuple", "Predicate", "REGULATED_SUBTYPE"]
