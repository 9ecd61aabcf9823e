"""Immutable records built from one document's extraction frames.

Records are the typed, already-validated view of the raw FRIES frames (see
:mod:`friesflat.frames`).  They are created fresh for each document, stored
by id inside a :class:`~friesflat.graph.FrameGraph` and never mutated.  When a
record needs extra data for a single output tuple, a modified copy is made
with :func:`dataclasses.replace`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class ArgKind(Enum):
    """Shape of an event argument's payload."""

    ENTITY = "entity"
    EVENT = "event"
    COMPLEX = "complex"


class Sign(Enum):
    """Polarity of an event mention."""

    POSITIVE = "positive"
    NEGATIVE = "negative"

    @classmethod
    def from_negation(cls, negated: bool) -> "Sign":
        return cls.NEGATIVE if negated else cls.POSITIVE


class EventType(Enum):
    """Event types that are flattened into output tuples.

    Event mentions of any other type are kept in the graph (they can still be
    the target of a nested reference) but never produce tuples themselves.
    """

    ACTIVATION = "activation"
    COMPLEX_ASSEMBLY = "complex-assembly"
    PROTEIN_MODIFICATION = "protein-modification"
    REGULATION = "regulation"
    TRANSLOCATION = "translocation"

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional["EventType"]:
        """Return the member named by ``label`` or ``None`` if uninteresting."""

        if not label:
            return None
        try:
            return cls(label)
        except ValueError:
            return None


@dataclass(frozen=True)
class SentenceRecord:
    id: str
    text: str


@dataclass(frozen=True)
class Xref:
    """Grounding of an entity mention in an external namespace."""

    namespace: str
    external_id: str

    def to_dict(self) -> Dict[str, str]:
        return {"namespace": self.namespace, "id": self.external_id}


@dataclass(frozen=True)
class EntityRecord:
    """An entity mention.

    ``subtype`` is never set on records stored in the graph; it only appears
    on per-tuple copies produced by :meth:`enriched`.
    """

    id: str
    text: Optional[str]
    type: Optional[str]
    xrefs: Tuple[Xref, ...] = ()
    subtype: Optional[str] = None

    def enriched(self, subtype: Optional[str]) -> "EntityRecord":
        """Return a copy of this entity carrying ``subtype``."""
        return replace(self, subtype=subtype)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"text": self.text, "type": self.type}
        if self.xrefs:
            data["xrefs"] = [xref.to_dict() for xref in self.xrefs]
        if self.subtype:
            data["subtype"] = self.subtype
        return data


@dataclass(frozen=True)
class EntityArgument:
    """Argument linking to a single entity mention."""

    role: str
    text: Optional[str]
    link: str


@dataclass(frozen=True)
class EventArgument:
    """Argument linking to a nested event mention."""

    role: str
    text: Optional[str]
    link: str


@dataclass(frozen=True)
class ComplexArgument:
    """Argument grouping several labeled links, e.g. ``theme1`` and ``theme2``.

    ``links`` holds ``(label, id)`` pairs in declaration order.
    """

    role: str
    text: Optional[str]
    links: Tuple[Tuple[str, str], ...]


Argument = Union[EntityArgument, EventArgument, ComplexArgument]


@dataclass(frozen=True)
class EventRecord:
    id: str
    type: Optional[str]
    sign: Sign = Sign.POSITIVE
    arguments: Tuple[Argument, ...] = ()
    subtype: Optional[str] = None
    regulation_type: Optional[str] = None
    is_direct: bool = False
    is_hypothesis: bool = False
    rule: Optional[str] = None
    sentence_id: Optional[str] = None

    @property
    def event_type(self) -> Optional[EventType]:
        return EventType.from_label(self.type)


__all__ = [
    "ArgKind",
    "Argument",
    "ComplexArgument",
    "EntityArgument",
    "EntityRecord",
    "EventArgument",
    "EventRecord",
    "EventType",
    "SentenceRecord",
    "Sign",
    "Xref",
]
