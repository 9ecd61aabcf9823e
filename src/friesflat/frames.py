"""Validation models for raw FRIES frames.

Each part file of a document is a JSON object holding a ``frames`` list.  The
envelope is checked against ``schemas/collection.schema.yaml``; individual
frames are parsed with the pydantic models below and converted into the
immutable records of :mod:`friesflat.records`.  FRIES uses hyphenated keys
(``frame-id``, ``is-negated``, ``argument-type``), which are mapped through
field aliases.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import jsonschema
import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import DocumentError
from .records import (
    ArgKind,
    Argument,
    ComplexArgument,
    EntityArgument,
    EntityRecord,
    EventArgument,
    EventRecord,
    SentenceRecord,
    Sign,
    Xref,
)

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "collection.schema.yaml"

SENTENCE_FRAME_TYPE = "sentence"
ENTITY_FRAME_TYPE = "entity-mention"

# part files making up one document
SENTENCES = "sentences"
ENTITIES = "entities"
EVENTS = "events"
PART_KINDS = (ENTITIES, EVENTS, SENTENCES)


@lru_cache(maxsize=1)
def load_collection_schema(path: Path = SCHEMA_PATH) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def collection_frames(document_id: str, kind: str, payload: Any) -> List[Dict[str, Any]]:
    """Return the frame list of one part file after checking its envelope."""

    if payload is None:
        raise DocumentError(document_id, f"missing {kind} collection")
    try:
        jsonschema.validate(payload, load_collection_schema())
    except jsonschema.ValidationError as exc:
        raise DocumentError(
            document_id, f"malformed {kind} collection: {exc.message}"
        ) from exc
    return payload["frames"]


class FrameModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    frame_id: str = Field(..., alias="frame-id", min_length=1)
    frame_type: Optional[str] = Field(None, alias="frame-type")


class SentenceFrame(FrameModel):
    text: str = ""

    def to_record(self) -> SentenceRecord:
        return SentenceRecord(id=self.frame_id, text=self.text)


class XrefFrame(BaseModel):
    model_config = ConfigDict(extra="ignore")

    namespace: Optional[str] = None
    id: Optional[str] = None


class EntityFrame(FrameModel):
    text: Optional[str] = None
    type: Optional[str] = None
    xrefs: Optional[List[Optional[XrefFrame]]] = None

    def to_record(self) -> EntityRecord:
        # empty xref entries occur in some reader output and carry nothing
        xrefs = tuple(
            Xref(namespace=xref.namespace or "", external_id=xref.id)
            for xref in self.xrefs or ()
            if xref is not None and xref.id
        )
        return EntityRecord(id=self.frame_id, text=self.text, type=self.type, xrefs=xrefs)


class ArgumentFrame(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type: Optional[str] = None
    argument_label: Optional[str] = Field(None, alias="argument-label")
    text: Optional[str] = None
    argument_type: ArgKind = Field(..., alias="argument-type")
    arg: Optional[str] = None
    args: Optional[Dict[str, str]] = None

    @property
    def role(self) -> Optional[str]:
        # newer output names the role ``type``, older output ``argument-label``
        return self.type or self.argument_label

    @model_validator(mode="after")
    def _check_payload(self) -> "ArgumentFrame":
        if not self.role:
            raise ValueError("argument has no role")
        if self.argument_type is ArgKind.COMPLEX:
            if not self.args:
                raise ValueError("complex argument has no labeled links")
        elif not self.arg:
            raise ValueError(f"{self.argument_type.value} argument has no link")
        return self

    def to_argument(self) -> Argument:
        role = self.role or ""
        if self.argument_type is ArgKind.ENTITY:
            return EntityArgument(role=role, text=self.text, link=self.arg or "")
        if self.argument_type is ArgKind.EVENT:
            return EventArgument(role=role, text=self.text, link=self.arg or "")
        return ComplexArgument(
            role=role, text=self.text, links=tuple((self.args or {}).items())
        )


class EventFrame(FrameModel):
    type: Optional[str] = None
    subtype: Optional[str] = None
    is_negated: Optional[bool] = Field(None, alias="is-negated")
    is_direct: Optional[bool] = Field(None, alias="is-direct")
    is_hypothesis: Optional[bool] = Field(None, alias="is-hypothesis")
    regtype: Optional[str] = None
    found_by: Optional[str] = Field(None, alias="found-by")
    sentence: Optional[str] = None
    arguments: Optional[List[ArgumentFrame]] = None

    def to_record(self) -> EventRecord:
        return EventRecord(
            id=self.frame_id,
            type=self.type,
            sign=Sign.from_negation(bool(self.is_negated)),
            arguments=tuple(arg.to_argument() for arg in self.arguments or ()),
            subtype=self.subtype or None,
            regulation_type=self.regtype or None,
            is_direct=bool(self.is_direct),
            is_hypothesis=bool(self.is_hypothesis),
            rule=self.found_by or None,
            sentence_id=self.sentence or None,
        )


def frame_type_of(frame: Mapping[str, Any]) -> Optional[str]:
    return frame.get("frame-type")


__all__ = [
    "ArgumentFrame",
    "ENTITIES",
    "ENTITY_FRAME_TYPE",
    "EntityFrame",
    "EVENTS",
    "EventFrame",
    "PART_KINDS",
    "SENTENCES",
    "SENTENCE_FRAME_TYPE",
    "SentenceFrame",
    "XrefFrame",
    "collection_frames",
    "frame_type_of",
    "load_collection_schema",
]
