"""Builders for raw FRIES frames used across the test suite."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional


def sentence(frame_id: str, text: str) -> Dict[str, Any]:
    return {"frame-id": frame_id, "frame-type": "sentence", "text": text}


def entity(
    frame_id: str,
    text: str,
    type: str = "protein",
    xrefs: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    frame: Dict[str, Any] = {
        "frame-id": frame_id,
        "frame-type": "entity-mention",
        "text": text,
        "type": type,
    }
    if xrefs is not None:
        frame["xrefs"] = xrefs
    return frame


def entity_arg(role: str, link: str, text: str = "") -> Dict[str, Any]:
    return {"type": role, "text": text, "argument-type": "entity", "arg": link}


def event_arg(role: str, link: str, text: str = "") -> Dict[str, Any]:
    return {"type": role, "text": text, "argument-type": "event", "arg": link}


def complex_arg(role: str, links: Mapping[str, str], text: str = "") -> Dict[str, Any]:
    return {"type": role, "text": text, "argument-type": "complex", "args": dict(links)}


def event(frame_id: str, type: str, *arguments: Dict[str, Any], **extra: Any) -> Dict[str, Any]:
    frame: Dict[str, Any] = {
        "frame-id": frame_id,
        "frame-type": "event-mention",
        "type": type,
        "arguments": list(arguments),
    }
    frame.update(extra)
    return frame


def collection(*frames: Dict[str, Any]) -> Dict[str, Any]:
    return {"frames": list(frames)}


def document(
    sentences: List[Dict[str, Any]],
    entities: List[Dict[str, Any]],
    events: List[Dict[str, Any]],
) -> Dict[str, Any]:
    return {
        "sentences": collection(*sentences),
        "entities": collection(*entities),
        "events": collection(*events),
    }


class ListSink:
    """Sink collecting submitted text; rejects texts matching ``reject``."""

    def __init__(self, reject: Optional[str] = None) -> None:
        self.submitted: List[str] = []
        self.reject = reject

    def submit(self, text: str) -> bool:
        self.submitted.append(text)
        return not (self.reject and self.reject in text)
