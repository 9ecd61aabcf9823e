"""Role-based argument access and link dereferencing over a FrameGraph.

Every function here is pure: it reads records from the graph and never
modifies them.  Lists are returned in argument declaration order, which
decides the order (and multiplicity) of the tuples produced for events with
several controllers or themes.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .graph import FrameGraph
from .records import (
    Argument,
    ComplexArgument,
    EntityArgument,
    EntityRecord,
    EventArgument,
    EventRecord,
)


def args_by_role(event: EventRecord, role: str) -> List[Argument]:
    """Return the arguments of ``event`` whose role is ``role``."""
    return [arg for arg in event.arguments if arg.role == role]


def first_arg_by_role(event: EventRecord, role: str) -> Optional[Argument]:
    for arg in event.arguments:
        if arg.role == role:
            return arg
    return None


def entity_link(arg: Optional[Argument]) -> Optional[str]:
    """Return the entity id referenced by ``arg`` if it is an entity argument."""
    if isinstance(arg, EntityArgument) and arg.link:
        return arg.link
    return None


def event_link(arg: Optional[Argument]) -> Optional[str]:
    """Return the event id referenced by ``arg`` if it is an event argument."""
    if isinstance(arg, EventArgument) and arg.link:
        return arg.link
    return None


def links_by_prefix(arg: Optional[Argument], prefix: str) -> List[str]:
    """Return the ids of a complex argument whose labels start with ``prefix``.

    For example the links ``{"theme1": "E1", "agent1": "E3", "theme2": "E2"}``
    with prefix ``"theme"`` give ``["E1", "E2"]``.  Arguments of any other
    kind have no labeled links and give an empty list.
    """

    if not isinstance(arg, ComplexArgument):
        return []
    return [link for label, link in arg.links if label.startswith(prefix)]


def resolve_entity(graph: FrameGraph, arg: Optional[Argument]) -> Optional[EntityRecord]:
    return graph.lookup_entity(entity_link(arg))


def resolve_event(graph: FrameGraph, arg: Optional[Argument]) -> Optional[EventRecord]:
    return graph.lookup_event(event_link(arg))


def resolve_entities(graph: FrameGraph, args: Iterable[Argument]) -> List[EntityRecord]:
    """Dereference the entity link of each argument.

    Arguments that are not entity arguments, or whose link does not resolve,
    are dropped so that a document with dangling references still yields
    whatever can be resolved.
    """

    return resolve_links(graph, (entity_link(arg) for arg in args))


def resolve_links(graph: FrameGraph, links: Iterable[Optional[str]]) -> List[EntityRecord]:
    entities: List[EntityRecord] = []
    for link in links:
        entity = graph.lookup_entity(link)
        if entity is not None:
            entities.append(entity)
    return entities


def role_entities(graph: FrameGraph, event: EventRecord, role: str) -> List[EntityRecord]:
    """Resolve every entity argument of ``event`` playing ``role``."""
    return resolve_entities(graph, args_by_role(event, role))


__all__ = [
    "args_by_role",
    "entity_link",
    "event_link",
    "first_arg_by_role",
    "links_by_prefix",
    "resolve_entities",
    "resolve_entity",
    "resolve_event",
    "resolve_links",
    "role_entities",
]
