import string

from hypothesis import given, strategies as st

from fries_factory import complex_arg, entity, entity_arg, event, event_arg
from friesflat.graph import FrameGraph
from friesflat.records import ComplexArgument, EntityArgument, EventArgument
from friesflat import resolver


def make_graph():
    return FrameGraph.build(
        [],
        [entity("E1", "A"), entity("E2", "B"), entity("E3", "C")],
        [
            event(
                "V1",
                "activation",
                entity_arg("theme", "E2"),
                entity_arg("controller", "E1"),
                entity_arg("theme", "MISSING"),
                event_arg("theme", "V2"),
                entity_arg("theme", "E3"),
            ),
            event("V2", "protein-modification", entity_arg("theme", "E3")),
        ],
    )


def test_args_by_role_preserves_declaration_order():
    graph = make_graph()
    themes = resolver.args_by_role(graph.lookup_event("V1"), "theme")

    assert [arg.role for arg in themes] == ["theme"] * 4
    assert [getattr(arg, "link") for arg in themes] == ["E2", "MISSING", "V2", "E3"]


def test_args_by_role_empty_when_role_absent():
    graph = make_graph()

    assert resolver.args_by_role(graph.lookup_event("V1"), "destination") == []
    assert resolver.first_arg_by_role(graph.lookup_event("V1"), "destination") is None


def test_first_arg_by_role_returns_first_declared():
    graph = make_graph()

    first = resolver.first_arg_by_role(graph.lookup_event("V1"), "theme")
    assert first.link == "E2"


def test_links_are_only_returned_for_matching_kind():
    entity_argument = EntityArgument(role="theme", text=None, link="E1")
    event_argument = EventArgument(role="controlled", text=None, link="V1")
    complex_argument = ComplexArgument(role="controller", text=None, links=(("theme1", "E1"),))

    assert resolver.entity_link(entity_argument) == "E1"
    assert resolver.entity_link(event_argument) is None
    assert resolver.entity_link(complex_argument) is None
    assert resolver.event_link(event_argument) == "V1"
    assert resolver.event_link(entity_argument) is None
    assert resolver.entity_link(None) is None


def test_resolve_entities_returns_known_records_and_drops_the_rest():
    graph = make_graph()
    themes = resolver.args_by_role(graph.lookup_event("V1"), "theme")

    resolved = resolver.resolve_entities(graph, themes)

    assert resolved == [graph.lookup_entity("E2"), graph.lookup_entity("E3")]
    assert resolved[0] is graph.entities["E2"]


def test_resolve_single_entity_and_event():
    graph = make_graph()
    event_record = graph.lookup_event("V1")

    assert resolver.resolve_entity(graph, event_record.arguments[1]) is graph.entities["E1"]
    assert resolver.resolve_entity(graph, event_record.arguments[3]) is None
    assert resolver.resolve_event(graph, event_record.arguments[3]) is graph.events["V2"]
    assert resolver.resolve_event(graph, None) is None


def test_links_by_prefix_matches_exact_prefix_in_order():
    graph = FrameGraph.build(
        [],
        [],
        [
            event(
                "V1",
                "activation",
                complex_arg(
                    "controller",
                    {"theme2": "E2", "agent1": "E9", "theme1": "E1", "site": "E8"},
                ),
            )
        ],
    )
    controller = graph.lookup_event("V1").arguments[0]

    assert resolver.links_by_prefix(controller, "theme") == ["E2", "E1"]
    assert resolver.links_by_prefix(controller, "agent") == ["E9"]
    assert resolver.links_by_prefix(controller, "destination") == []


def test_links_by_prefix_is_empty_for_non_complex_arguments():
    assert resolver.links_by_prefix(EntityArgument(role="controller", text=None, link="E1"), "theme") == []
    assert resolver.links_by_prefix(None, "theme") == []


labels = st.builds(
    lambda prefix, suffix: prefix + suffix,
    st.sampled_from(["theme", "agent", "site", "them"]),
    st.text(alphabet=string.digits, max_size=2),
)


@given(st.dictionaries(labels, st.text(alphabet=string.ascii_uppercase, min_size=1), max_size=8))
def test_links_by_prefix_keeps_map_order(links):
    argument = ComplexArgument(role="controller", text=None, links=tuple(links.items()))

    expected = [link for label, link in links.items() if label.startswith("theme")]
    assert resolver.links_by_prefix(argument, "theme") == expected


def test_resolve_links_drops_unknown_ids():
    graph = make_graph()

    assert resolver.resolve_links(graph, ["E3", None, "NOPE", "E1"]) == [
        graph.entities["E3"],
        graph.entities["E1"],
    ]


def test_role_entities_resolves_role_in_order():
    graph = make_graph()

    assert [e.id for e in resolver.role_entities(graph, graph.lookup_event("V1"), "theme")] == ["E2", "E3"]
