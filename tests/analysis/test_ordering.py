"""Tests for priority topological order and parallel layers."""

import logging

import pytest

from untangle.analysis.ordering import layers, priority_order, topological_order
from untangle.graph import Module


def _names(modules):
    return [m.name for m in modules]


def _respects_dependencies(graph, order):
    position = {module: i for i, module in enumerate(order)}
    return all(
        position[dep.target] < position[dep.source]
        for dep in graph.dependencies
        if not dep.is_self_loop
    )


class TestPriorityOrder:
    def test_empty_graph(self, empty_graph):
        assert priority_order(empty_graph) == []

    def test_single_module(self, single_module_graph):
        assert _names(priority_order(single_module_graph)) == ["A"]

    def test_chain_is_reversed(self, chain_graph):
        assert _names(priority_order(chain_graph)) == ["E", "D", "C", "B", "A"]

    def test_diamond_dependencies_first(self, diamond_graph):
        order = _names(priority_order(diamond_graph))
        assert order[0] == "D"
        assert set(order[1:3]) == {"B", "C"}
        assert order[3] == "A"

    def test_higher_score_wins_among_ready(self, diamond_graph):
        b, c = Module("B"), Module("C")
        order = priority_order(diamond_graph, {b: 0.2, c: 0.9})
        assert _names(order) == ["D", "C", "B", "A"]

        order = priority_order(diamond_graph, {b: 0.9, c: 0.2})
        assert _names(order) == ["D", "B", "C", "A"]

    def test_ties_break_by_discovery(self, graph_from):
        graph = graph_from([], isolated=["X", "Y", "Z"])
        assert _names(priority_order(graph)) == ["X", "Y", "Z"]
        scores = {Module("X"): 0.5, Module("Y"): 0.5, Module("Z"): 0.5}
        assert _names(priority_order(graph, scores)) == ["X", "Y", "Z"]

    def test_score_never_overrides_dependencies(self, chain_graph):
        # A is the riskiest but depends on everything else
        scores = {Module("A"): 1.0, Module("E"): 0.0}
        assert _names(priority_order(chain_graph, scores)) == ["E", "D", "C", "B", "A"]

    def test_permutation_respecting_edges(self, graph_from):
        graph = graph_from(
            [("app", "web"), ("app", "db"), ("web", "core"), ("db", "core"), ("web", "util")],
            isolated=["docs"],
        )
        order = priority_order(graph)
        assert sorted(_names(order)) == sorted(m.name for m in graph)
        assert _respects_dependencies(graph, order)

    def test_cycle_returns_none(self, triangle_graph, caplog):
        with caplog.at_level(logging.WARNING, logger="untangle"):
            assert priority_order(triangle_graph) is None
        assert "circular" in caplog.text

    def test_self_loop_returns_none(self, self_loop_graph):
        assert priority_order(self_loop_graph) is None

    def test_topological_order_ignores_scores(self, diamond_graph):
        assert _names(topological_order(diamond_graph)) == ["D", "B", "C", "A"]


class TestLayers:
    def test_empty_graph(self, empty_graph):
        assert layers(empty_graph) == []

    def test_diamond(self, diamond_graph):
        result = layers(diamond_graph)
        assert [{m.name for m in layer} for layer in result] == [{"D"}, {"B", "C"}, {"A"}]

    def test_chain_one_per_layer(self, chain_graph):
        result = layers(chain_graph)
        assert [len(layer) for layer in result] == [1, 1, 1, 1, 1]

    def test_isolated_modules_share_first_layer(self, graph_from):
        graph = graph_from([("A", "B")], isolated=["X", "Y"])
        result = layers(graph)
        assert {m.name for m in result[0]} == {"X", "Y", "B"}
        assert {m.name for m in result[1]} == {"A"}

    def test_cycle_returns_none(self, triangle_graph, self_loop_graph):
        assert layers(triangle_graph) is None
        assert layers(self_loop_graph) is None

    @pytest.mark.parametrize(
        "fixture", ["chain_graph", "diamond_graph", "star_graph", "single_module_graph"]
    )
    def test_layers_partition_and_respect_edges(self, fixture, request):
        graph = request.getfixturevalue(fixture)
        result = layers(graph)

        seen = [m for layer in result for m in layer]
        assert len(seen) == len(set(seen)) == len(graph)

        layer_of = {m: i for i, layer in enumerate(result) for m in layer}
        for dep in graph.dependencies:
            assert layer_of[dep.target] < layer_of[dep.source]

    def test_layer_members_are_independent(self, graph_from):
        graph = graph_from([("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"), ("C", "E")])
        for layer in layers(graph):
            for module in layer:
                assert not (graph.dependencies_of(module) & layer)


class TestKnownCycles:
    def test_precomputed_cycles_skip_detection(self, diamond_graph, monkeypatch):
        def fail(_self):
            raise AssertionError("detect_cycles should not run")

        monkeypatch.setattr(type(diamond_graph), "detect_cycles", fail)
        assert _names(priority_order(diamond_graph, cycles=[])) == ["D", "B", "C", "A"]
        assert len(layers(diamond_graph, cycles=[])) == 3

    def test_precomputed_cycles_block_ordering(self, triangle_graph):
        cycles = triangle_graph.detect_cycles()
        assert priority_order(triangle_graph, cycles=cycles) is None
        assert layers(triangle_graph, cycles=cycles) is None
