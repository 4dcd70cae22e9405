"""Shared test fixtures for untangle graph and analysis tests."""

import pytest

from untangle.graph import Dependency, DependencyGraph, Module


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def make_graph(edges, isolated=()):
    """Build a graph from (source, target) name pairs plus isolated names."""
    graph = DependencyGraph()
    for name in isolated:
        graph.add_module(Module(name, f"/src/{name}"))
    for source, target in edges:
        graph.add_dependency(Dependency(Module(source, f"/src/{source}"), Module(target, f"/src/{target}")))
    return graph


@pytest.fixture
def graph_from():
    """Factory fixture: graph_from(edges, isolated=()) -> DependencyGraph."""
    return make_graph


@pytest.fixture
def empty_graph():
    """Graph with no modules."""
    return DependencyGraph()


@pytest.fixture
def single_module_graph():
    """One isolated module."""
    return make_graph([], isolated=["A"])


@pytest.fixture
def chain_graph():
    """Chain A -> B -> C -> D -> E (A depends on B, ...)."""
    return make_graph([("A", "B"), ("B", "C"), ("C", "D"), ("D", "E")])


@pytest.fixture
def diamond_graph():
    """Diamond: A -> B, A -> C, B -> D, C -> D."""
    return make_graph([("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])


@pytest.fixture
def triangle_graph():
    """Three-module cycle A -> B -> C -> A."""
    return make_graph([("A", "B"), ("B", "C"), ("C", "A")])


@pytest.fixture
def self_loop_graph():
    """Module A depending on itself, plus an unrelated edge B -> C."""
    return make_graph([("A", "A"), ("B", "C")])


@pytest.fixture
def nested_cycle_graph():
    """Cycles 1 -> 2 -> 3 -> 1 and 2 -> 4 -> 5 -> 2 sharing module 2."""
    return make_graph([("1", "2"), ("2", "3"), ("3", "1"), ("2", "4"), ("4", "5"), ("5", "2")])


@pytest.fixture
def star_graph():
    """Hub depended on by four leaves: leaf_i -> hub."""
    return make_graph([(f"leaf{i}", "hub") for i in range(4)])
