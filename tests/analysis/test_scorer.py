"""Tests for the structural complexity scorer."""

import logging

import numpy as np
import pytest

from untangle.analysis.models import ComplexityLevel, StructureSummary
from untangle.analysis.scorer import StructuralScorer, group_by_complexity, validate_matrix
from untangle.config import ScoringConfig
from untangle.exceptions import InvalidMatrixError
from untangle.graph import Module
from untangle.math.graph import GraphMetrics


@pytest.fixture
def scorer():
    return StructuralScorer()


class TestScore:
    def test_empty_matrix(self, scorer):
        assert scorer.score(np.zeros((0, 0))).shape == (0,)
        assert scorer.score([]).shape == (0,)

    def test_single_module(self, scorer):
        np.testing.assert_array_equal(scorer.score([[0.0]]), [0.5])

    def test_scores_in_unit_interval(
        self, scorer, chain_graph, diamond_graph, triangle_graph, self_loop_graph, nested_cycle_graph
    ):
        for graph in (chain_graph, diamond_graph, triangle_graph, self_loop_graph, nested_cycle_graph):
            scores = scorer.score(graph.to_adjacency_matrix())
            assert scores.shape == (len(graph),)
            assert np.all(scores >= 0.0)
            assert np.all(scores <= 1.0)

    def test_hub_scores_highest(self, scorer, star_graph):
        scores = scorer.score_graph(star_graph)
        hub = Module("hub")
        assert scores[hub] == pytest.approx(1.0)
        assert all(scores[m] < scores[hub] for m in star_graph if m != hub)

    def test_symmetric_cycle_is_uniform(self, scorer, triangle_graph):
        scores = scorer.score(triangle_graph.to_adjacency_matrix())
        np.testing.assert_allclose(scores, [0.5, 0.5, 0.5])

    def test_accepts_nested_lists(self, scorer):
        scores = scorer.score([[0, 1], [0, 0]])
        assert scores.shape == (2,)

    def test_score_graph_keys_follow_modules(self, scorer, diamond_graph):
        scores = scorer.score_graph(diamond_graph)
        assert list(scores) == list(diamond_graph.modules)

    def test_deterministic(self, scorer, nested_cycle_graph):
        matrix = nested_cycle_graph.to_adjacency_matrix()
        np.testing.assert_array_equal(scorer.score(matrix), scorer.score(matrix))


class TestSpectralFallback:
    def test_decomposition_failure_is_recovered(self, scorer, diamond_graph, monkeypatch, caplog):
        def broken(_matrix):
            raise np.linalg.LinAlgError("did not converge")

        matrix = diamond_graph.to_adjacency_matrix()
        monkeypatch.setattr(np.linalg, "eig", broken)

        with caplog.at_level(logging.WARNING, logger="untangle"):
            scores = scorer.score(matrix)

        assert scores.shape == (4,)
        assert np.all((scores >= 0.0) & (scores <= 1.0))
        assert "uniform spectral sub-score" in caplog.text

    def test_fallback_equals_degree_and_centrality_blend(self, diamond_graph, monkeypatch):
        def broken(_matrix):
            raise np.linalg.LinAlgError("did not converge")

        matrix = diamond_graph.to_adjacency_matrix()
        monkeypatch.setattr(np.linalg, "eig", broken)

        with_fallback = StructuralScorer().score(matrix)
        no_spectral = StructuralScorer(
            ScoringConfig(spectral_weight=0.0, degree_weight=0.5, centrality_weight=0.5)
        ).score(matrix)
        # A constant spectral term shifts the blend uniformly and is removed
        # by the final min-max, leaving the same ranking.
        np.testing.assert_allclose(with_fallback, no_spectral, atol=1e-12)


class TestValidation:
    @pytest.mark.parametrize(
        "matrix",
        [
            [[0.0, 1.0]],  # not square
            [[0.0, -1.0], [0.0, 0.0]],  # negative weight
            [[0.0, float("nan")], [0.0, 0.0]],  # non-finite
            [[0.0, float("inf")], [0.0, 0.0]],
            [1.0, 2.0],  # 1-D
            np.zeros((2, 2, 2)),  # 3-D
            [[0.0, 1.0], [0.0]],  # ragged
            [["a", "b"], ["c", "d"]],  # not numeric
        ],
    )
    def test_rejects_malformed(self, scorer, matrix):
        with pytest.raises(InvalidMatrixError):
            scorer.score(matrix)

    def test_error_carries_shape(self):
        with pytest.raises(InvalidMatrixError) as exc_info:
            validate_matrix(np.zeros((2, 3)))
        assert exc_info.value.shape == (2, 3)
        assert "shape=2x3" in str(exc_info.value)

    def test_returns_float_array(self):
        adj = validate_matrix([[0, 1], [0, 0]])
        assert adj.dtype == float


class TestAnalyzeStructure:
    def test_empty(self, scorer):
        assert scorer.analyze_structure(np.zeros((0, 0))) == StructureSummary()

    def test_chain(self, scorer, chain_graph):
        summary = scorer.analyze_structure(chain_graph.to_adjacency_matrix())
        assert summary.module_count == 5
        assert summary.total_dependencies == 4
        assert summary.average_dependencies == pytest.approx(0.8)
        assert summary.max_dependencies == 1
        assert summary.density == pytest.approx(4 / 20)
        assert summary.is_acyclic

    def test_single_module_density(self, scorer):
        assert scorer.analyze_structure([[0.0]]).density == 0.0

    def test_cycles_detected_from_matrix(self, scorer, triangle_graph, self_loop_graph):
        assert not scorer.analyze_structure(triangle_graph.to_adjacency_matrix()).is_acyclic
        assert not scorer.analyze_structure(self_loop_graph.to_adjacency_matrix()).is_acyclic

    def test_agrees_with_graph_cycle_detection(self, scorer, diamond_graph, nested_cycle_graph):
        for graph in (diamond_graph, nested_cycle_graph):
            summary = scorer.analyze_structure(graph.to_adjacency_matrix())
            assert summary.is_acyclic == graph.is_acyclic()

    def test_known_acyclicity_skips_closure(self, scorer, triangle_graph, monkeypatch):
        def fail(_matrix):
            raise AssertionError("reachability should not run")

        monkeypatch.setattr(GraphMetrics, "reachability", staticmethod(fail))
        summary = scorer.analyze_structure(triangle_graph.to_adjacency_matrix(), is_acyclic=False)
        assert not summary.is_acyclic
        assert summary.total_dependencies == 3

    def test_str(self, scorer, diamond_graph):
        text = str(scorer.analyze_structure(diamond_graph.to_adjacency_matrix()))
        assert "4 modules" in text
        assert "acyclic=True" in text


class TestSpectrum:
    def test_cycle_spectral_radius(self, scorer, triangle_graph):
        eigenvalues = scorer.spectrum(triangle_graph.to_adjacency_matrix())
        assert len(eigenvalues) == 3
        assert eigenvalues[0] == pytest.approx(1.0)

    def test_empty(self, scorer):
        assert scorer.spectrum(np.zeros((0, 0))) == []


class TestComplexityLevels:
    @pytest.mark.parametrize(
        "score, level",
        [
            (0.0, ComplexityLevel.LOW),
            (0.29, ComplexityLevel.LOW),
            (0.3, ComplexityLevel.MEDIUM),
            (0.69, ComplexityLevel.MEDIUM),
            (0.7, ComplexityLevel.HIGH),
            (1.0, ComplexityLevel.HIGH),
        ],
    )
    def test_thresholds(self, score, level):
        assert ComplexityLevel.of(score) is level

    def test_group_by_complexity(self):
        a, b, c = Module("a"), Module("b"), Module("c")
        groups = group_by_complexity({a: 0.1, b: 0.5, c: 0.9})
        assert groups == {
            ComplexityLevel.LOW: [a],
            ComplexityLevel.MEDIUM: [b],
            ComplexityLevel.HIGH: [c],
        }

    def test_group_has_every_level(self):
        groups = group_by_complexity({})
        assert set(groups) == set(ComplexityLevel)
