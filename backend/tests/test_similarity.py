"""
Tests for similarity metrics and the distance matrix.
"""
import pytest

from concord import DistanceMetric, SimilarityMetrics, UnifyConfigError, build_distance_matrix


@pytest.fixture
def metrics():
    return SimilarityMetrics()


class TestSimilarityMetrics:
    """Per-metric similarity scores."""

    def test_token_set_ignores_word_order(self, metrics):
        assert metrics.token_set("farmacia del norte", "del norte farmacia") == 1.0

    def test_token_set_subset_is_identical(self, metrics):
        assert metrics.token_set("pepsi", "pepsi co") == 1.0

    def test_levenshtein_ratio(self, metrics):
        assert metrics.levenshtein_ratio("coca cola", "cocacola") == 0.94

    def test_ratio_scores_are_whole_percentages(self, metrics):
        """abc/abd is 66.67% similar, reported as 0.67."""
        assert metrics.levenshtein_ratio("abc", "abd") == 0.67

    def test_jaro_winkler_classic_pair(self, metrics):
        assert metrics.jaro_winkler("MARTHA", "MARHTA") == pytest.approx(0.9611, abs=1e-3)

    def test_jaro_winkler_is_case_sensitive(self, metrics):
        """Case folding belongs to normalization, not the metric."""
        assert metrics.jaro_winkler("ACME", "acme") < 1.0

    def test_punctuation_only_scores_zero_for_ratio_metrics(self, metrics):
        assert metrics.levenshtein_ratio("&", "&&") == 0.0
        assert metrics.token_set("?", "#") == 0.0

    def test_identical_strings(self, metrics):
        for metric in DistanceMetric:
            assert metrics.similarity("acme", "acme", metric) == 1.0

    def test_empty_string_has_zero_similarity(self, metrics):
        assert metrics.levenshtein_ratio("", "acme") == 0.0
        assert metrics.token_set("acme", "") == 0.0
        assert metrics.jaro_winkler("", "acme") == 0.0


class TestDistance:
    """Distance is one minus similarity, with empty-key rules."""

    def test_both_empty(self, metrics):
        assert metrics.distance("", "", DistanceMetric.LEVENSHTEIN) == 0.0

    def test_one_empty(self, metrics):
        assert metrics.distance("acme", "", DistanceMetric.TOKEN_SET_RATIO) == 1.0
        assert metrics.distance("", "acme", DistanceMetric.JARO_WINKLER) == 1.0

    def test_complement_of_similarity(self, metrics):
        d = metrics.distance("coca cola", "cocacola", DistanceMetric.LEVENSHTEIN)
        assert d == pytest.approx(0.06)

    @pytest.mark.parametrize("metric", list(DistanceMetric))
    @pytest.mark.parametrize("s1,s2", [
        ("?", "#"),
        ("&", "&&"),
        ("+", "*"),
    ])
    def test_distinct_keys_are_never_identical(self, metrics, metric, s1, s2):
        """Punctuation-only keys that process to nothing stay apart."""
        assert metrics.distance(s1, s2, metric) > 0.0


class TestDistanceMatrix:
    """Pairwise distance matrix over distinct keys."""

    KEYS = ["acme", "acme corp", "coca cola", "cocacola", "pepsi"]

    @pytest.mark.parametrize("metric", list(DistanceMetric))
    def test_symmetric_zero_diagonal_bounded(self, metric):
        matrix = build_distance_matrix(self.KEYS, metric)
        n = len(self.KEYS)
        assert len(matrix) == n
        for i in range(n):
            assert matrix[i, i] == 0.0
            for j in range(n):
                assert matrix[i, j] == matrix[j, i]
                assert 0.0 <= matrix[i, j] <= 1.0

    def test_accepts_metric_name(self):
        matrix = build_distance_matrix(["acme", "acme corp"], "token_set_ratio")
        assert matrix[0, 1] == 0.0

    def test_unknown_metric_rejected(self):
        with pytest.raises(UnifyConfigError):
            build_distance_matrix(["a", "b"], "cosine")

    def test_total_distance(self, make_matrix):
        matrix = make_matrix(["x", "y", "z"], {(0, 1): 0.1, (0, 2): 0.3, (1, 2): 0.1})
        assert matrix.total_distance(0, [0, 1, 2]) == pytest.approx(0.4)
        assert matrix.total_distance(1, [0, 1, 2]) == pytest.approx(0.2)

    def test_single_key(self):
        matrix = build_distance_matrix(["acme"])
        assert matrix.rows == [[0.0]]
