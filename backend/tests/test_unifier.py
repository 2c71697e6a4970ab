"""
Tests for the unification pipeline.

Covers the output contract (length, order, literal input values), empty
handling, determinism, idempotence and option handling.
"""
import pytest

from concord import UnifyConfig, UnifyConfigError, unify_values, unify_with_details
from concord.preprocessors import strip_legal_suffix


BRANDS = ["Coca-Cola", "coca cola", "COCA COLA", "Pepsi", "PEPSI Co", "Sprite"]


class TestOutputContract:
    """Same length and order, every entry a literal input value."""

    def test_spelling_variants_collapse(self):
        assert unify_values(["Coca-Cola", "coca cola", "COCA COLA"]) == ["coca cola"] * 3

    def test_brand_list(self):
        assert unify_values(BRANDS) == [
            "coca cola", "coca cola", "coca cola", "Pepsi", "Pepsi", "Sprite",
        ]

    def test_entries_come_from_input(self):
        result = unify_values(BRANDS)
        assert len(result) == len(BRANDS)
        assert set(result) <= set(BRANDS)

    def test_empty_input(self):
        assert unify_values([]) == []

    def test_single_value(self):
        for config in (UnifyConfig(), UnifyConfig(distance_metric="jaro_winkler"),
                       UnifyConfig(representative_strategy="longest", min_cluster_size=3)):
            assert unify_values(["OnlyOne"], config) == ["OnlyOne"]

    def test_duplicates_keep_first_seen_original(self):
        assert unify_values(["Acme", "ACME", "acme"]) == ["Acme", "Acme", "Acme"]


class TestEmptyValues:
    """Values that normalize to nothing never join a cluster."""

    def test_empty_strings_stay_empty(self):
        assert unify_values(["", "", "Acme"]) == ["", "", "Acme"]

    def test_all_empty_use_first_empty_original(self):
        assert unify_values(["...", "  ", "-"]) == ["...", "...", "..."]

    def test_empty_mixed_with_values(self):
        assert unify_values(["Acme", "  ", "...", "acme"]) == ["Acme", "  ", "  ", "Acme"]

    def test_empty_count_reported(self):
        result = unify_with_details(["Acme", "", "--"])
        assert result.empty_count == 2
        assert result.distinct_keys == 1


class TestDeterminism:
    """Repeat calls agree and unifying twice changes nothing."""

    def test_repeatable(self):
        assert unify_values(BRANDS) == unify_values(BRANDS)

    def test_idempotent(self):
        once = unify_values(BRANDS)
        assert unify_values(once) == once

    def test_higher_threshold_never_adds_groups(self):
        values = BRANDS + ["Fanta", "Fanta Orange", "Sprite Zero"]
        counts = [
            len(set(unify_values(values, distance_threshold=t)))
            for t in (0.0, 0.1, 0.2, 0.35, 0.5, 0.8, 1.0)
        ]
        assert counts == sorted(counts, reverse=True)


class TestOptions:
    """Metric, strategy, size and config handling."""

    def test_levenshtein(self):
        assert unify_values(["Jon Smith", "John Smith"], distance_metric="levenshtein") == [
            "John Smith", "John Smith",
        ]

    def test_jaro_winkler(self):
        result = unify_values(["MARTHA", "Marhta"], distance_metric="jaro_winkler")
        assert result[0] == result[1]

    def test_jaro_winkler_keeps_case_when_not_lowercasing(self):
        result = unify_values(
            ["ACME", "acme"],
            distance_metric="jaro_winkler",
            lowercase=False,
            distance_threshold=0.0,
        )
        assert result == ["ACME", "acme"]

    @pytest.mark.parametrize("metric", ["levenshtein", "jaro_winkler", "token_set_ratio"])
    def test_punctuation_only_values_stay_apart(self, metric):
        assert unify_values(["?", "#", "*"], distance_metric=metric) == ["?", "#", "*"]

    @pytest.mark.parametrize("strategy,expected", [
        ("medoid", "Acme"),
        ("shortest", "Acme"),
        ("longest", "Acme Corporation"),
        ("first_alphabetical", "Acme"),
    ])
    def test_strategies(self, strategy, expected):
        values = ["Acme", "Acme Corp", "Acme Corporation"]
        assert unify_values(values, representative_strategy=strategy) == [expected] * 3

    def test_min_cluster_size_above_every_cluster_keeps_input(self):
        values = ["Coca-Cola", "coca cola co", "Pepsi"]
        assert unify_values(values, min_cluster_size=10) == values

    def test_small_clusters_reported_unchanged(self):
        result = unify_with_details(["Coca-Cola", "coca cola", "Pepsi"], min_cluster_size=2)
        by_size = {c.size: c for c in result.clusters}
        assert by_size[1].representative is None
        assert by_size[2].representative == "coca cola"

    def test_zero_threshold_only_merges_identical_keys(self):
        values = ["Acme", "ACME.", "Acme Corp"]
        result = unify_values(values, distance_threshold=0.0, distance_metric="levenshtein")
        assert result == ["Acme", "Acme", "Acme Corp"]

    def test_preprocessor(self):
        values = ["Coca-Cola", "COCA COLA CO."]
        result = unify_values(values, preprocessor=strip_legal_suffix)
        assert result[0] == result[1]

    def test_form_option_names(self):
        values = ["Coca-Cola", "coca cola co", "Pepsi"]
        result = unify_values(
            values,
            distanceMetric="levenshtein",
            minClusterSizeForRepresentationChange=10,
        )
        assert result == values

    def test_mapping_config(self):
        values = ["Coca-Cola", "coca cola co", "Pepsi"]
        assert unify_values(values, {"min_cluster_size": 10}) == values

    def test_keyword_overrides_config(self):
        values = ["Coca-Cola", "coca cola co", "Pepsi"]
        config = UnifyConfig(min_cluster_size=10)
        assert unify_values(values, config, min_cluster_size=1) != values


class TestErrors:
    """Invalid options and failing preprocessors abort the call."""

    def test_unknown_metric(self):
        with pytest.raises(UnifyConfigError) as exc_info:
            unify_values(["a", "b"], distance_metric="cosine")
        assert exc_info.value.details["option"] == "distance_metric"

    def test_unknown_option(self):
        with pytest.raises(UnifyConfigError):
            unify_values(["a"], similarity="high")

    def test_bool_threshold_rejected(self):
        with pytest.raises(UnifyConfigError):
            unify_values(["a"], distance_threshold=True)

    def test_bad_config_type(self):
        with pytest.raises(UnifyConfigError):
            unify_values(["a"], config=42)

    def test_failing_preprocessor(self):
        def broken(value):
            raise KeyError(value)

        with pytest.raises(UnifyConfigError):
            unify_values(["a", "b"], preprocessor=broken)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            unify_values(["a"], cluster_linkage="ward")
