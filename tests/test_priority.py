#!/usr/bin/env python3
"""Tests for Priority enum and PriorityConfig."""

from models import Priority, PriorityConfig
from models.priority import split_keywords


class TestPriority:
    """Tests for Priority enum ordering."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert Priority.P1.value < Priority.P2.value < Priority.P3.value

    def test_iterates_in_tier_order(self):
        assert [p.name for p in Priority] == ["P1", "P2", "P3"]


class TestSplitKeywords:
    """Tests for split_keywords."""

    def test_trims_and_drops_blanks(self):
        assert split_keywords(" freins, ,visibilité ,,") == ["freins", "visibilité"]

    def test_empty_text(self):
        assert split_keywords("") == []


class TestPriorityConfig:
    """Tests for PriorityConfig."""

    def test_default_keywords(self):
        config = PriorityConfig.default()
        assert config.for_tier(Priority.P1) == ["visibilite", "visibilité", "freins"]
        assert config.for_tier(Priority.P2) == ["electrique", "électrique"]
        assert config.for_tier(Priority.P3) == ["confort"]

    def test_default_is_fresh_copy(self):
        config = PriorityConfig.default()
        config.for_tier(Priority.P1).append("pneu")
        assert "pneu" not in PriorityConfig.default().for_tier(Priority.P1)

    def test_with_tier_replaces_one_tier(self):
        config = PriorityConfig.default()
        updated = config.with_tier(Priority.P2, "hydraulique, soudure")
        assert updated.for_tier(Priority.P2) == ["hydraulique", "soudure"]
        assert updated.for_tier(Priority.P1) == config.for_tier(Priority.P1)
        assert config.for_tier(Priority.P2) == ["electrique", "électrique"]

    def test_dict_round_trip(self):
        config = PriorityConfig(["a"], [], ["c", "d"])
        assert config.to_dict() == {"P1": ["a"], "P2": [], "P3": ["c", "d"]}
        assert PriorityConfig.from_dict(config.to_dict()) == config

    def test_from_dict_missing_tier(self):
        config = PriorityConfig.from_dict({"P1": ["freins"]})
        assert config.for_tier(Priority.P2) == []
