"""Tests for the matching service used by the presentation layer."""

import pytest

from propmatch.matching import (
    InMemoryCRMStore,
    MatchBadgeCounter,
    MatchingService,
    MatchScorer,
    MatchVisibilityTracker,
)


@pytest.fixture
def crm(make_client, make_property):
    clients = [
        make_client("ana", budget_max=200000, desired_property_type="apartment"),
        make_client("bob", budget_max=600000),
        make_client("seller", category="seller", desired_property_type="apartment"),
        make_client("empty"),
    ]
    properties = [
        make_property("flat", type="apartment", price=150000),
        make_property("villa", type="house", price=500000),
        make_property("plot", type="plot", price=50000),
        make_property("loft", type="apartment", price=300000),
    ]
    return InMemoryCRMStore(clients, properties)


@pytest.fixture
def service(crm):
    return MatchingService(crm, scorer=MatchScorer())


class TestClientMatches:
    """Per-client list with exclusions applied."""

    def test_matches_for_client(self, service):
        matches = service.matches_for_client("ana")

        assert [(m.property.id, m.score) for m in matches] == [
            ("flat", 100),
            ("plot", 63),
            ("loft", 38),
        ]

    def test_excluded_property_is_removed(self, service):
        service.tracker.exclude("ana", "plot")

        assert [m.property.id for m in service.matches_for_client("ana")] == [
            "flat",
            "loft",
        ]

    def test_unknown_client_returns_empty(self, service):
        assert service.matches_for_client("nobody") == []

    def test_result_is_memoized(self, service):
        first = service.matches_for_client("ana")

        assert service.matches_for_client("ana") is first

    def test_cache_invalidated_by_exclusion(self, service):
        first = service.matches_for_client("ana")
        service.tracker.exclude("ana", "flat")

        second = service.matches_for_client("ana")

        assert second is not first
        assert "flat" not in [m.property.id for m in second]

    def test_cache_invalidated_by_new_snapshot(self, service, crm, make_property):
        service.matches_for_client("ana")
        crm.set_properties([make_property("studio", type="apartment", price=90000)])

        assert [m.property.id for m in service.matches_for_client("ana")] == ["studio"]


class TestPropertyMatches:
    """Per-property buyer list and overview."""

    def test_buyers_for_property(self, service):
        buyers = service.buyers_for_property("flat")

        assert [(b.client.id, b.score) for b in buyers] == [("ana", 100), ("bob", 100)]

    def test_excluded_buyer_is_removed(self, service):
        service.tracker.exclude("ana", "flat")

        assert [b.client.id for b in service.buyers_for_property("flat")] == ["bob"]

    def test_unknown_property_returns_empty(self, service):
        assert service.buyers_for_property("nowhere") == []

    def test_overview_sorted_by_buyer_count(self, service):
        overview = service.property_overview()

        # flat: ana, bob; plot: bob, ana; loft: bob, ana; villa: bob
        assert [(item.property.id, len(item.buyers)) for item in overview] == [
            ("flat", 2),
            ("plot", 2),
            ("loft", 2),
            ("villa", 1),
        ]
        assert [b.client.id for b in overview[1].buyers] == ["bob", "ana"]
        assert service.total_matches() == 7

    def test_new_match_count_tracks_viewed_pairs(self, service):
        assert service.new_match_count() == 7

        service.tracker.mark_viewed("villa", "bob")
        service.tracker.mark_viewed("villa", "bob")

        assert service.new_match_count() == 6


class TestBadges:
    """Legacy count-based badge."""

    def test_badge_counter(self):
        badge = MatchBadgeCounter()

        assert badge.pending(5) == 5
        badge.clear(5)
        assert badge.pending(5) == 0
        assert badge.pending(7) == 2
        assert badge.pending(3) == 0

    def test_service_badge(self, service):
        assert service.pending_badge_count() == 7

        service.clear_badge()

        assert service.pending_badge_count() == 0


def test_default_scorer_uses_settings(crm, monkeypatch):
    from propmatch.config import Settings

    monkeypatch.setattr(
        "propmatch.matching.service.get_settings",
        lambda: Settings(_env_file=None, buyer_match_threshold=50),
    )

    service = MatchingService(crm, tracker=MatchVisibilityTracker())

    assert service.scorer.client_threshold == 0
    assert service.scorer.buyer_threshold == 50
    # loft: bob (100) stays, ana (38) drops
    assert [b.client.id for b in service.buyers_for_property("loft")] == ["bob"]
