"""Tests for ranking properties per client and buyers per property."""

import pytest

from propmatch.matching import MatchScorer


@pytest.fixture
def scorer() -> MatchScorer:
    return MatchScorer()


class TestRankPropertiesForClient:
    """Per-client matched properties view."""

    def test_sorted_desc_without_zero_scores(self, scorer, budget_type_client, make_property):
        properties = [
            make_property("p1", type="apartment", price=150000),  # 100
            make_property("p2", type="house", price=150000),  # 63
            make_property("p3", type="house", price=300000),  # 0
            make_property("p4", type="apartment", price=300000),  # 38
            make_property("p5", type="apartment", price=120000),  # 100
        ]

        ranked = scorer.rank_properties_for_client(budget_type_client, properties)

        assert [m.property.id for m in ranked] == ["p1", "p5", "p2", "p4"]
        assert [m.score for m in ranked] == [100, 100, 63, 38]

    def test_ties_keep_input_order(self, scorer, budget_type_client, make_property):
        properties = [make_property(f"p{i}") for i in range(5)]

        ranked = scorer.rank_properties_for_client(budget_type_client, properties)

        assert [m.property.id for m in ranked] == ["p0", "p1", "p2", "p3", "p4"]

    def test_unconstrained_client_gets_nothing(self, scorer, make_client, make_property):
        ranked = scorer.rank_properties_for_client(
            make_client(), [make_property("p1"), make_property("p2")]
        )

        assert ranked == []


class TestRankClientsForProperty:
    """Per-property matched buyers view."""

    def test_threshold_is_strictly_above_30(self, scorer, make_client, make_property):
        prop = make_property(type="apartment", price=300000, location="Patra")
        at_30 = make_client(
            "c30",
            budget_min=100000,
            budget_max=200000,
            desired_property_type="apartment",
            desired_location="Athens",
        )
        at_38 = make_client(
            "c38",
            budget_min=100000,
            budget_max=200000,
            desired_property_type="apartment",
        )

        assert scorer.score(at_30, prop) == 30
        ranked = scorer.rank_clients_for_property([at_30, at_38], prop)

        assert [(m.client.id, m.score) for m in ranked] == [("c38", 38)]

    def test_sellers_are_never_ranked(self, scorer, make_client, make_property):
        prop = make_property(price=150000)
        seller = make_client("seller", category="seller", budget_max=200000)
        buyer = make_client("buyer", budget_max=200000)

        ranked = scorer.rank_clients_for_property([seller, buyer], prop)

        assert [m.client.id for m in ranked] == ["buyer"]

    def test_sorted_desc_and_stable(self, scorer, make_client, make_property):
        prop = make_property(type="apartment", price=150000, status="rented")
        clients = [
            make_client("half-a", budget_max=200000),  # 50
            make_client("low", budget_max=100000, desired_property_type="apartment"),  # 19
            make_client("half-b", desired_property_type="apartment"),  # 50
            make_client("none"),  # 0
        ]

        ranked = scorer.rank_clients_for_property(clients, prop)

        assert [(m.client.id, m.score) for m in ranked] == [("half-a", 50), ("half-b", 50)]

    def test_custom_thresholds(self, make_client, make_property):
        scorer = MatchScorer(client_threshold=50, buyer_threshold=10)
        prop = make_property(type="apartment", price=300000)
        client = make_client(budget_max=200000, desired_property_type="apartment")  # 38

        assert scorer.rank_properties_for_client(client, [prop]) == []
        assert [m.score for m in scorer.rank_clients_for_property([client], prop)] == [38]
