import pytest

from services.stats_service import (
    CategoryTotal,
    StatsService,
    aggregate,
    category_color,
    percentage_formatted,
)
from utils.constants import FALLBACK_COLOR
from tests.conftest import make_sub


def _monthly_example():
    return [
        make_sub(id="1", name="Netflix", price=15.99, category="Entertainment"),
        make_sub(id="2", name="Cloud Backup", price=29.99, category="Services"),
        make_sub(id="3", name="Electric", price=12.99, category="Utilities"),
        make_sub(id="4", name="Spotify", price=9.98, category="Entertainment"),
        make_sub(id="5", name="Hosting", price=25.99, category="Services"),
    ]


class FakeSource:
    def __init__(self, subs):
        self._subs = subs

    def get_all(self):
        return list(self._subs)


class TestAggregate:

    def test_empty_input(self):
        assert aggregate([]) == []

    def test_groups_and_orders_by_amount(self):
        groups = aggregate(_monthly_example())
        assert [g.category for g in groups] == ["Services", "Entertainment", "Utilities"]
        assert groups[0].total_amount == pytest.approx(55.98)
        assert groups[1].total_amount == pytest.approx(25.97)
        assert groups[2].total_amount == pytest.approx(12.99)
        assert [g.count for g in groups] == [2, 2, 1]

    def test_whole_number_percentages_are_rounded(self):
        groups = aggregate(_monthly_example())
        assert [percentage_formatted(g.percentage_of_total) for g in groups] == ["59%", "27%", "14%"]

    def test_totals_add_up_to_grand_total(self):
        subs = _monthly_example()
        groups = aggregate(subs)
        assert sum(g.total_amount for g in groups) == pytest.approx(sum(s.monthly_price for s in subs))
        assert sum(g.percentage_of_total for g in groups) == pytest.approx(100.0)

    def test_single_category_is_everything(self):
        groups = aggregate([make_sub(price=7.5, category="Health")])
        assert groups == [CategoryTotal("Health", 7.5, 100.0, count=1, color_hex=category_color("Health"))]

    def test_ties_keep_first_appearance_order(self):
        first = aggregate([
            make_sub(id="a", price=10.0, category="Education"),
            make_sub(id="b", price=10.0, category="Health"),
        ])
        assert [g.category for g in first] == ["Education", "Health"]

        second = aggregate([
            make_sub(id="b", price=5.0, category="Health"),
            make_sub(id="a", price=10.0, category="Education"),
            make_sub(id="c", price=5.0, category="Health"),
        ])
        assert [g.category for g in second] == ["Health", "Education"]

    def test_zero_grand_total_gives_zero_percentages(self):
        groups = aggregate([
            make_sub(id="a", price=0.0, category="Other"),
            make_sub(id="b", price=0.0, category="Services"),
        ])
        assert [g.percentage_of_total for g in groups] == [0.0, 0.0]

    def test_groups_on_raw_category_string(self):
        groups = aggregate([
            make_sub(id="a", price=3.0, category="Gym"),
            make_sub(id="b", price=2.0, category="gym"),
        ])
        assert [g.category for g in groups] == ["Gym", "gym"]

    def test_unknown_category_gets_fallback_color(self):
        groups = aggregate([make_sub(price=4.0, category="Gym")])
        assert groups[0].color_hex == FALLBACK_COLOR

    def test_accepts_generator(self):
        groups = aggregate(s for s in _monthly_example())
        assert len(groups) == 3

    def test_missing_category_raises(self):
        with pytest.raises(ValueError):
            aggregate([make_sub(category=None)])

    def test_malformed_subscription_raises(self):
        with pytest.raises(ValueError):
            aggregate([make_sub(id="")])


class TestPresentation:

    @pytest.mark.parametrize("value, expected", [
        (58.96, "59%"),
        (27.35, "27%"),
        (0.0, "0%"),
        (100.0, "100%"),
    ])
    def test_percentage_formatted(self, value, expected):
        assert percentage_formatted(value) == expected

    def test_category_colors(self):
        assert category_color("Entertainment") != category_color("Services")
        assert category_color("Other") == FALLBACK_COLOR


class TestStatsService:

    def test_breakdown_reads_from_source(self):
        svc = StatsService(FakeSource(_monthly_example()))
        assert [g.category for g in svc.get_category_breakdown()] == ["Services", "Entertainment", "Utilities"]

    def test_summary(self):
        summary = StatsService(FakeSource(_monthly_example())).get_summary()
        assert summary["count"] == 5
        assert summary["categories"] == 3
        assert summary["total"] == pytest.approx(94.94)

    def test_summary_empty(self):
        summary = StatsService(FakeSource([])).get_summary()
        assert summary == {"total": 0, "count": 0, "categories": 0}
