"""Daily traffic and revenue rollups."""

from datetime import UTC, date, datetime, timedelta

from protean import current_domain

from storefront.analytics.event import AnalyticsEvent, TrackEvent
from storefront.analytics.summary import DailySummary, aggregate_day, recent_summaries
from storefront.ordering.order.management import UpdateOrderPaymentStatus
from storefront.ordering.order.queries import find_by_number


def _track(path, visitor_id=None):
    return current_domain.process(TrackEvent(visitor_id=visitor_id, event="page_view", path=path), asynchronous=False)


def _mark_paid(order_number):
    order = find_by_number(order_number)
    current_domain.process(
        UpdateOrderPaymentStatus(order_id=order.id, payment_status="paid", actor="admin"),
        asynchronous=False,
    )


class TestTrackEvent:
    def test_new_visitor_gets_an_id(self):
        visitor_id = _track("/")
        assert len(visitor_id) == 32

        event = current_domain.repository_for(AnalyticsEvent)._dao.query.all().items[0]
        assert event.visitor_id == visitor_id
        assert event.day == datetime.now(UTC).date().isoformat()

    def test_known_visitor_is_kept(self):
        assert _track("/", visitor_id="cat-lover") == "cat-lover"


class TestAggregateDay:
    def test_counts_visitors_views_and_paid_revenue(self, make_product, place_order):
        _track("/", visitor_id="a")
        _track("/products/feather-wand", visitor_id="a")
        _track("/", visitor_id="b")

        product_id = make_product(price=1500)
        paid = place_order([(product_id, 2)])
        place_order([(product_id, 1)], email="grace@example.com")
        _mark_paid(paid.order_number)

        summary = aggregate_day(datetime.now(UTC).date())

        assert summary.unique_visitors == 2
        assert summary.page_views == 3
        assert summary.orders_count == 1
        assert summary.revenue == 3000

    def test_rerun_overwrites(self):
        today = datetime.now(UTC).date()
        _track("/", visitor_id="a")
        aggregate_day(today)
        _track("/", visitor_id="b")
        aggregate_day(today)

        stored = current_domain.repository_for(DailySummary).get(today.isoformat())
        assert stored.unique_visitors == 2
        assert len(current_domain.repository_for(DailySummary)._dao.query.all().items) == 1

    def test_empty_day(self):
        summary = aggregate_day(date(2024, 2, 29))
        assert (summary.unique_visitors, summary.page_views, summary.orders_count, summary.revenue) == (0, 0, 0, 0)


class TestRecentSummaries:
    def test_missing_days_are_zero_and_oldest_first(self):
        today = date(2024, 3, 10)
        current_domain.repository_for(DailySummary).add(
            DailySummary(date="2024-03-09", unique_visitors=4, page_views=9, orders_count=1, revenue=2500)
        )

        rows = recent_summaries(days=3, today=today)

        assert [row["date"] for row in rows] == ["2024-03-08", "2024-03-09", "2024-03-10"]
        assert rows[0] == {"date": "2024-03-08", "uniqueVisitors": 0, "pageViews": 0, "ordersCount": 0, "revenue": 0}
        assert rows[1]["revenue"] == 2500

    def test_defaults_to_a_week_ending_today(self):
        rows = recent_summaries()
        assert len(rows) == 7
        assert rows[-1]["date"] == datetime.now(UTC).date().isoformat()
        assert rows[0]["date"] == (datetime.now(UTC).date() - timedelta(days=6)).isoformat()
