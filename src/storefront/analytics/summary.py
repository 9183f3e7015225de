"""Daily rollup of traffic and paid revenue, keyed by date (YYYY-MM-DD)."""

from datetime import UTC, date, datetime, timedelta

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from storefront.analytics.event import AnalyticsEvent
from storefront.domain import storefront
from storefront.ordering.order.order import Order, PaymentStatus

logger = structlog.get_logger(__name__)


@storefront.aggregate
class DailySummary:
    date = String(identifier=True, required=True, max_length=10)
    unique_visitors = Integer(default=0, min_value=0)
    page_views = Integer(default=0, min_value=0)
    orders_count = Integer(default=0, min_value=0)
    revenue = Integer(default=0, min_value=0)


def _created_on(moment: datetime, day: date) -> bool:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).date() == day


def aggregate_day(day: date | None = None) -> DailySummary:
    """Recompute one day's summary from events and paid orders, then upsert it."""
    day = day or datetime.now(UTC).date()
    key = day.isoformat()

    events = current_domain.repository_for(AnalyticsEvent)._dao.query.filter(day=key).all().items
    paid_orders = [
        order
        for order in current_domain.repository_for(Order)._dao.query.filter(payment_status=PaymentStatus.PAID.value).all().items
        if _created_on(order.created_at, day)
    ]

    repo = current_domain.repository_for(DailySummary)
    try:
        summary = repo.get(key)
    except ObjectNotFoundError:
        summary = DailySummary(date=key)

    summary.unique_visitors = len({e.visitor_id for e in events})
    summary.page_views = len(events)
    summary.orders_count = len(paid_orders)
    summary.revenue = sum(order.total for order in paid_orders)
    repo.add(summary)

    logger.info(
        "Daily summary aggregated",
        date=key,
        unique_visitors=summary.unique_visitors,
        page_views=summary.page_views,
        orders_count=summary.orders_count,
        revenue=summary.revenue,
    )
    return summary


def recent_summaries(days: int = 7, today: date | None = None) -> list[dict]:
    """Stored summaries for the last ``days`` days, oldest first; missing days are zeros."""
    today = today or datetime.now(UTC).date()
    repo = current_domain.repository_for(DailySummary)
    rows = []
    for offset in range(days - 1, -1, -1):
        key = (today - timedelta(days=offset)).isoformat()
        try:
            summary = repo.get(key)
        except ObjectNotFoundError:
            summary = DailySummary(date=key)
        rows.append(
            {
                "date": summary.date,
                "uniqueVisitors": summary.unique_visitors or 0,
                "pageViews": summary.page_views or 0,
                "ordersCount": summary.orders_count or 0,
                "revenue": summary.revenue or 0,
            }
        )
    return rows
