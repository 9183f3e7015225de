"""Raw page-view style events posted by the storefront."""

from datetime import UTC, datetime
from uuid import uuid4

import structlog
from protean import handle
from protean.fields import DateTime, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.aggregate
class AnalyticsEvent:
    visitor_id: String(required=True, max_length=64)
    event: String(required=True, min_length=1, max_length=50)
    path: String(required=True, min_length=1, max_length=500)
    referrer: Text()
    user_agent: Text()
    created_at: DateTime(default=lambda: datetime.now(UTC))
    day: String(max_length=10)  # YYYY-MM-DD of created_at


@storefront.command(part_of="AnalyticsEvent")
class TrackEvent:
    visitor_id = String(max_length=64)
    event = String(required=True, min_length=1, max_length=50)
    path = String(required=True, min_length=1, max_length=500)
    referrer = Text()
    user_agent = Text()


def new_visitor_id() -> str:
    return uuid4().hex


@storefront.command_handler(part_of=AnalyticsEvent)
class TrackEventHandler:
    @handle(TrackEvent)
    def track(self, command):
        now = datetime.now(UTC)
        record = AnalyticsEvent(
            visitor_id=command.visitor_id or new_visitor_id(),
            event=command.event,
            path=command.path,
            referrer=command.referrer,
            user_agent=command.user_agent,
            created_at=now,
            day=now.date().isoformat(),
        )
        current_domain.repository_for(AnalyticsEvent).add(record)
        logger.debug("Analytics event tracked", event_name=record.event, path=record.path)
        return record.visitor_id
