"""RaffleEvent aggregate — a time-boxed raffle campaign.

Each event owns its own catalogue of raffle items, its display settings and
its orders. The storefront shows the *current* event: the most recently
started active event whose date window contains today.
"""

from datetime import UTC, date, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Date, DateTime, String, Text

from raffle.catalogue.events import RaffleEventCreated, RaffleEventStatusChanged, RaffleEventUpdated
from raffle.domain import raffle


class EventStatus(Enum):
    DRAFT = "draft"
    PREVIEW = "preview"
    ACTIVE = "active"
    COMPLETED = "completed"


@raffle.aggregate
class RaffleEvent:
    name = String(required=True, max_length=255)
    description = Text()
    start_date = Date(required=True)
    end_date = Date(required=True)
    status = String(choices=EventStatus, default=EventStatus.DRAFT.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def event_must_end_after_it_starts(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({"end_date": ["End date cannot be before start date"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, start_date, end_date, description=None, status=None):
        now = datetime.now(UTC)
        event = cls(
            name=name,
            description=description,
            start_date=start_date,
            end_date=end_date,
            status=status or EventStatus.DRAFT.value,
            created_at=now,
            updated_at=now,
        )
        event.raise_(
            RaffleEventCreated(
                event_id=str(event.id),
                name=event.name,
                start_date=event.start_date.isoformat(),
                end_date=event.end_date.isoformat(),
                status=event.status,
                created_at=now,
            )
        )
        return event

    def update_details(self, name=None, description=None, start_date=None, end_date=None):
        with atomic_change(self):
            if name is not None:
                self.name = name
            if description is not None:
                self.description = description
            if start_date is not None:
                self.start_date = start_date
            if end_date is not None:
                self.end_date = end_date
        self.updated_at = datetime.now(UTC)

        self.raise_(
            RaffleEventUpdated(
                event_id=str(self.id),
                name=self.name,
                start_date=self.start_date.isoformat(),
                end_date=self.end_date.isoformat(),
            )
        )

    def change_status(self, new_status):
        try:
            target = EventStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown event status: {new_status}"]}) from None
        previous = self.status
        if previous == target.value:
            return

        self.status = target.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            RaffleEventStatusChanged(
                event_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
            )
        )

    def is_running_on(self, day: date) -> bool:
        """True when the event is active and ``day`` falls inside its window."""
        return self.status == EventStatus.ACTIVE.value and self.start_date <= day <= self.end_date


@raffle.repository(part_of=RaffleEvent)
class RaffleEventRepository:
    def list_all(self) -> list[RaffleEvent]:
        """All events, most recent start date first."""
        return self._dao.query.order_by("-start_date").all().items

    def current(self, today: date | None = None) -> RaffleEvent | None:
        """The most recently started event running today, if any."""
        today = today or datetime.now(UTC).date()
        active = self._dao.query.filter(status=EventStatus.ACTIVE.value).all().items
        running = [e for e in active if e.is_running_on(today)]
        if not running:
            return None
        return max(running, key=lambda e: e.start_date)
