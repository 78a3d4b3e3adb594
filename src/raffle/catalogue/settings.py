"""EventSettings aggregate — per-event display and ordering rules."""

from protean.fields import Boolean, Identifier, String

from raffle.catalogue.events import EventSettingsSaved
from raffle.domain import raffle


@raffle.aggregate
class EventSettings:
    event_id = Identifier(required=True)
    header_image_url = String(max_length=500)
    allow_international_orders = Boolean(default=False)
    require_age_confirmation = Boolean(default=False)

    @classmethod
    def defaults_for(cls, event_id):
        """Unsaved settings used when an event has none stored."""
        return cls(event_id=event_id)

    def save(self, allow_international_orders=None, require_age_confirmation=None, header_image_url=None):
        if allow_international_orders is not None:
            self.allow_international_orders = allow_international_orders
        if require_age_confirmation is not None:
            self.require_age_confirmation = require_age_confirmation
        if header_image_url is not None:
            self.header_image_url = header_image_url

        self.raise_(
            EventSettingsSaved(
                settings_id=str(self.id),
                event_id=str(self.event_id),
                header_image_url=self.header_image_url,
                allow_international_orders=self.allow_international_orders,
                require_age_confirmation=self.require_age_confirmation,
            )
        )


@raffle.repository(part_of=EventSettings)
class EventSettingsRepository:
    def find_for_event(self, event_id) -> EventSettings | None:
        results = self._dao.query.filter(event_id=str(event_id)).all().items
        return results[0] if results else None

    def for_event(self, event_id) -> EventSettings:
        """Stored settings of an event, or the defaults when none were saved."""
        return self.find_for_event(event_id) or EventSettings.defaults_for(event_id)
