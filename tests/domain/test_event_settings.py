"""Tests for the EventSettings aggregate."""

from raffle.catalogue.events import EventSettingsSaved
from raffle.catalogue.settings import EventSettings


class TestEventSettings:
    def test_defaults(self):
        settings = EventSettings.defaults_for("evt-001")
        assert settings.allow_international_orders is False
        assert settings.require_age_confirmation is False
        assert settings.header_image_url is None

    def test_save_changes_only_given_values(self):
        settings = EventSettings.defaults_for("evt-001")
        settings.save(allow_international_orders=True)
        settings.save(require_age_confirmation=True)
        assert settings.allow_international_orders is True
        assert settings.require_age_confirmation is True

    def test_save_raises_event(self):
        settings = EventSettings.defaults_for("evt-001")
        settings.save(header_image_url="memory://storage/event-headers/evt-001/header-image.png")
        event = settings._events[-1]
        assert isinstance(event, EventSettingsSaved)
        assert event.header_image_url.endswith("header-image.png")
