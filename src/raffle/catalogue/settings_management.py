"""Event settings management — command and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from raffle.catalogue.event import RaffleEvent
from raffle.catalogue.settings import EventSettings
from raffle.domain import raffle


@raffle.command(part_of="EventSettings")
class SaveEventSettings:
    """Create or update the settings of an event."""

    event_id = Identifier(required=True)
    allow_international_orders = Boolean()
    require_age_confirmation = Boolean()
    header_image_url = String(max_length=500)


@raffle.command_handler(part_of=EventSettings)
class SaveEventSettingsHandler:
    @handle(SaveEventSettings)
    def save_settings(self, command):
        current_domain.repository_for(RaffleEvent).get(command.event_id)

        repo = current_domain.repository_for(EventSettings)
        settings = repo.for_event(command.event_id)
        settings.save(
            allow_international_orders=command.allow_international_orders,
            require_age_confirmation=command.require_age_confirmation,
            header_image_url=command.header_image_url,
        )
        repo.add(settings)
        return str(settings.id)
