"""Raffle event management — commands and handler."""

from datetime import date

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from raffle.catalogue.event import RaffleEvent
from raffle.domain import raffle


def _parse_date(value):
    return date.fromisoformat(value) if value else None


@raffle.command(part_of="RaffleEvent")
class CreateRaffleEvent:
    name = String(required=True, max_length=255)
    description = Text()
    start_date = String(required=True, max_length=10)  # ISO date
    end_date = String(required=True, max_length=10)  # ISO date
    status = String(max_length=20)


@raffle.command(part_of="RaffleEvent")
class UpdateRaffleEvent:
    event_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    start_date = String(max_length=10)
    end_date = String(max_length=10)


@raffle.command(part_of="RaffleEvent")
class ChangeRaffleEventStatus:
    event_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@raffle.command_handler(part_of=RaffleEvent)
class ManageRaffleEventHandler:
    @handle(CreateRaffleEvent)
    def create_event(self, command):
        event = RaffleEvent.create(
            name=command.name,
            description=command.description,
            start_date=_parse_date(command.start_date),
            end_date=_parse_date(command.end_date),
            status=command.status,
        )
        current_domain.repository_for(RaffleEvent).add(event)
        return str(event.id)

    @handle(UpdateRaffleEvent)
    def update_event(self, command):
        repo = current_domain.repository_for(RaffleEvent)
        event = repo.get(command.event_id)
        event.update_details(
            name=command.name,
            description=command.description,
            start_date=_parse_date(command.start_date),
            end_date=_parse_date(command.end_date),
        )
        repo.add(event)

    @handle(ChangeRaffleEventStatus)
    def change_status(self, command):
        repo = current_domain.repository_for(RaffleEvent)
        event = repo.get(command.event_id)
        event.change_status(command.status)
        repo.add(event)
