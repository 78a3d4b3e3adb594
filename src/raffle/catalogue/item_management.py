"""Raffle item management — commands and handler."""

import json

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from raffle import config
from raffle.catalogue.event import RaffleEvent
from raffle.catalogue.item import RaffleItem
from raffle.domain import logger, raffle
from raffle.storage import get_storage
from raffle.storage.port import StorageError


@raffle.command(part_of="RaffleItem")
class CreateRaffleItem:
    event_id = Identifier(required=True)
    item_number = String(required=True, max_length=20)
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True)
    category = String(max_length=100)
    sponsor = String(max_length=255)
    item_value = Float()
    is_over_21 = Boolean(default=False)
    is_local_pickup_only = Boolean(default=False)
    draw_count = Integer(default=1)
    is_available = Boolean(default=True)
    image_urls = Text()  # JSON: list of URLs


@raffle.command(part_of="RaffleItem")
class UpdateRaffleItem:
    item_id = Identifier(required=True)
    item_number = String(max_length=20)
    name = String(max_length=255)
    description = Text()
    price = Float()
    category = String(max_length=100)
    sponsor = String(max_length=255)
    item_value = Float()
    is_over_21 = Boolean()
    is_local_pickup_only = Boolean()
    draw_count = Integer()


@raffle.command(part_of="RaffleItem")
class SetItemAvailability:
    item_id = Identifier(required=True)
    is_available = Boolean(required=True)


@raffle.command(part_of="RaffleItem")
class AddRaffleItemImage:
    item_id = Identifier(required=True)
    url = String(required=True, max_length=500)


@raffle.command(part_of="RaffleItem")
class RemoveRaffleItem:
    item_id = Identifier(required=True)


@raffle.command_handler(part_of=RaffleItem)
class ManageRaffleItemHandler:
    @handle(CreateRaffleItem)
    def create_item(self, command):
        # Items can only be attached to an existing event
        current_domain.repository_for(RaffleEvent).get(command.event_id)

        image_urls = json.loads(command.image_urls) if command.image_urls else []
        item = RaffleItem.create(
            event_id=command.event_id,
            item_number=command.item_number,
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            sponsor=command.sponsor,
            item_value=command.item_value,
            is_over_21=command.is_over_21,
            is_local_pickup_only=command.is_local_pickup_only,
            draw_count=command.draw_count,
            is_available=command.is_available,
            image_urls=image_urls,
        )
        current_domain.repository_for(RaffleItem).add(item)
        return str(item.id)

    @handle(UpdateRaffleItem)
    def update_item(self, command):
        repo = current_domain.repository_for(RaffleItem)
        item = repo.get(command.item_id)
        item.update_details(
            item_number=command.item_number,
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            sponsor=command.sponsor,
            item_value=command.item_value,
            is_over_21=command.is_over_21,
            is_local_pickup_only=command.is_local_pickup_only,
            draw_count=command.draw_count,
        )
        repo.add(item)

    @handle(SetItemAvailability)
    def set_availability(self, command):
        repo = current_domain.repository_for(RaffleItem)
        item = repo.get(command.item_id)
        item.set_availability(command.is_available)
        repo.add(item)

    @handle(AddRaffleItemImage)
    def add_image(self, command):
        repo = current_domain.repository_for(RaffleItem)
        item = repo.get(command.item_id)
        item.add_image(command.url)
        repo.add(item)

    @handle(RemoveRaffleItem)
    def remove_item(self, command):
        repo = current_domain.repository_for(RaffleItem)
        item = repo.get(command.item_id)

        storage = get_storage()
        paths = [storage.path_from_url(config.ITEM_IMAGE_BUCKET, url) for url in item.image_urls]
        paths = [p for p in paths if p]
        if paths:
            try:
                storage.remove(config.ITEM_IMAGE_BUCKET, paths)
            except StorageError:
                logger.warning("item_images_not_removed", item_id=str(item.id), paths=paths, exc_info=True)

        repo._dao.delete(item)
