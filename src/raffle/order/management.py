"""Order status management — admin command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from raffle.domain import logger, raffle
from raffle.order.order import Order


@raffle.command(part_of="Order")
class ChangeOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@raffle.command_handler(part_of=Order)
class ManageOrderHandler:
    @handle(ChangeOrderStatus)
    def change_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.change_status(command.status)
        repo.add(order)

        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            order_number=order.order_number,
            status=order.status,
        )
