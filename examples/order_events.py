"""Example: an order aggregate whose events reach a mailer and a job queue."""

from __future__ import annotations

import asyncio
import logging

from dddkit import AggregateRoot, DddKitConfig, DomainApp, DomainEvent, EntityId
from dddkit.domain import BusinessRuleViolation, TypedListener, publish_pending_events
from dddkit.messaging import Job, QueueingListener

logger = logging.getLogger(__name__)


class OrderId(EntityId):
    pass


class Order(AggregateRoot[OrderId]):
    def __init__(self, id: OrderId, customer: str) -> None:
        super().__init__(id)
        self.customer = customer
        self.lines: dict[str, int] = {}
        self.placed = False

    def add_line(self, sku: str, quantity: int) -> None:
        if self.placed:
            raise BusinessRuleViolation("order.locked", "Placed orders cannot change")
        self.lines[sku] = self.lines.get(sku, 0) + quantity

    def place(self) -> None:
        if not self.lines:
            raise BusinessRuleViolation("order.empty", "Cannot place an empty order")
        self.placed = True
        self.add_domain_event(
            DomainEvent.create(
                "order.placed",
                {"order_id": str(self.id), "customer": self.customer, "lines": dict(self.lines)},
            )
        )


class ConfirmationMailer(TypedListener):
    event_types = ("order.placed",)

    def __init__(self) -> None:
        self.sent: list[str] = []

    async def on_event(self, event: DomainEvent) -> None:
        customer = event.payload.get("customer")
        if not isinstance(customer, str):
            return
        self.sent.append(customer)
        logger.info("Confirmation queued for %s", customer)


async def _reserve_stock(job: Job) -> None:
    event = job.data
    logger.info("Reserving stock for order %s", event.payload["order_id"])


def register(app: DomainApp) -> None:
    app.publisher.subscribe(ConfirmationMailer())
    app.publisher.subscribe(QueueingListener(app.queue))
    app.queue.process("order.placed", _reserve_stock)


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    app = DomainApp(DddKitConfig.from_env())
    await app.init_backend()
    register(app)

    order = Order(OrderId.generate(), customer="ada@example.com")
    order.add_line("sku-1", 2)
    order.place()
    await publish_pending_events(order, app.publisher)

    report = await app.queue.run_pending()
    print(f"Jobs processed: {report.processed}, failed: {report.failed}")
    await app.close()


if __name__ == "__main__":
    asyncio.run(main())
