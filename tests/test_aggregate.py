import pytest

from dddkit.domain import (
    AggregateRoot,
    DomainEvent,
    DomainEventPublisher,
    Entity,
    EntityId,
    InvalidValue,
    publish_pending_events,
)
from dddkit.testing import RecordingListener


class UserId(EntityId):
    pass


class OrderId(EntityId):
    pass


class User(Entity[UserId]):
    pass


class Account(AggregateRoot[UserId]):
    def rename(self, name: str) -> None:
        self.add_domain_event(DomainEvent.create("account.renamed", {"name": name}))


def test_entity_id_requires_value():
    with pytest.raises(InvalidValue):
        EntityId("")
    with pytest.raises(InvalidValue):
        EntityId("   ")


def test_entity_id_equality_is_type_sensitive():
    assert UserId("42") == UserId("42")
    assert UserId("42") != OrderId("42")
    assert str(UserId("42")) == "42"
    assert UserId.generate() != UserId.generate()
    assert isinstance(UserId.generate(), UserId)


def test_entities_compare_by_identity():
    first = User(UserId("1"))
    same = User(UserId("1"))
    other = User(UserId("2"))
    assert first == same
    assert first != other
    assert first != None  # noqa: E711
    assert first != "1"
    assert first != Account(UserId("1"))
    assert len({first, same, other}) == 2


def test_aggregate_collects_and_pulls_events():
    account = Account(UserId("1"))
    account.rename("alpha")
    account.rename("beta")

    assert [event.payload["name"] for event in account.domain_events] == ["alpha", "beta"]
    pulled = account.pull_domain_events()
    assert len(pulled) == 2
    assert account.domain_events == ()


def test_clear_domain_events():
    account = Account(UserId("1"))
    account.rename("alpha")
    account.clear_domain_events()
    assert account.domain_events == ()


@pytest.mark.asyncio()
async def test_publish_pending_events_in_order():
    publisher = DomainEventPublisher()
    listener = RecordingListener()
    publisher.subscribe(listener)
    account = Account(UserId("1"))
    account.rename("alpha")
    account.rename("beta")

    count = await publish_pending_events(account, publisher)

    assert count == 2
    assert [event.payload["name"] for event in listener.events] == ["alpha", "beta"]
    assert account.domain_events == ()


@pytest.mark.asyncio()
async def test_publish_pending_events_inside_listener_is_dropped():
    publisher = DomainEventPublisher()
    account = Account(UserId("1"))
    account.rename("inner")

    async def flush(_: object) -> None:
        await publish_pending_events(account, publisher)

    trigger = RecordingListener("trigger", side_effect=flush)
    publisher.subscribe(trigger)

    await publisher.publish(DomainEvent.create("outer"))

    assert [event.type for event in trigger.events] == ["outer"]
    assert account.domain_events == ()
