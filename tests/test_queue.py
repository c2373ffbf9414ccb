import logging

import pytest

from dddkit.domain import DomainEvent, DomainEventPublisher, ProcessorAlreadyRegistered
from dddkit.messaging import InMemoryMessageQueue, Job, QueueingListener


@pytest.mark.asyncio()
async def test_run_pending_processes_in_fifo_order():
    queue = InMemoryMessageQueue()
    handled: list[str] = []

    async def processor(job: Job) -> None:
        handled.append(job.data)

    queue.process("email", processor)
    await queue.add(Job(name="email", data="first"))
    await queue.add(Job(name="email", data="second"))

    report = await queue.run_pending()

    assert handled == ["first", "second"]
    assert report.processed == 2
    assert queue.pending() == ()


@pytest.mark.asyncio()
async def test_jobs_without_processor_stay_pending():
    queue = InMemoryMessageQueue()
    job = await queue.add(Job(name="unknown", data={}))

    report = await queue.run_pending()

    assert report.skipped == 1
    assert queue.pending() == (job,)


@pytest.mark.asyncio()
async def test_failed_job_is_counted_and_logged(caplog):
    queue = InMemoryMessageQueue()

    async def explode(job: Job) -> None:
        raise RuntimeError("smtp down")

    queue.process("email", explode)
    await queue.add(Job(name="email", data=None))

    with caplog.at_level(logging.ERROR, logger="dddkit.messaging.queue"):
        report = await queue.run_pending()

    assert report.failed == 1
    assert queue.pending() == ()
    assert any("smtp down" in record.getMessage() for record in caplog.records)


def test_second_processor_for_same_name_is_rejected():
    queue = InMemoryMessageQueue()

    async def noop(job: Job) -> None:
        return None

    queue.process("email", noop)
    with pytest.raises(ProcessorAlreadyRegistered):
        queue.process("email", noop)


@pytest.mark.asyncio()
async def test_full_queue_discards_oldest_job():
    queue = InMemoryMessageQueue(max_pending=2)
    await queue.add(Job(name="a", data=1))
    await queue.add(Job(name="b", data=2))
    await queue.add(Job(name="c", data=3))
    assert [job.name for job in queue.pending()] == ["b", "c"]


def test_max_pending_must_be_positive():
    with pytest.raises(ValueError):
        InMemoryMessageQueue(max_pending=0)


@pytest.mark.asyncio()
async def test_queueing_listener_turns_events_into_jobs():
    queue = InMemoryMessageQueue()
    publisher = DomainEventPublisher()
    publisher.subscribe(QueueingListener(queue))
    event = DomainEvent.create("order.placed", {"order_id": "o-1"})

    await publisher.publish(event)
    await QueueingListener(queue).handle("not an event")

    pending = queue.pending()
    assert len(pending) == 1
    assert pending[0].name == "order.placed"
    assert pending[0].data is event
