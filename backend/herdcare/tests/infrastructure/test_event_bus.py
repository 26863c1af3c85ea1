from uuid import uuid4

import pytest

from herdcare.domain.livestock.events import VaccinationCancelled, VaccinationScheduled
from herdcare.infrastructure.events import InMemoryEventBus
from herdcare.tests.factories import NOW, VaccinationEntryFactory


def scheduled_event():
    return VaccinationScheduled(
        aggregate_id=uuid4(), animal_id=uuid4(), vaccination_type="BVD", scheduled_date=NOW
    )


class TestInMemoryEventBus:
    @pytest.mark.asyncio
    async def test_sync_and_async_handlers(self):
        bus = InMemoryEventBus()
        seen = []

        async def async_handler(event):
            seen.append(("async", event))

        bus.subscribe(VaccinationScheduled, lambda e: seen.append(("sync", e)))
        bus.subscribe(VaccinationScheduled, async_handler)
        event = scheduled_event()

        await bus.publish(event)

        assert seen == [("sync", event), ("async", event)]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_block_others(self):
        bus = InMemoryEventBus()
        seen = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(VaccinationScheduled, broken)
        bus.subscribe(VaccinationScheduled, seen.append)

        await bus.publish(scheduled_event())

        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_publish_from_drains_aggregate(self):
        bus = InMemoryEventBus()
        entry = VaccinationEntryFactory.create()
        entry.cancel(when=NOW)

        await bus.publish_from(entry)

        assert entry.get_domain_events() == []
        assert len(bus.get_event_history(VaccinationCancelled)) == 1
        assert len(bus.get_event_history()) == 2

    def test_subscribe_is_idempotent_and_unsubscribe(self):
        bus = InMemoryEventBus()
        def handler(event):
            pass

        bus.subscribe(VaccinationScheduled, handler)
        bus.subscribe(VaccinationScheduled, handler)
        assert bus.get_handler_count(VaccinationScheduled) == 1

        bus.unsubscribe(VaccinationScheduled, handler)
        assert bus.get_handler_count(VaccinationScheduled) == 0

    @pytest.mark.asyncio
    async def test_history_is_bounded(self):
        bus = InMemoryEventBus(max_history_size=3)

        for _ in range(5):
            await bus.publish(scheduled_event())

        assert len(bus.get_event_history()) == 3
