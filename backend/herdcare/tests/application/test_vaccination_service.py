"""
End-to-end tests of the vaccination use cases through the application
service, over the in-memory stores.
"""

from datetime import timedelta

import pytest

from herdcare.application.services import VaccinationApplicationService
from herdcare.domain.livestock.events import (
    VaccinationCompleted,
    VaccinationScheduled,
    VaccinationStatusChanged,
)
from herdcare.domain.livestock.services import BulkScheduleRequest
from herdcare.domain.livestock.value_objects import (
    ReminderPriority,
    ReminderPriorityPolicy,
    ReminderType,
    ScheduleItemStatus,
    TargetScope,
    VaccinationStatus,
)
from herdcare.domain.shared.exceptions import ConcurrencyConflictError, EmptyTargetError
from herdcare.tests.factories import NOW, GroupFactory, ScheduleItemFactory


@pytest.fixture
def app_service(directory, entry_repository, clock, event_bus):
    return VaccinationApplicationService(
        directory,
        entry_repository,
        clock=clock,
        event_bus=event_bus,
        priority_policy=ReminderPriorityPolicy(),
    )


class TestVaccinationLifecycle:
    @pytest.mark.asyncio
    async def test_schedule_remind_complete_follow_up(self, app_service, farm, clock):
        cow = farm.cows[0]
        item = ScheduleItemFactory.create(
            "Rabies: annual booster", interval_days=365, initial_date=NOW + timedelta(days=5)
        )

        created = await app_service.create_schedule([item], animal_ids=[cow.id])
        entry = created.scheduled_vaccinations[0]

        reminders = await app_service.get_reminders(TargetScope.for_animal(cow.id))
        assert reminders.reminders[0].reminder_type == ReminderType.DUE_SOON
        assert reminders.reminders[0].priority == ReminderPriority.HIGH

        clock.advance(timedelta(days=5))
        result = await app_service.complete_entry(
            entry.id, next_interval_days=365, expected_version=1
        )
        assert result.updated_entry.status == VaccinationStatus.COMPLETED
        assert result.next_entry.scheduled_date == NOW + timedelta(days=370)

        reminders = await app_service.get_reminders(TargetScope.for_animal(cow.id))
        assert reminders.total == 0

        view = await app_service.get_vaccination_schedule(
            TargetScope.for_animal(cow.id), days_ahead=400, include_completed=True
        )
        assert [e.status for e in view.entries] == [
            ScheduleItemStatus.COMPLETED,
            ScheduleItemStatus.SCHEDULED,
        ]
        assert view.totals.upcoming_within_window == 1

    @pytest.mark.asyncio
    async def test_events_reach_the_bus(self, app_service, farm, event_bus):
        entry = await app_service.schedule_vaccination(
            farm.ewes[0].id, "Orf", scheduled_date=NOW + timedelta(days=1)
        )
        await app_service.complete_entry(entry.id)

        assert len(event_bus.get_event_history(VaccinationScheduled)) == 1
        assert len(event_bus.get_event_history(VaccinationCompleted)) == 1
        assert len(event_bus.get_event_history(VaccinationStatusChanged)) == 1

    @pytest.mark.asyncio
    async def test_concurrent_edit_detected(self, app_service, farm):
        entry = await app_service.schedule_vaccination(
            farm.ewes[0].id, "Orf", scheduled_date=NOW + timedelta(days=1)
        )
        await app_service.reschedule_entry(
            entry.id, NOW + timedelta(days=2), expected_version=1
        )

        with pytest.raises(ConcurrencyConflictError):
            await app_service.cancel_entry(entry.id, expected_version=1)


class TestBulkThroughApplicationService:
    @pytest.mark.asyncio
    async def test_bulk_then_reminders(self, app_service, farm):
        result = await app_service.bulk_schedule(
            BulkScheduleRequest(
                group_ids=[farm.sheep.id],
                vaccination_schedules=[
                    ScheduleItemFactory.create_bulk(
                        "Footrot", scheduled_date=NOW + timedelta(days=20)
                    )
                ],
            )
        )
        assert result.total_vaccinations_scheduled == len(farm.ewes)

        reminders = await app_service.get_reminders(TargetScope.for_group(farm.sheep.id))

        assert reminders.total == len(farm.ewes)
        assert all(r.reminder_type == ReminderType.UPCOMING for r in reminders.reminders)
        assert all(r.priority == ReminderPriority.LOW for r in reminders.reminders)

    @pytest.mark.asyncio
    async def test_bulk_on_empty_group(self, app_service, directory, entry_repository):
        group = GroupFactory.create()
        await directory.add_group(group)

        with pytest.raises(EmptyTargetError):
            await app_service.bulk_schedule(
                BulkScheduleRequest(
                    group_ids=[group.id],
                    vaccination_schedules=[ScheduleItemFactory.create_bulk()],
                )
            )

        assert entry_repository.save_count == 0


class TestInMemoryFactory:
    @pytest.mark.asyncio
    async def test_in_memory_service_is_wired(self, clock):
        service = VaccinationApplicationService.in_memory(clock=clock)

        result = await service.get_reminders(TargetScope.for_farm(GroupFactory.create().farm_id))

        assert result.total == 0
        assert service.event_bus is not None
