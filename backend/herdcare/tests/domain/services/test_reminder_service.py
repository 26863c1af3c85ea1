"""
Tests for ReminderService classification, ranking and aggregation.
"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from herdcare.domain.livestock.services import ReminderService
from herdcare.domain.livestock.value_objects import (
    HealthRecordType,
    ReminderPriority,
    ReminderPriorityPolicy,
    ReminderType,
    TargetScope,
    VaccinationStatus,
)
from herdcare.domain.shared.exceptions import AnimalNotFoundError, GroupNotFoundError
from herdcare.tests.factories import NOW, VaccinationEntryFactory


@pytest.fixture
def service(directory, entry_repository, clock):
    return ReminderService(directory, entry_repository, clock, ReminderPriorityPolicy())


async def add_entry(repo, animal, days, **kwargs):
    entry = VaccinationEntryFactory.create(
        animal_id=animal.id, scheduled_date=NOW + timedelta(days=days), **kwargs
    )
    await repo.save(entry)
    return entry


class TestClassification:
    @pytest.mark.asyncio
    async def test_due_soon_critical_scenario(self, service, farm, entry_repository):
        cow = farm.cows[0]
        await add_entry(entry_repository, cow, 5, vaccination_type="Rabies: annual booster")

        result = await service.get_reminders(TargetScope.for_animal(cow.id))

        assert result.total == 1
        reminder = result.reminders[0]
        assert reminder.reminder_type == ReminderType.DUE_SOON
        assert reminder.priority == ReminderPriority.HIGH
        assert reminder.days_until_due == 5
        assert reminder.animal_tag == cow.tag
        assert reminder.group_name == "Dairy herd"

    @pytest.mark.asyncio
    async def test_type_by_days(self, service, farm, entry_repository):
        cow = farm.cows[0]
        await add_entry(entry_repository, cow, -2, vaccination_type="A")
        await add_entry(entry_repository, cow, 0, vaccination_type="B")
        await add_entry(entry_repository, cow, 7, vaccination_type="C")
        await add_entry(entry_repository, cow, 8, vaccination_type="D")
        await add_entry(entry_repository, cow, 30, vaccination_type="E")
        await add_entry(entry_repository, cow, 31, vaccination_type="F")

        result = await service.get_reminders(
            TargetScope.for_animal(cow.id), include_overdue=True
        )

        by_type = {r.vaccination_type: r.reminder_type for r in result.reminders}
        assert by_type == {
            "A": ReminderType.OVERDUE,
            "B": ReminderType.DUE_SOON,
            "C": ReminderType.DUE_SOON,
            "D": ReminderType.UPCOMING,
            "E": ReminderType.UPCOMING,
        }

    @pytest.mark.asyncio
    async def test_overdue_excluded_by_default(self, service, farm, entry_repository):
        cow = farm.cows[0]
        await add_entry(entry_repository, cow, -1)

        result = await service.get_reminders(TargetScope.for_animal(cow.id))

        assert result.total == 0

    @pytest.mark.asyncio
    async def test_due_soon_ignores_short_lookahead(self, service, farm, entry_repository):
        cow = farm.cows[0]
        await add_entry(entry_repository, cow, 6)

        result = await service.get_reminders(TargetScope.for_animal(cow.id), days_ahead=3)

        assert result.reminders[0].reminder_type == ReminderType.DUE_SOON

    @pytest.mark.asyncio
    async def test_skips_closed_undated_and_non_vaccination(
        self, service, farm, entry_repository
    ):
        cow = farm.cows[0]
        await add_entry(entry_repository, cow, 3, status=VaccinationStatus.COMPLETED)
        await add_entry(entry_repository, cow, 3, status=VaccinationStatus.CANCELLED)
        await add_entry(entry_repository, cow, 3, record_type=HealthRecordType.CHECKUP)
        undated = await add_entry(entry_repository, cow, 3)
        undated.scheduled_date = None
        undated.version = 2
        await entry_repository.save(undated)
        kept = await add_entry(
            entry_repository, cow, 3, status=VaccinationStatus.RESCHEDULED
        )

        result = await service.get_reminders(TargetScope.for_animal(cow.id))

        assert [r.entry_id for r in result.reminders] == [kept.id]


class TestFiltersAndOrdering:
    @pytest.mark.asyncio
    async def test_farm_scope_sorted_by_priority_then_date(
        self, service, farm, entry_repository
    ):
        cow, ewe = farm.cows[0], farm.ewes[0]
        low = await add_entry(entry_repository, cow, 25, vaccination_type="BVD")
        medium = await add_entry(entry_repository, ewe, 12, vaccination_type="Footrot")
        high_late = await add_entry(entry_repository, cow, 6, vaccination_type="Lepto")
        high_early = await add_entry(entry_repository, ewe, 2, vaccination_type="Orf")

        result = await service.get_reminders(TargetScope.for_farm(farm.farm_id))

        assert [r.entry_id for r in result.reminders] == [
            high_early.id,
            high_late.id,
            medium.id,
            low.id,
        ]

    @pytest.mark.asyncio
    async def test_vaccination_type_filter_is_substring(self, service, farm, entry_repository):
        cow = farm.cows[0]
        await add_entry(entry_repository, cow, 3, vaccination_type="Rabies booster")
        await add_entry(entry_repository, cow, 3, vaccination_type="BVD")

        result = await service.get_reminders(
            TargetScope.for_animal(cow.id), vaccination_type="RABIES"
        )

        assert [r.vaccination_type for r in result.reminders] == ["Rabies booster"]

    @pytest.mark.asyncio
    async def test_priority_filter(self, service, farm, entry_repository):
        cow = farm.cows[0]
        await add_entry(entry_repository, cow, 3)
        await add_entry(entry_repository, cow, 20)

        result = await service.get_reminders(
            TargetScope.for_animal(cow.id), priority_level=ReminderPriority.LOW
        )

        assert [r.days_until_due for r in result.reminders] == [20]


class TestSummary:
    @pytest.mark.asyncio
    async def test_counts_and_cost(self, service, farm, entry_repository):
        cow = farm.cows[0]
        await add_entry(entry_repository, cow, -4, cost=Decimal("10.00"))
        await add_entry(entry_repository, cow, 2, cost=Decimal("2.50"))
        await add_entry(entry_repository, cow, 20, cost=None)

        result = await service.get_reminders(
            TargetScope.for_animal(cow.id), include_overdue=True
        )

        assert result.summary.by_type == {
            ReminderType.OVERDUE: 1,
            ReminderType.DUE_SOON: 1,
            ReminderType.UPCOMING: 1,
        }
        assert result.summary.by_priority == {
            ReminderPriority.HIGH: 2,
            ReminderPriority.MEDIUM: 0,
            ReminderPriority.LOW: 1,
        }
        assert result.summary.total_estimated_cost == Decimal("12.50")


class TestScopes:
    @pytest.mark.asyncio
    async def test_empty_farm(self, service):
        result = await service.get_reminders(TargetScope.for_farm(uuid4()))

        assert result.total == 0
        assert result.summary.total_estimated_cost == Decimal("0")

    @pytest.mark.asyncio
    async def test_unknown_group(self, service, farm):
        with pytest.raises(GroupNotFoundError):
            await service.get_reminders(TargetScope.for_group(uuid4()))

    @pytest.mark.asyncio
    async def test_unknown_animal(self, service, farm):
        with pytest.raises(AnimalNotFoundError):
            await service.get_reminders(TargetScope.for_animal(uuid4()))

    @pytest.mark.asyncio
    async def test_read_only(self, directory, clock, farm):
        repo = AsyncMock()
        repo.find_by_animal.return_value = [
            VaccinationEntryFactory.create(scheduled_date=NOW + timedelta(days=1))
        ]
        service = ReminderService(directory, repo, clock, ReminderPriorityPolicy())

        result = await service.get_reminders(TargetScope.for_group(farm.sheep.id))

        assert result.total == len(farm.ewes)
        repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_custom_policy(self, directory, entry_repository, clock, farm):
        cow = farm.cows[0]
        await add_entry(entry_repository, cow, 25, vaccination_type="Anthrax")
        policy = ReminderPriorityPolicy.from_keywords({"anthrax": 30})
        service = ReminderService(directory, entry_repository, clock, policy)

        result = await service.get_reminders(TargetScope.for_animal(cow.id))

        assert result.reminders[0].priority == ReminderPriority.HIGH
