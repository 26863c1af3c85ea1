"""Animal and Group entities as seen through the animal directory."""

from datetime import date
from uuid import UUID

from pydantic import Field, field_validator

from ...shared.base import Entity
from ..value_objects.enums import HealthStatus, Sex
from ..value_objects.scheduling import AnimalFilterCriteria, age_in_days


class Group(Entity):
    """
    A herd/flock grouping on a farm.

    ``current_count`` is maintained by the directory's add/remove operations,
    never by callers of the vaccination engine.
    """

    farm_id: UUID
    name: str = Field(min_length=1, max_length=100)
    species: str = Field(min_length=1, max_length=50)
    breed: str | None = None
    current_count: int = Field(default=0, ge=0)

    def is_valid(self) -> bool:
        return bool(self.name and self.species) and self.current_count >= 0


class Animal(Entity):
    """A single tagged animal belonging to one group."""

    group_id: UUID
    tag: str = Field(min_length=1, max_length=50)
    name: str | None = None
    sex: Sex
    birth_date: date | None = None
    breed: str | None = None
    weight: float | None = Field(default=None, gt=0)
    health_status: HealthStatus = HealthStatus.HEALTHY

    @field_validator("tag")
    @classmethod
    def normalize_tag(cls, v: str) -> str:
        return v.strip()

    def is_valid(self) -> bool:
        return bool(self.tag)

    def age_in_days(self, today: date) -> int | None:
        return age_in_days(self.birth_date, today)

    def matches(
        self,
        criteria: AnimalFilterCriteria,
        today: date,
        group: Group | None = None,
    ) -> bool:
        """
        Check the animal against bulk filter criteria.

        Species lives on the group, so a species filter needs ``group``; an
        animal whose group is unknown never matches a species filter. Animals
        without a birth date never match an age filter.
        """
        if criteria.filters_on_species:
            if group is None or group.species.lower() != criteria.species.lower():
                return False

        if criteria.breed and self.breed != criteria.breed:
            return False

        if criteria.filters_on_age:
            age = self.age_in_days(today)
            if age is None:
                return False
            if criteria.age_min_days is not None and age < criteria.age_min_days:
                return False
            if criteria.age_max_days is not None and age > criteria.age_max_days:
                return False

        if criteria.health_status and self.health_status not in criteria.health_status:
            return False

        return True
