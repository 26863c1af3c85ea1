from .vaccination_service import VaccinationApplicationService

__all__ = ["VaccinationApplicationService"]
