import json
from typing import Annotated, Any

from pydantic import BeforeValidator, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


def parse_keywords(v: Any) -> dict[str, int] | Any:
    # "rabies:14,core" -> {"rabies": 14, "core": 14}
    if isinstance(v, str) and v.lstrip().startswith("{"):
        return json.loads(v)
    if isinstance(v, str):
        keywords: dict[str, int] = {}
        for part in v.split(","):
            part = part.strip()
            if not part:
                continue
            name, _, window = part.partition(":")
            keywords[name.strip()] = int(window) if window else 14
        return keywords
    return v


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="HERDCARE_",
        env_ignore_empty=True,
        extra="ignore",
    )

    LOG_LEVEL: str = "INFO"
    LOG_SQL: bool = False

    # Reminder windows (days)
    REMINDER_DAYS_AHEAD: int = 30
    DUE_SOON_DAYS: int = 7
    MEDIUM_PRIORITY_DAYS: int = 14

    # keyword -> number of days before the due date within which a
    # matching vaccination is ranked High (Medium beyond that)
    CRITICAL_VACCINE_KEYWORDS: Annotated[
        dict[str, int] | str, BeforeValidator(parse_keywords)
    ] = {
        "rabies": 14,
        "core": 14,
        "mandatory": 14,
        "required": 14,
    }

    # Bulk scheduling
    RECENT_VACCINATION_DAYS: int = 30
    BULK_MAX_BATCH_SIZE: int = 10_000
    BULK_TIMEOUT_SECONDS: float = 60.0
    BULK_CONCURRENCY: int = 8

    DATABASE_URL: str = "sqlite://"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def normalized_critical_keywords(self) -> dict[str, int]:
        return {k.lower(): v for k, v in self.CRITICAL_VACCINE_KEYWORDS.items()}

    @model_validator(mode="after")
    def _check_windows(self) -> Self:
        if self.DUE_SOON_DAYS < 0:
            raise ValueError("DUE_SOON_DAYS must not be negative")
        if self.MEDIUM_PRIORITY_DAYS < self.DUE_SOON_DAYS:
            raise ValueError("MEDIUM_PRIORITY_DAYS must be >= DUE_SOON_DAYS")
        if self.BULK_CONCURRENCY < 1:
            raise ValueError("BULK_CONCURRENCY must be at least 1")
        if self.BULK_MAX_BATCH_SIZE < 1:
            raise ValueError("BULK_MAX_BATCH_SIZE must be at least 1")
        return self


settings = Settings()  # type: ignore
