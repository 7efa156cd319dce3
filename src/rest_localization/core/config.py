from functools import lru_cache
import json
from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, computed_field
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from rest_localization.cultures.models import CultureContextKind, CultureScope


def parse_culture_list(v: Any) -> list[str] | None:
    if v is None:
        return None
    if isinstance(v, str):
        if v.startswith("["):
            return [str(i).strip() for i in json.loads(v)]
        return [i.strip() for i in v.split(",") if i.strip()]
    if isinstance(v, list | tuple):
        return [str(i).strip() for i in v]
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    API_V1_STR: str = ""
    PROJECT_NAME: str = "REST API Localization"
    DEBUG: bool = False
    LOG_LEVEL: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        BeforeValidator(lambda v: v.upper() if isinstance(v, str) else v),
    ] = "INFO"

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Culture scope filter used to validate supported cultures
    CULTURE_NEUTRAL: bool = True
    CULTURE_SPECIFIC: bool = True
    CULTURE_INSTALLED: bool = True
    CULTURE_CUSTOM: bool = False
    CULTURE_REPLACEMENT: bool = False

    # None means: every culture of the locale database passing the filter
    SUPPORTED_CULTURES: Annotated[
        list[str] | None, NoDecode, BeforeValidator(parse_culture_list)
    ] = ["en", "en-US", "en-GB", "de", "de-DE", "de-AT", "de-CH", "zh"]

    # None means: the ambient culture of the context kind
    DEFAULT_CULTURE: str | None = "en-US"

    CULTURE_CONTEXT: Literal["thread", "process"] = "thread"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def culture_scope(self) -> CultureScope:
        """Return the culture scope filter built from the CULTURE_* flags."""
        return CultureScope(
            neutral=self.CULTURE_NEUTRAL,
            specific=self.CULTURE_SPECIFIC,
            installed=self.CULTURE_INSTALLED,
            custom=self.CULTURE_CUSTOM,
            replacement=self.CULTURE_REPLACEMENT,
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def culture_context_kind(self) -> CultureContextKind:
        if self.CULTURE_CONTEXT == "process":
            return CultureContextKind.PROCESS_WIDE
        return CultureContextKind.PER_THREAD


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
