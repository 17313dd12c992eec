"""Application configuration contract."""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from classrepo.errors import ConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field(alias="APP_ENV", default="dev")
    log_level: str = Field(alias="LOG_LEVEL", default="INFO")
    log_json: bool | None = Field(alias="LOG_JSON", default=None)

    cache_dir: str = Field(alias="CLASSREPO_CACHE_DIR", default="")
    # 0 disables the flush performed by ClassRepositoryManager.close()
    auto_write: int = Field(alias="CLASSREPO_AUTO_WRITE", default=1)


def validate_settings_for_env(settings: Settings) -> None:
    _logger = logging.getLogger(__name__)

    problems: list[str] = []
    if settings.log_level.upper() not in _LOG_LEVELS:
        problems.append(f"LOG_LEVEL({settings.log_level})")

    if settings.app_env == "prod":
        if not settings.cache_dir.strip():
            problems.append("CLASSREPO_CACHE_DIR")
        elif not settings.cache_dir.startswith("/"):
            problems.append("CLASSREPO_CACHE_DIR(absolute path required)")
    elif not settings.cache_dir.strip():
        _logger.debug("CLASSREPO_CACHE_DIR not set; default manager must be configured in code")

    if problems:
        keys = ", ".join(sorted(set(problems)))
        raise ConfigError(f"invalid {settings.app_env} configuration: {keys}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
