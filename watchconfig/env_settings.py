from functools import lru_cache

from pydantic_settings import BaseSettings
from pydantic import Field


class EnvSettings(BaseSettings):
    schema_dir: str = Field("", alias="WATCHCONFIG_SCHEMA_DIR")
    skip_unknown_fields: bool = Field(False, alias="WATCHCONFIG_SKIP_UNKNOWN_FIELDS")

    log_level: str = Field("INFO", alias="WATCHCONFIG_LOG_LEVEL")
    log_dir: str = Field("", alias="WATCHCONFIG_LOG_DIR")  # empty -> console only
    log_retention_days: int = Field(30, alias="WATCHCONFIG_LOG_RETENTION_DAYS")

    class Config:
        populate_by_name = True


@lru_cache(maxsize=1)
def get_env() -> EnvSettings:
    return EnvSettings()
