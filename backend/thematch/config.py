import logging
import os
from enum import auto

from pydantic_settings import BaseSettings, SettingsConfigDict

from thematch.utils.types import EnumAutoStr


class Environment(EnumAutoStr):
    PRODUCTION = auto()
    DEVELOPMENT = auto()
    CI = auto()

    def get_log_level(self) -> int:
        return {
            Environment.PRODUCTION: logging.INFO,
            Environment.DEVELOPMENT: logging.DEBUG,
            Environment.CI: logging.WARNING,
        }[self]


class Config(BaseSettings):
    api_prefix: str = ""
    cors_origins: str = "*"
    default_weeks_duration: int = 8
    max_elimination_player_count: int = 64
    recent_form_length: int = 5
    slow_recalculation_warn_ms: int = 1_000


class ProductionConfig(Config):
    model_config = SettingsConfigDict(env_file="prod.env", extra="ignore")


class DevelopmentConfig(Config):
    model_config = SettingsConfigDict(env_file="dev.env", extra="ignore")


class CIConfig(Config):
    model_config = SettingsConfigDict(env_file="ci.env", extra="ignore")


environment = Environment(os.getenv("ENVIRONMENT", "CI").upper())
config: Config

match environment:
    case Environment.PRODUCTION:
        config = ProductionConfig()
    case Environment.DEVELOPMENT:
        config = DevelopmentConfig()
    case Environment.CI:
        config = CIConfig()
