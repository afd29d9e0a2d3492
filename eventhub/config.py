import enum
import logging

logger = logging.getLogger(__name__)


class Config:
    """Base configuration."""

    HUB_FIELD = "_eventhub"
    METHOD_NAMES = ("has_handler", "on", "off", "emit")
    TRACE_DISPATCH = False


class DevelopmentConfig(Config):
    """Development configuration."""

    TRACE_DISPATCH = True


class ProductionConfig(Config):
    """Production configuration."""

    TRACE_DISPATCH = False


class TestingConfig(Config):
    """Testing configuration."""

    TRACE_DISPATCH = True


class ConfigType(enum.Enum):
    DEVELOPMENT = DevelopmentConfig
    PRODUCTION = ProductionConfig
    TESTING = TestingConfig


_active: type[Config] = ProductionConfig


def get_config() -> type[Config]:
    return _active


def use_config(config_type: ConfigType) -> ConfigType:
    """Switch the active configuration and return the previous one."""
    global _active
    previous = ConfigType(_active)
    _active = config_type.value
    logger.debug(f"Using {_active.__name__}")
    return previous
