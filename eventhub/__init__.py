from eventhub.version import __version__

PACKAGE = __package__
VERSION = __version__

from eventhub.config import ConfigType, get_config, use_config  # noqa: E402
from eventhub.lib.events import (  # noqa: E402
    NO_CONTEXT,
    EventData,
    EventHub,
    HandlerSettings,
    Subscription,
    get_emitter,
)
from eventhub.lib.logger import configure_logger  # noqa: E402

__all__ = [
    "VERSION",
    "PACKAGE",
    "NO_CONTEXT",
    EventData.__name__,
    EventHub.__name__,
    HandlerSettings.__name__,
    Subscription.__name__,
    ConfigType.__name__,
    configure_logger.__name__,
    get_config.__name__,
    get_emitter.__name__,
    use_config.__name__,
]
