from .endpoint import Endpoint
from .http import Route, request
from .types import Snowflake, snowflake_time
from .commands import CommandManager
from .dispatch import InteractionManager, PONG
from .handlers import (
    AutocompleteHandler,
    ModalSubmitHandler,
    InteractionHandler,
    ComponentHandler,
    CallbackHandler,
    CommandHandler
)
from .enums import (
    ApplicationCommandOptionType,
    InteractionCallbackType,
    ApplicationCommandType,
    InteractionType,
    TextInputStyle,
    ComponentType,
    ButtonStyle,
    ChannelType,
    MessageFlag,
    Permission,
    StatusCode
)
from .models import *  # noqa: F403
from .models import __all__ as _models_all


__all__ = (
    'PONG',
    'ApplicationCommandOptionType',
    'ApplicationCommandType',
    'AutocompleteHandler',
    'ButtonStyle',
    'CallbackHandler',
    'ChannelType',
    'CommandHandler',
    'CommandManager',
    'ComponentHandler',
    'ComponentType',
    'Endpoint',
    'InteractionCallbackType',
    'InteractionHandler',
    'InteractionManager',
    'InteractionType',
    'MessageFlag',
    'ModalSubmitHandler',
    'Permission',
    'Route',
    'Snowflake',
    'StatusCode',
    'TextInputStyle',
    'request',
    'snowflake_time',
    *_models_all
)
