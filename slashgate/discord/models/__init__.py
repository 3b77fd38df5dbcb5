from .command import ApplicationCommand, COMMAND_NAME_PATTERN
from .component import ActionRow, Button, Modal, TextInput
from .channel import Channel, Message
from .user import Member, User
from .resolved import Resolved
from .interaction import (
    ApplicationCommandInteractionData,
    MessageComponentInteractionData,
    ModalSubmitInteractionData,
    SelectMenuInteractionData,
    AutocompleteInteraction,
    ModalSubmitInteraction,
    ContextMenuCommandData,
    ButtonInteractionData,
    ChatInputCommandData,
    ComponentInteraction,
    InteractionFollowup,
    InteractionResponse,
    CommandInteraction,
    PingInteraction,
    Interaction
)


__all__ = (
    'COMMAND_NAME_PATTERN',
    'ActionRow',
    'ApplicationCommand',
    'ApplicationCommandInteractionData',
    'AutocompleteInteraction',
    'Button',
    'ButtonInteractionData',
    'Channel',
    'ChatInputCommandData',
    'CommandInteraction',
    'ComponentInteraction',
    'ContextMenuCommandData',
    'Interaction',
    'InteractionFollowup',
    'InteractionResponse',
    'Member',
    'Message',
    'MessageComponentInteractionData',
    'Modal',
    'ModalSubmitInteraction',
    'ModalSubmitInteractionData',
    'PingInteraction',
    'Resolved',
    'SelectMenuInteractionData',
    'TextInput',
    'User',
)
