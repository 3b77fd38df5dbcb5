from enum import Enum, IntFlag
from http import HTTPStatus


__all__ = (
    'ApplicationCommandOptionType',
    'ApplicationCommandType',
    'ButtonStyle',
    'ChannelType',
    'ComponentType',
    'InteractionCallbackType',
    'InteractionType',
    'MessageFlag',
    'Permission',
    'SELECT_MENU_TYPES',
    'StatusCode',
    'TextInputStyle',
)


# ? the standard library already ships the full table
StatusCode = HTTPStatus


class InteractionType(Enum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class InteractionCallbackType(Enum):
    PONG = 1
    """ACK a `PING`"""
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    """Respond to an interaction with a message"""
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    """ACK an interaction and edit a response later, the user sees a loading state"""
    DEFERRED_UPDATE_MESSAGE = 6
    """For components, ACK an interaction and edit the original message later; the user does not see a loading state"""
    UPDATE_MESSAGE = 7
    """For components, edit the message the component was attached to"""
    APPLICATION_COMMAND_AUTOCOMPLETE_RESULT = 8
    """Respond to an autocomplete interaction with suggested choices"""
    MODAL = 9
    """Respond to an interaction with a popup modal"""


class ApplicationCommandType(Enum):
    CHAT_INPUT = 1
    """Slash commands; a text-based command that shows up when a user types `/`"""
    USER = 2
    """A UI-based command that shows up when you right click or tap on a user"""
    MESSAGE = 3
    """A UI-based command that shows up when you right click or tap on a message"""


class ApplicationCommandOptionType(Enum):
    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    """Any integer between -2^53+1 and 2^53-1"""
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    """Includes all channel types + categories"""
    ROLE = 8
    MENTIONABLE = 9
    """Includes users and roles"""
    NUMBER = 10
    """Any double between -2^53 and 2^53"""
    ATTACHMENT = 11


class ComponentType(Enum):
    ACTION_ROW = 1
    """Container for other components"""
    BUTTON = 2
    """Button object"""
    STRING_SELECT = 3
    """Select menu for picking from defined text options"""
    TEXT_INPUT = 4
    """Text input object"""
    USER_SELECT = 5
    """Select menu for users"""
    ROLE_SELECT = 6
    """Select menu for roles"""
    MENTIONABLE_SELECT = 7
    """Select menu for mentionables (users *and* roles)"""
    CHANNEL_SELECT = 8
    """Select menu for channels"""


SELECT_MENU_TYPES = frozenset({
    ComponentType.STRING_SELECT,
    ComponentType.USER_SELECT,
    ComponentType.ROLE_SELECT,
    ComponentType.MENTIONABLE_SELECT,
    ComponentType.CHANNEL_SELECT
})


class ButtonStyle(Enum):
    PRIMARY = 1
    """blurple"""
    SECONDARY = 2
    """grey"""
    SUCCESS = 3
    """green"""
    DANGER = 4
    """red"""
    LINK = 5
    """grey, navigates to a URL"""


class TextInputStyle(Enum):
    SHORT = 1
    """Single-line input"""
    PARAGRAPH = 2
    """Multi-line input"""


class ChannelType(Enum):
    GUILD_TEXT = 0
    DM = 1
    GUILD_VOICE = 2
    GROUP_DM = 3
    GUILD_CATEGORY = 4
    GUILD_ANNOUNCEMENT = 5
    ANNOUNCEMENT_THREAD = 10
    PUBLIC_THREAD = 11
    PRIVATE_THREAD = 12
    GUILD_STAGE_VOICE = 13
    GUILD_DIRECTORY = 14
    GUILD_FORUM = 15
    GUILD_MEDIA = 16


class MessageFlag(IntFlag):
    NONE = 0
    SUPPRESS_EMBEDS = 1 << 2
    """Do not include any embeds when serializing this message"""
    EPHEMERAL = 1 << 6
    """This message is only visible to the user who invoked the Interaction"""
    SUPPRESS_NOTIFICATIONS = 1 << 12
    """This message will not trigger push and desktop notifications"""


class Permission(IntFlag):
    NONE = 0
    CREATE_INSTANT_INVITE = 1 << 0
    KICK_MEMBERS = 1 << 1
    BAN_MEMBERS = 1 << 2
    ADMINISTRATOR = 1 << 3
    """Allows all permissions and bypasses channel permission overwrites"""
    MANAGE_CHANNELS = 1 << 4
    MANAGE_GUILD = 1 << 5
    ADD_REACTIONS = 1 << 6
    VIEW_AUDIT_LOG = 1 << 7
    VIEW_CHANNEL = 1 << 10
    SEND_MESSAGES = 1 << 11
    MANAGE_MESSAGES = 1 << 13
    EMBED_LINKS = 1 << 14
    ATTACH_FILES = 1 << 15
    MENTION_EVERYONE = 1 << 17
    USE_EXTERNAL_EMOJIS = 1 << 18
    MANAGE_NICKNAMES = 1 << 27
    MANAGE_ROLES = 1 << 28
    MANAGE_WEBHOOKS = 1 << 29
    USE_APPLICATION_COMMANDS = 1 << 31
    MODERATE_MEMBERS = 1 << 40
