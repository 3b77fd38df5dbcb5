from __future__ import annotations

from typing import TYPE_CHECKING

from slashgate.discord.models import (
    ApplicationCommand,
    ActionRow,
    TextInput,
    Button,
    Modal
)
from slashgate.discord.enums import (
    ApplicationCommandOptionType,
    TextInputStyle,
    ButtonStyle
)

if TYPE_CHECKING:
    from slashgate.core.context import AppContext
    from slashgate.discord.models import (
        AutocompleteInteraction,
        ModalSubmitInteraction,
        ComponentInteraction,
        CommandInteraction
    )


__all__ = (
    'ECHO',
    'FEEDBACK',
    'TEST',
    'register',
)


TEST = ApplicationCommand(
    name='test',
    description='check that interactions reach the bot'
).set_dm_allowed()

ECHO = ApplicationCommand(
    name='echo',
    description='repeat some text back to you'
).add_option(
    ApplicationCommand.Option(
        type=ApplicationCommandOptionType.STRING,
        name='text',
        description='what to repeat',
        required=True,
        autocomplete=True,
        max_length=2000
    )
)

FEEDBACK = ApplicationCommand(
    name='feedback',
    description='send feedback to the bot developers'
)

ECHO_AGAIN = 'echo_again'
FEEDBACK_MODAL = 'feedback_modal'


def register(context: AppContext) -> None:
    interactions = context.interactions

    @context.command(TEST)
    async def slash_test(interaction: CommandInteraction) -> None:
        await interaction.response.send_message('Success!')

    @context.command(ECHO)
    async def slash_echo(interaction: CommandInteraction) -> None:
        text = str(interaction.data.arguments.get('text') or '')

        await interaction.response.send_message(
            text,
            ephemeral=True,
            components=[ActionRow(components=[
                Button(
                    style=ButtonStyle.SECONDARY,
                    label='again',
                    custom_id=ECHO_AGAIN
                )
            ])]
        )

    @interactions.autocomplete(ECHO.name)
    async def autocomplete_echo(interaction: AutocompleteInteraction) -> None:
        focused = interaction.focused_option
        value = str(focused.value or '') if focused is not None else ''

        suggestions = dict.fromkeys(
            suggestion[:100]
            for suggestion in (value, value.upper(), value.lower())
            if suggestion
        )

        await interaction.response.send_autocomplete_result([
            ApplicationCommand.Option.Choice(name=suggestion, value=suggestion)
            for suggestion in suggestions
        ])

    @interactions.component(ECHO_AGAIN)
    async def button_echo_again(interaction: ComponentInteraction) -> None:
        content = (
            interaction.message.content
            if interaction.message is not None else
            ''
        )

        await interaction.response.update_message(f'{content}\n{content}')

    @context.command(FEEDBACK)
    async def slash_feedback(interaction: CommandInteraction) -> None:
        await interaction.response.send_modal(Modal(
            title='feedback',
            custom_id=FEEDBACK_MODAL,
            components=[ActionRow(components=[
                TextInput(
                    custom_id='feedback',
                    label='what should we know?',
                    style=TextInputStyle.PARAGRAPH,
                    max_length=1000
                )
            ])]
        ))

    @interactions.modal(FEEDBACK_MODAL)
    async def modal_feedback(interaction: ModalSubmitInteraction) -> None:
        await interaction.response.send_message(
            'thanks for the feedback!',
            ephemeral=True
        )
