from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from slashgate.discord.enums import ComponentType, TextInputStyle, ButtonStyle


__all__ = (
    'ActionRow',
    'Button',
    'MessageComponent',
    'Modal',
    'TextInput',
)


class BaseComponent(BaseModel, ABC):
    type: ComponentType

    @abstractmethod
    def as_payload(self) -> dict[str, Any]:
        ...


class Button(BaseComponent):
    type: ComponentType = ComponentType.BUTTON
    style: ButtonStyle = ButtonStyle.PRIMARY
    label: str | None = Field(None, max_length=80)
    custom_id: str | None = Field(None, max_length=100)
    url: str | None = None
    disabled: bool = False

    def as_payload(self) -> dict[str, Any]:
        json: dict[str, Any] = {
            'type': self.type.value,
            'style': self.style.value
        }

        if self.label:
            json['label'] = self.label

        if self.custom_id:
            json['custom_id'] = self.custom_id

        if self.url:
            json['url'] = self.url

        if self.disabled:
            json['disabled'] = self.disabled

        return json


class TextInput(BaseComponent):
    type: ComponentType = ComponentType.TEXT_INPUT
    custom_id: str = Field(max_length=100)
    style: TextInputStyle = TextInputStyle.SHORT
    label: str = Field(max_length=45)
    min_length: int | None = Field(None, ge=0, le=4000)
    max_length: int | None = Field(None, ge=1, le=4000)
    required: bool | None = None
    value: str | None = None
    placeholder: str | None = Field(None, max_length=100)

    def as_payload(self) -> dict[str, Any]:
        return {
            'type': self.type.value,
            'style': self.style.value,
            **self.model_dump(
                mode='json',
                exclude={'type', 'style'},
                exclude_none=True
            )
        }


class ActionRow(BaseComponent):
    type: ComponentType = ComponentType.ACTION_ROW
    components: list[Button | TextInput] = Field(max_length=5)

    def as_payload(self) -> dict[str, Any]:
        return {
            'type': self.type.value,
            'components': [
                component.as_payload()
                for component in self.components
            ]
        }


type MessageComponent = ActionRow


class Modal(BaseModel):
    title: str = Field(max_length=45)
    custom_id: str = Field(max_length=100)
    components: list[ActionRow] = Field(min_length=1, max_length=5)

    def as_payload(self) -> dict[str, Any]:
        return {
            'title': self.title,
            'custom_id': self.custom_id,
            'components': [
                component.as_payload()
                for component in self.components
            ]
        }
