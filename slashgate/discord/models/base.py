from __future__ import annotations

from typing import Any, Self

from pydantic.functional_validators import ModelWrapValidatorHandler
from pydantic import BaseModel, ConfigDict, PrivateAttr, model_validator


__all__ = (
    'RawBaseModel',
)


class RawBaseModel(BaseModel):
    """wire model that keeps the payload it was validated from"""
    model_config = ConfigDict(extra='ignore')

    _raw_data: dict[str, Any] = PrivateAttr(default_factory=dict)

    @model_validator(mode='wrap')
    @classmethod
    def capture_raw(
        cls,
        data: Any,  # noqa: ANN401
        handler: ModelWrapValidatorHandler[Self]
    ) -> Self:
        self = handler(data)

        if isinstance(data, dict):
            self._raw_data = data.copy()

        return self

    @property
    def _raw(self) -> dict[str, Any]:
        return self._raw_data
