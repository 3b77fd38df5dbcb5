from typing import Self
from os import environ

from pydantic import BaseModel, Field

from .missing import MISSING


__all__ = (
    'Env',
)


class Env(BaseModel):
    application_id: int
    application_secret: str = Field(repr=False)
    application_public_key: str
    interaction_path: str = '/interaction'
    api_version: str = 'v10'
    dev: bool = True
    logfire_token: str = Field('', repr=False)

    @classmethod
    def new(cls) -> Self:
        return cls.model_validate({
            'application_id': environ.get('APPLICATION_ID', MISSING),
            'application_secret': environ.get('APPLICATION_SECRET', MISSING),
            'application_public_key': environ.get(
                'APPLICATION_PUBLIC_KEY', MISSING),
            'interaction_path': environ.get('INTERACTION_PATH', '/interaction'),
            'api_version': environ.get('API_VERSION', 'v10'),
            'dev': environ.get('DEV', '1') != '0',
            'logfire_token': environ.get('LOGFIRE_TOKEN', '')
        })

    @property
    def environment(self) -> str:
        return 'development' if self.dev else 'production'
