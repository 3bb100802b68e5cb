"""Root EmpathosSettings model."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from empathos_core.config._loader import YamlSettingsSource
from empathos_core.config._sections import DatabaseSettings, StoreSettings


class EmpathosSettings(BaseSettings):
    model_config = {"env_nested_delimiter": "__", "case_sensitive": False, "extra": "ignore"}

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            env_settings,
            YamlSettingsSource(settings_cls),
            init_settings,
        )
