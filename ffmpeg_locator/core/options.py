"""LocatorOptions settings model for ffmpeg-locator."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource
from pydantic_settings import YamlConfigSettingsSource


class LocatorOptions(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FFMPEG_LOCATOR_",
        yaml_file="ffmpeg_locator.yaml",
        yaml_file_encoding="utf-8",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    tool_name: str = "ffmpeg"
    # Bump whenever the bundled binaries change.
    version_tag: int = 2
    resource_package: str = "ffmpeg_locator"
    resource_root: Path | None = None
    resource_dir: str = "native"
    temp_root: Path | None = None
    arch: str | None = None
    verify: Literal["none", "size", "sha256"] = "size"
    verbose: bool = False
    log_jsonl: Path | None = None
