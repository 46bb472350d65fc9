# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pydantic data models for ffmpeg-locator."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class PlatformKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    os_family: Literal["windows", "unix"]
    arch: str

    @property
    def is_windows(self) -> bool:
        return self.os_family == "windows"

    @property
    def suffix(self) -> str:
        return ".exe" if self.is_windows else ""


class ProvisionResult(BaseModel):
    path: str
    platform: PlatformKey
    staged: bool = False
    exists: bool = False
    errors: list[str] = []
