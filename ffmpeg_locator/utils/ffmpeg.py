# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""System ffmpeg detection."""

from __future__ import annotations

import shutil


def find_on_path(name: str = "ffmpeg") -> str | None:
    """Return the absolute path of name on PATH, or None."""
    return shutil.which(name)
