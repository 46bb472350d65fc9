"""Executable locator interface and the PATH-based locator."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ffmpeg_locator.utils.ffmpeg import find_on_path

logger = logging.getLogger("ffmpeg_locator")


class Locator(ABC):
    """Supplies the path of an ffmpeg executable to whatever spawns it."""

    @abstractmethod
    def get_executable_path(self) -> str:
        """Return the path to pass to the process-spawning facility."""


class SystemLocator(Locator):
    """Locator for an ffmpeg already installed on PATH.

    Falls back to the bare program name when nothing is found, leaving the
    failure to the process launcher.
    """

    def __init__(self, name: str = "ffmpeg") -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_executable_path(self) -> str:
        found = find_on_path(self._name)
        if found is None:
            logger.warning("%s not found on PATH", self._name)
            return self._name
        return found
