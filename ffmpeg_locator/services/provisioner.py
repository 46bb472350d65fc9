"""Staging of the bundled ffmpeg executable into a writable temp directory."""

from __future__ import annotations

import hashlib
import logging
import tempfile
import threading
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from ffmpeg_locator.core.logging import log_event
from ffmpeg_locator.core.models import PlatformKey, ProvisionResult
from ffmpeg_locator.core.options import LocatorOptions
from ffmpeg_locator.core.writer import atomic_copy_stream
from ffmpeg_locator.services.locator import Locator
from ffmpeg_locator.utils.host import detect_platform
from ffmpeg_locator.utils.permissions import make_executable


class ProvisioningError(Exception):
    """Raised when the bundled executable cannot be staged."""

    event = "provisioning_failed"
    level = logging.WARNING


class ResourceNotFoundError(ProvisioningError):
    """Raised when no bundled binary matches the platform key."""

    event = "resource_missing"


class CopyError(ProvisioningError):
    """Raised when the bundled bytes cannot be written to the staging path."""

    event = "copy_failed"


class PermissionChangeError(ProvisioningError):
    """Raised when the staged file cannot be made executable."""

    event = "chmod_failed"
    level = logging.ERROR


class ExecutableProvisioner(Locator):
    """Exports the bundled ffmpeg for this platform and reports its path.

    The staged file lives at ``<temp_root>/<tool>-<version_tag>/<tool>-<arch>[.exe]``
    and is copied from the bundled resource ``native/<tool>-<arch>[.exe]``.
    Provisioning failures are logged and recorded on the returned
    ProvisionResult, never raised: the caller always gets a path, and a
    missing or unusable file only shows up when it is executed.

    Args:
        options: Locator configuration. Uses defaults if not provided.
        logger: Logger for diagnostics. Defaults to the 'ffmpeg_locator' logger.
    """

    def __init__(
        self,
        options: LocatorOptions | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._options = options if options is not None else LocatorOptions()
        self._logger = logger if logger is not None else logging.getLogger("ffmpeg_locator")
        self._platform = detect_platform(arch=self._options.arch)
        self._path: str | None = None
        self._lock = threading.Lock()

    @property
    def options(self) -> LocatorOptions:
        return self._options

    @property
    def platform(self) -> PlatformKey:
        return self._platform

    @property
    def executable_name(self) -> str:
        return f"{self._options.tool_name}-{self._platform.arch}{self._platform.suffix}"

    @property
    def resource_name(self) -> str:
        return f"{self._options.resource_dir}/{self.executable_name}"

    @property
    def staging_dir(self) -> Path:
        root = self._options.temp_root
        if root is None:
            root = Path(tempfile.gettempdir())
        return Path(root).absolute() / f"{self._options.tool_name}-{self._options.version_tag}"

    @property
    def target_path(self) -> Path:
        return self.staging_dir / self.executable_name

    def get_executable_path(self) -> str:
        return self.resolve_executable_path()

    def resolve_executable_path(self) -> str:
        """Return the staged executable path, provisioning it on first use.

        The path is cached for the lifetime of this instance.
        """
        if self._path is None:
            with self._lock:
                if self._path is None:
                    self._path = self.provision().path
        return self._path

    def provision(self, force: bool = False) -> ProvisionResult:
        """Run one provisioning pass and return its outcome.

        Steps:
        1. Create the version-tagged staging directory if absent
        2. Copy the bundled binary unless a valid copy is already staged
           (always copy when force is set)
        3. On non-Windows hosts, chmod the staged file to 0o755
        """
        target = self.target_path
        errors: list[str] = []
        staged = False

        try:
            self._ensure_staging_dir()
            if force or self._needs_staging(target):
                self._stage(target)
                staged = True
        except ProvisioningError as exc:
            self._report(exc, target)
            errors.append(str(exc))

        if not self._platform.is_windows and self.is_staged():
            try:
                self._make_executable(target)
            except PermissionChangeError as exc:
                self._report(exc, target)
                errors.append(str(exc))

        return ProvisionResult(
            path=str(target),
            platform=self._platform,
            staged=staged,
            exists=self.is_staged(),
            errors=errors,
        )

    def find_resource(self) -> Traversable:
        """Locate the bundled binary for this platform.

        Raises:
            ResourceNotFoundError: If no such resource is bundled.
        """
        opts = self._options
        if opts.resource_root is not None:
            root: Traversable = Path(opts.resource_root)
        else:
            try:
                root = resources.files(opts.resource_package)
            except ModuleNotFoundError as exc:
                raise ResourceNotFoundError(
                    f"Resource package {opts.resource_package!r} is not importable"
                ) from exc

        resource = root.joinpath(opts.resource_dir).joinpath(self.executable_name)
        try:
            found = resource.is_file()
        except OSError as exc:
            self._logger.debug("Cannot stat %s: %s", self.resource_name, exc)
            found = False
        if not found:
            raise ResourceNotFoundError(
                f"No bundled {opts.tool_name} for {self._platform.os_family}/"
                f"{self._platform.arch}: {self.resource_name} not found"
            )
        return resource

    def is_staged(self) -> bool:
        """Return True if a regular file exists at the target path.

        Errors from stat (name too long, permission denied on the staging
        directory) count as not staged.
        """
        try:
            return self.target_path.is_file()
        except OSError as exc:
            self._logger.debug("Cannot stat %s: %s", self.target_path, exc)
            return False

    def _ensure_staging_dir(self) -> None:
        staging_dir = self.staging_dir
        try:
            staging_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CopyError(f"Cannot create staging directory {staging_dir}: {exc}") from exc

    def _needs_staging(self, target: Path) -> bool:
        if not self.is_staged():
            return True
        if self._options.verify == "none":
            return False

        try:
            resource = self.find_resource()
        except ResourceNotFoundError:
            self._logger.debug("Trusting %s, bundled resource unavailable for comparison", target)
            return False

        try:
            if self._matches_resource(target, resource):
                return False
        except OSError as exc:
            self._logger.debug("Cannot compare %s with %s: %s", target, self.resource_name, exc)

        self._logger.warning("Staged %s does not match %s, re-staging", target, self.resource_name)
        return True

    def _matches_resource(self, target: Path, resource: Traversable) -> bool:
        if self._options.verify == "size":
            return target.stat().st_size == _resource_size(resource)
        with target.open("rb") as staged, resource.open("rb") as bundled:
            return (
                hashlib.file_digest(staged, "sha256").hexdigest()
                == hashlib.file_digest(bundled, "sha256").hexdigest()
            )

    def _stage(self, target: Path) -> None:
        resource = self.find_resource()
        try:
            with resource.open("rb") as source:
                written = atomic_copy_stream(source, target)
        except OSError as exc:
            raise CopyError(f"Cannot write file {target}: {exc}") from exc

        log_event(
            logging.INFO,
            f"Staged {self.resource_name} to {target} ({written} bytes)",
            tool=self._options.tool_name,
            event="staged",
            path=str(target),
            logger=self._logger,
        )

    def _make_executable(self, target: Path) -> None:
        try:
            make_executable(target)
        except OSError as exc:
            raise PermissionChangeError(f"Cannot make {target} executable: {exc}") from exc

    def _report(self, exc: ProvisioningError, target: Path) -> None:
        log_event(
            exc.level,
            str(exc),
            tool=self._options.tool_name,
            event=exc.event,
            path=str(target),
            error=type(exc).__name__,
            logger=self._logger,
        )


def _resource_size(resource: Traversable) -> int:
    with resource.open("rb") as f:
        return f.seek(0, 2)
