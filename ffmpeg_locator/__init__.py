"""ffmpeg-locator: stages the bundled ffmpeg executable for subprocess use."""

__version__ = "0.1.0"

from ffmpeg_locator.core.models import PlatformKey, ProvisionResult
from ffmpeg_locator.core.options import LocatorOptions
from ffmpeg_locator.services.locator import Locator, SystemLocator
from ffmpeg_locator.services.provisioner import ExecutableProvisioner, ProvisioningError


def get_ffmpeg_path(options: LocatorOptions | None = None) -> str:
    """Return the path of the bundled ffmpeg, staging it if needed.

    This is the primary library entry point. It never raises for
    provisioning failures; the returned path may not exist if staging
    failed, in which case executing it reports the error.

    Args:
        options: Configuration options. Uses defaults if not provided.

    Returns:
        Absolute path to the staged executable.
    """
    return ExecutableProvisioner(options).resolve_executable_path()


def provision(options: LocatorOptions | None = None, force: bool = False) -> ProvisionResult:
    """Run one provisioning pass and return the path with its diagnostics.

    Args:
        options: Configuration options. Uses defaults if not provided.
        force: Re-copy the bundled binary even if a staged copy exists.

    Returns:
        ProvisionResult with the path, platform key, and any errors.
    """
    return ExecutableProvisioner(options).provision(force=force)


__all__ = [
    "__version__",
    "get_ffmpeg_path",
    "provision",
    "ExecutableProvisioner",
    "Locator",
    "LocatorOptions",
    "PlatformKey",
    "ProvisionResult",
    "ProvisioningError",
    "SystemLocator",
]
