# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""CLI entry point for ffmpeg-locator."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from ffmpeg_locator import __version__
from ffmpeg_locator.core.logging import setup_logging
from ffmpeg_locator.core.options import LocatorOptions
from ffmpeg_locator.services.provisioner import ExecutableProvisioner
from ffmpeg_locator.utils.ffmpeg import find_on_path


# Exit codes
EXIT_OK = 0
EXIT_MISSING = 1


def _common_options(fn):
    """Shared Click options that map to LocatorOptions fields."""
    decorators = [
        click.option("--tool-name", type=str, default=None, help="Bundled executable name."),
        click.option("--version-tag", type=int, default=None, help="Bundled binary revision."),
        click.option("--resource-root", type=click.Path(file_okay=False, path_type=Path), default=None, help="Directory holding native/ instead of the installed package."),
        click.option("--temp-root", type=click.Path(file_okay=False, path_type=Path), default=None, help="Staging root (defaults to the system temp dir)."),
        click.option("--arch", type=str, default=None, help="Override the detected CPU architecture."),
        click.option("--verify", type=click.Choice(["none", "size", "sha256"]), default=None, help="Check applied to an already staged file."),
        click.option("--verbose", is_flag=True, default=None, help="Verbose console output."),
        click.option("--log-jsonl", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Also write structured JSONL logs to this file."),
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


def _build_options(**cli_kwargs) -> LocatorOptions:
    """Build LocatorOptions from CLI kwargs, filtering out unset (None) values.

    Only explicitly-provided CLI flags are passed to LocatorOptions as init
    overrides. Unset flags fall through to env vars → YAML → defaults.
    """
    overrides = {key: value for key, value in cli_kwargs.items() if value is not None}
    return LocatorOptions(**overrides)


@click.group()
@click.version_option(version=__version__, prog_name="ffmpeg_locator")
def cli() -> None:
    """Stage the bundled ffmpeg executable and report its path."""


@cli.command()
@click.option("--check", is_flag=True, default=False, help="Exit 1 if no file exists at the path.")
@_common_options
def path(check, **kwargs):
    """Print the path of the staged executable."""
    options = _build_options(**kwargs)
    setup_logging(verbose=options.verbose, jsonl_path=options.log_jsonl)

    provisioner = ExecutableProvisioner(options)
    click.echo(provisioner.resolve_executable_path())

    if check and not provisioner.is_staged():
        sys.exit(EXIT_MISSING)
    sys.exit(EXIT_OK)


@cli.command()
@_common_options
def info(**kwargs):
    """Show the platform key and staging layout without copying anything."""
    options = _build_options(**kwargs)
    setup_logging(verbose=options.verbose, jsonl_path=options.log_jsonl)

    provisioner = ExecutableProvisioner(options)
    target = provisioner.target_path
    on_path = find_on_path(options.tool_name)
    lines = [
        f"os_family:    {provisioner.platform.os_family}",
        f"arch:         {provisioner.platform.arch}",
        f"resource:     {provisioner.resource_name}",
        f"staging_dir:  {provisioner.staging_dir}",
        f"target:       {target}",
        f"staged:       {'yes' if provisioner.is_staged() else 'no'}",
        f"on_path:      {on_path or 'no'}",
    ]
    click.echo("\n".join(lines))


@cli.command()
@click.option("--force", is_flag=True, default=False, help="Re-copy even if a staged copy exists.")
@_common_options
def stage(force, **kwargs):
    """Stage the bundled executable and print its path."""
    options = _build_options(**kwargs)
    setup_logging(verbose=options.verbose, jsonl_path=options.log_jsonl)
    result = ExecutableProvisioner(options).provision(force=force)
    click.echo(result.path)

    sys.exit(EXIT_OK if result.exists else EXIT_MISSING)


if __name__ == "__main__":
    cli()
