"""Concurrent provisioning tests for ffmpeg_locator.services.provisioner.

Verifies that:
- Many provisioners racing on an empty staging dir leave one complete file
- No temp files are left behind
- A shared provisioner resolves once and hands every caller the same path
"""

import os
import threading
from pathlib import Path
from unittest.mock import patch

import pytest

from ffmpeg_locator.core.options import LocatorOptions
from ffmpeg_locator.services.provisioner import ExecutableProvisioner

WORKERS = 8


@pytest.fixture(autouse=True)
def linux_host():
    with patch("ffmpeg_locator.utils.host.platform.system", return_value="Linux"):
        yield


@pytest.fixture
def bundle(tmp_path) -> bytes:
    payload = os.urandom(3 * 1024 * 1024)
    native = tmp_path / "bundle" / "native"
    native.mkdir(parents=True)
    (native / "ffmpeg-x86_64").write_bytes(payload)
    return payload


def _options(tmp_path: Path, **overrides) -> LocatorOptions:
    values = {
        "resource_root": tmp_path / "bundle",
        "temp_root": tmp_path / "tmp",
        "arch": "x86_64",
    }
    values.update(overrides)
    return LocatorOptions(**values)


def _run_concurrently(fn, count: int = WORKERS) -> list:
    barrier = threading.Barrier(count)
    results: list = [None] * count
    errors: list[BaseException] = []

    def _worker(index: int) -> None:
        try:
            barrier.wait()
            results[index] = fn()
        except BaseException as exc:
            errors.append(exc)

    threads = [threading.Thread(target=_worker, args=(i,)) for i in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
    return results


class TestConcurrentProvisioning:
    @pytest.mark.parametrize("verify", ["none", "size", "sha256"])
    def test_separate_provisioners_one_complete_file(self, tmp_path, bundle, verify):
        opts = _options(tmp_path, verify=verify)
        results = _run_concurrently(lambda: ExecutableProvisioner(opts).provision())

        paths = {r.path for r in results}
        assert len(paths) == 1
        assert all(r.exists for r in results)
        assert all(r.errors == [] for r in results)

        staged = Path(paths.pop())
        assert staged.read_bytes() == bundle

    def test_no_temp_files_left(self, tmp_path, bundle):
        opts = _options(tmp_path)
        _run_concurrently(lambda: ExecutableProvisioner(opts).provision(force=True))

        staging_dir = tmp_path / "tmp" / "ffmpeg-2"
        assert [p.name for p in staging_dir.iterdir()] == ["ffmpeg-x86_64"]
        assert (staging_dir / "ffmpeg-x86_64").read_bytes() == bundle

    def test_shared_provisioner_resolves_once(self, tmp_path, bundle):
        p = ExecutableProvisioner(_options(tmp_path))
        with patch.object(p, "provision", wraps=p.provision) as mock_provision:
            paths = _run_concurrently(p.resolve_executable_path)

        assert mock_provision.call_count == 1
        assert len(set(paths)) == 1
        assert Path(paths[0]).read_bytes() == bundle
