import asyncio
import os
import sys

import pytest

from metacoach.analysis_pipeline.utils import helper
from metacoach.analysis_pipeline.utils.helper import run_command, temporary_workspace

SLEEPER = [sys.executable, "-c", "import time; time.sleep(30)"]


@pytest.fixture
def spawned(monkeypatch):
    """Record processes started through run_command."""
    processes = []
    create = asyncio.create_subprocess_exec

    async def recording_create(*args, **kwargs):
        process = await create(*args, **kwargs)
        processes.append(process)
        return process

    monkeypatch.setattr(helper.asyncio, "create_subprocess_exec", recording_create)
    return processes


async def test_run_command_captures_output():
    returncode, stdout, stderr = await run_command(
        [sys.executable, "-c", "import sys; print('ok'); sys.stderr.write('warn')"], "echo"
    )
    assert (returncode, stdout, stderr) == (0, "ok", "warn")


async def test_run_command_reports_nonzero_exit():
    returncode, _, _ = await run_command([sys.executable, "-c", "raise SystemExit(3)"], "exit")
    assert returncode == 3


async def test_timed_out_command_is_killed(spawned):
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(run_command(SLEEPER, "Frame extraction"), timeout=0.5)

    assert len(spawned) == 1
    assert spawned[0].returncode is not None


async def test_cancelled_command_is_killed(spawned):
    task = asyncio.create_task(run_command(SLEEPER, "Frame extraction"))
    while not spawned:
        await asyncio.sleep(0.01)

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert spawned[0].returncode is not None


async def test_workspace_removed_on_error():
    with pytest.raises(RuntimeError):
        async with temporary_workspace() as workspace:
            with open(os.path.join(workspace, "input.mp4"), "wb") as f:
                f.write(b"data")
            raise RuntimeError("decoder crashed")
    assert not os.path.exists(workspace)
