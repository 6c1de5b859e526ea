"""
Helper functions shared by the analysis pipeline stages.
"""

import asyncio
import os
import shutil
import tempfile
from contextlib import asynccontextmanager, suppress
from typing import AsyncIterator, List, Sequence, Tuple

import aiofiles
from loguru import logger


@asynccontextmanager
async def temporary_workspace(prefix: str = "metacoach-") -> AsyncIterator[str]:
    """
    Create a private temporary directory and remove it on exit.

    The directory is removed whether the body returns normally or raises.

    Yields:
        str: Absolute path of the new directory
    """
    workspace = tempfile.mkdtemp(prefix=prefix)
    logger.debug(f"Created temporary workspace {workspace}")
    try:
        yield workspace
    finally:
        await asyncio.to_thread(shutil.rmtree, workspace, ignore_errors=True)
        if os.path.exists(workspace):
            logger.error(f"Failed to cleanup temporary workspace {workspace}")
        else:
            logger.debug(f"Removed temporary workspace {workspace}")


async def write_bytes(path: str, data: bytes) -> str:
    async with aiofiles.open(path, mode="wb") as f:
        await f.write(data)
    return path


async def read_bytes(path: str) -> bytes:
    async with aiofiles.open(path, mode="rb") as f:
        return await f.read()


async def read_all(paths: Sequence[str]) -> List[bytes]:
    """Read files sequentially, preserving order."""
    return [await read_bytes(path) for path in paths]


async def run_command(command: Sequence[str], description: str) -> Tuple[int, str, str]:
    """
    Run an external command without a shell and capture its output.

    Args:
        command: Program and arguments
        description: Short label used in log lines

    Returns:
        tuple: (return code, decoded stdout, decoded stderr)
    """
    logger.debug(f"Starting: {description}: {' '.join(command)}")
    process = await asyncio.create_subprocess_exec(
        *command,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE
    )
    try:
        out, err = await process.communicate()
    except (asyncio.CancelledError, Exception):
        # the child must not outlive the workspace it writes into
        if process.returncode is None:
            with suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            logger.warning(f"{description} interrupted; killed process {process.pid}")
        raise
    stdout = out.decode(errors="replace").strip()
    stderr = err.decode(errors="replace").strip()
    if process.returncode != 0:
        logger.error(f"{description} failed with exit code {process.returncode}")
        logger.debug(f"--- {description} stderr ---\n{stderr}")
    else:
        logger.debug(f"{description} completed successfully.")
    return process.returncode, stdout, stderr
