"""
Process runner used to launch the external vendoring tool.
"""

import asyncio
import dataclasses
from typing import List, Optional, Protocol


@dataclasses.dataclass
class ProcessResult:
    """
    Exit status and captured standard error of a finished process.
    """

    returncode: int
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


class ProcessRunner(Protocol):
    async def run(
        self, cmd: List[str], timeout: Optional[float] = None, cwd: Optional[str] = None
    ) -> ProcessResult:
        ...


class AsyncioProcessRunner:
    """
    Runs a command with stdin and stdout discarded and stderr captured.
    """

    async def run(
        self, cmd: List[str], timeout: Optional[float] = None, cwd: Optional[str] = None
    ) -> ProcessResult:
        """
        Run ``cmd`` to completion.

        Args:
            cmd: Executable followed by its arguments
            timeout: Seconds to wait before killing the process. None waits forever.
            cwd: Working directory of the process. None inherits the current one.

        Raises:
            asyncio.TimeoutError: If the process did not finish within ``timeout``
            FileNotFoundError: If the executable does not exist
        """
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
        try:
            _, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise

        return ProcessResult(
            returncode=process.returncode,
            stderr=stderr.decode("utf-8", errors="replace") if stderr else "",
        )
