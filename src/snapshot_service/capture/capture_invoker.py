"""Run external capture tools (ffmpeg, yt-dlp) as asyncio subprocesses."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import signal
from dataclasses import dataclass, field
from typing import Sequence

from .capture_models import ToolResult

MISSING_TOOL_RETURNCODE = 127
TIMEOUT_RETURNCODE = -9


@dataclass(slots=True)
class CaptureInvoker:
    """Execute a tool and report its exit status uniformly.

    The invoker never inspects output files and never retries; callers decide
    what a failure means. Tool failures are returned, not raised.
    """

    timeout_seconds: float | None = None
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    async def invoke(self, tool: str, args: Sequence[str]) -> ToolResult:
        try:
            process = await asyncio.create_subprocess_exec(
                tool,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except OSError as exc:
            self.log.error("capture.tool.unavailable", extra={"tool": tool, "error": str(exc)})
            return ToolResult(tool=tool, returncode=MISSING_TOOL_RETURNCODE, stderr=str(exc).encode())

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            await self._terminate(process)
            message = f"{tool} timed out after {self.timeout_seconds}s"
            self.log.warning("capture.tool.timeout", extra={"tool": tool, "timeout": self.timeout_seconds})
            return ToolResult(tool=tool, returncode=TIMEOUT_RETURNCODE, stderr=message.encode())
        except asyncio.CancelledError:
            await self._terminate(process)
            raise

        result = ToolResult(
            tool=tool,
            returncode=process.returncode if process.returncode is not None else -1,
            stdout=stdout or b"",
            stderr=stderr or b"",
        )
        if not result.ok:
            self.log.warning(
                "capture.tool.failed",
                extra={"tool": tool, "returncode": result.returncode, "stderr": result.diagnostics},
            )
        return result

    @staticmethod
    async def _terminate(process: asyncio.subprocess.Process) -> None:
        # the tool leads its own session; children such as ffmpeg under yt-dlp share it
        # and may hold the pipes after the tool itself has exited
        with contextlib.suppress(ProcessLookupError):
            os.killpg(process.pid, signal.SIGKILL)
        await process.wait()


__all__ = ["CaptureInvoker", "MISSING_TOOL_RETURNCODE", "TIMEOUT_RETURNCODE"]
