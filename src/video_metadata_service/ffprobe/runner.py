"""Execution utilities for FFprobe commands."""

from __future__ import annotations

import subprocess
from typing import Iterable, Optional


class ProbeExecutionError(RuntimeError):
    """Raised when an FFprobe command cannot produce metadata."""

    def __init__(self, command: Iterable[str], stderr: str) -> None:
        self.command = list(command)
        self.stderr = stderr
        super().__init__(stderr.strip() or f"FFprobe command failed: {' '.join(self.command)}")


def execute_probe(command: list[str], *, timeout: Optional[float] = None) -> subprocess.CompletedProcess[str]:
    """Run FFprobe synchronously, raising ProbeExecutionError on failure."""

    try:
        completed = subprocess.run(
            command,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise ProbeExecutionError(command, f"FFprobe executable not found: {command[0]}") from exc
    except OSError as exc:
        raise ProbeExecutionError(command, f"Could not run FFprobe: {exc}") from exc
    except subprocess.TimeoutExpired as exc:
        raise ProbeExecutionError(command, f"FFprobe timed out after {timeout} seconds") from exc
    if completed.returncode != 0:
        raise ProbeExecutionError(command, completed.stderr)
    return completed
