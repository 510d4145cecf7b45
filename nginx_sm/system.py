from __future__ import annotations

import os
import shutil
import subprocess
from typing import Sequence

import typer


def tail_stderr(stderr: str | None, limit: int = 50) -> str:
    if not stderr:
        return ""
    lines = stderr.splitlines()
    return "\n".join(lines[-limit:])


def run(
    argv: Sequence[str],
    check: bool = True,
    capture: bool = True,
) -> subprocess.CompletedProcess[str]:
    kwargs = {
        "check": False,
        "text": True,
    }
    if capture:
        kwargs["stdout"] = subprocess.PIPE
        kwargs["stderr"] = subprocess.PIPE
    result = subprocess.run(list(argv), **kwargs)
    if check and result.returncode != 0:
        if capture:
            typer.echo("Command failed: " + " ".join(argv), err=True)
            stderr_tail = tail_stderr(result.stderr)
            if stderr_tail:
                typer.echo(stderr_tail, err=True)
        raise subprocess.CalledProcessError(
            result.returncode,
            list(argv),
            output=result.stdout,
            stderr=result.stderr,
        )
    return result


def is_root() -> bool:
    return os.geteuid() == 0


def require_root(predicate=is_root) -> None:
    if not predicate():
        raise PermissionError("Please run this script with sudo or as root.")


def which(cmd: str) -> str | None:
    return shutil.which(cmd)


def has_cmd(cmd: str) -> bool:
    return which(cmd) is not None
