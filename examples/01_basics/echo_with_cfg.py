#!/usr/bin/env python3
"""
Echo example driven by etc/procmanage.yaml.

This example demonstrates:
- Loading process and logging options from YAML (with PROCMANAGE_* overrides)
- Creating a Process, spawning it, and reading its stdout pipe
- Closing the process and reusing it for a second run

Usage:
    python echo_with_cfg.py hello world
    PROCMANAGE_LOGGING_LEVEL=debug python echo_with_cfg.py hello
"""

import os
import pathlib
import shutil
import sys

# Add the project root to the path
project_root = pathlib.Path(__file__).resolve().parents[2]
sys.path.append(str(project_root)) if str(project_root) not in sys.path else None

from procmanage import Process, ProcessOptions, load_config
from procmanage.log import LogConfig, LoggerFactory


def read_all(fd: int) -> bytes:
    chunks = []
    while chunk := os.read(fd, 4096):
        chunks.append(chunk)
    return b"".join(chunks)


def main() -> int:
    cfg = load_config(project_root / "etc" / "procmanage.yaml")
    lg = LoggerFactory.create("/echo", LogConfig.from_config(cfg))
    options = ProcessOptions.from_config(cfg)

    echo = shutil.which("echo")
    if echo is None:
        lg.error("echo not found on PATH")
        return 1

    proc = Process.create(echo, ["echo", *sys.argv[1:]], options=options, lg=lg)
    for run in (1, 2):
        with proc:
            out = read_all(proc.stdout_fd)
        lg.info("child said", extra={"run": run, "output": out.decode().rstrip()})
    proc.free()
    return 0


if __name__ == "__main__":
    sys.exit(main())
