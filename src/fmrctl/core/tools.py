# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
External tool resolution.

The container runtime is mandatory. Auxiliary tools (curl, jq, xmlstarlet) are
used natively when found on PATH and otherwise replaced by a call-through to a
container image that ships them.

Usage:
    tools = resolve_tools(config.tools)
    tools.runtime.run(["inspect", "fmr"])
    tools.get("jq").run([".uid"], input=b'{"uid": "abc"}')
"""

import logging
import os
import shlex
import shutil
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from fmrctl.core.schema import FallbackToolConfig, ToolsConfig

logger = logging.getLogger(__name__)

CONTAINER_WORKDIR = "/home/default"


class MissingDependencyError(RuntimeError):
    """The container runtime is not installed."""


class ToolInvoker(Protocol):
    """Protocol shared by native and containerized tools."""

    @property
    def name(self) -> str: ...

    @property
    def containerized(self) -> bool: ...

    def command(self, args: Sequence[str]) -> list[str]:
        """Full argv that runs the tool with args."""
        ...

    def run(
        self,
        args: Sequence[str],
        *,
        input: bytes | None = None,
        capture_output: bool = True,
    ) -> subprocess.CompletedProcess:
        """Run the tool and wait for it."""
        ...


@dataclass(frozen=True)
class NativeTool:
    """A tool binary found on PATH."""

    name: str
    path: str

    @property
    def containerized(self) -> bool:
        return False

    def command(self, args: Sequence[str]) -> list[str]:
        return [self.path, *args]

    def run(
        self,
        args: Sequence[str],
        *,
        input: bytes | None = None,
        capture_output: bool = True,
    ) -> subprocess.CompletedProcess:
        cmd = self.command(args)
        logger.debug("Running: %s", shlex.join(cmd))
        return subprocess.run(cmd, input=input, capture_output=capture_output)


@dataclass(frozen=True)
class ContainerizedTool:
    """A tool run inside a throwaway container.

    Equivalent to ``docker run -i --rm [-v $PWD:/home/default] IMAGE NAME ARGS``.
    MSYS_NO_PATHCONV stops Git Bash on Windows from rewriting path arguments.
    """

    name: str
    image: str
    runtime: NativeTool
    mount_workdir: bool = False
    workdir: Path = field(default_factory=Path.cwd)

    @property
    def containerized(self) -> bool:
        return True

    def command(self, args: Sequence[str]) -> list[str]:
        cmd = self.runtime.command(["run", "-i", "--rm"])
        if self.mount_workdir:
            cmd.extend(["-v", f"{self.workdir}:{CONTAINER_WORKDIR}"])
        cmd.extend([self.image, self.name, *args])
        return cmd

    def run(
        self,
        args: Sequence[str],
        *,
        input: bytes | None = None,
        capture_output: bool = True,
    ) -> subprocess.CompletedProcess:
        cmd = self.command(args)
        logger.debug("Running: %s", shlex.join(cmd))
        env = {**os.environ, "MSYS_NO_PATHCONV": "1"}
        return subprocess.run(cmd, input=input, capture_output=capture_output, env=env)


@dataclass
class ToolSet:
    """Resolved tools, injected wherever external commands are run."""

    runtime: NativeTool
    tools: dict[str, ToolInvoker] = field(default_factory=dict)

    def get(self, name: str) -> ToolInvoker:
        if name == self.runtime.name:
            return self.runtime
        try:
            return self.tools[name]
        except KeyError:
            raise KeyError(f"Unknown tool: {name!r}. Known tools: {', '.join(self.names)}") from None

    @property
    def names(self) -> list[str]:
        return [self.runtime.name, *self.tools]


def pull_image(runtime: NativeTool, image: str) -> bool:
    """Pull a container image. Returns True on success."""
    logger.info("Pulling %s...", image)
    result = runtime.run(["pull", image], capture_output=False)
    if result.returncode != 0:
        logger.warning("Failed to pull %s (exit code %d)", image, result.returncode)
        return False
    return True


def _fallback(runtime: NativeTool, fallback: FallbackToolConfig) -> ContainerizedTool:
    return ContainerizedTool(
        name=fallback.name,
        image=fallback.image,
        runtime=runtime,
        mount_workdir=fallback.mount_workdir,
    )


def resolve_tools(
    config: ToolsConfig,
    which: Callable[[str], str | None] = shutil.which,
    pull: bool = True,
) -> ToolSet:
    """Check every required tool and substitute containers for missing helpers.

    Args:
        config: Tool settings (runtime name and fallback images)
        which: PATH lookup, injectable for tests
        pull: Pull fallback images flagged for pulling

    Returns:
        ToolSet with one invoker per tool

    Raises:
        MissingDependencyError: If the container runtime is not installed
    """
    runtime_path = which(config.runtime)
    if not runtime_path:
        raise MissingDependencyError(f"{config.runtime.capitalize()} is not installed.")
    runtime = NativeTool(name=config.runtime, path=runtime_path)

    tools: dict[str, ToolInvoker] = {}
    pulled: set[str] = set()
    for fallback in config.fallbacks:
        path = which(fallback.name)
        if path:
            tools[fallback.name] = NativeTool(name=fallback.name, path=path)
            continue

        logger.info("%s not found. Using Docker image %s for %s.", fallback.name, fallback.image, fallback.name)
        tools[fallback.name] = _fallback(runtime, fallback)
        if pull and fallback.pull and fallback.image not in pulled:
            pull_image(runtime, fallback.image)
            pulled.add(fallback.image)

    return ToolSet(runtime=runtime, tools=tools)
