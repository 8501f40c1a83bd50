# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Tests for registry container lifecycle."""

import subprocess
from unittest.mock import MagicMock

import pytest

from fmrctl.core.container import ContainerError, ContainerManager, ContainerState
from fmrctl.core.schema import ContainerConfig
from fmrctl.core.tools import ToolSet


def completed(returncode: int = 0, stdout: bytes = b"") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=b"boom")


def manager_with(*results: subprocess.CompletedProcess) -> tuple[ContainerManager, MagicMock]:
    runtime = MagicMock()
    runtime.name = "docker"
    runtime.run.side_effect = list(results)
    return ContainerManager(ToolSet(runtime=runtime), ContainerConfig()), runtime


def docker_calls(runtime: MagicMock) -> list[list[str]]:
    return [call.args[0] for call in runtime.run.call_args_list]


class TestContainerState:
    def test_missing(self):
        manager, _ = manager_with(completed(returncode=1))

        assert manager.state() == ContainerState.MISSING

    def test_running(self):
        manager, runtime = manager_with(completed(), completed(stdout=b"true\n"))

        assert manager.state() == ContainerState.RUNNING
        assert docker_calls(runtime)[1] == ["inspect", "-f", "{{.State.Running}}", "fmr"]

    def test_stopped(self):
        manager, _ = manager_with(completed(), completed(stdout=b"false\n"))

        assert manager.state() == ContainerState.STOPPED


class TestEnsureRunning:
    """Test ContainerManager.ensure_running()."""

    def test_creates_missing_container(self):
        manager, runtime = manager_with(completed(returncode=1), completed())

        assert manager.ensure_running() == ContainerState.MISSING
        assert docker_calls(runtime)[-1] == [
            "run", "-d", "--name", "fmr", "-p", "8080:8080",
            "-e", "SERVER_URL=http://localhost:8080",
            "-e", "CATALINA_OPTS=-Xmx6G",
            "sdmxio/fmr-mysql:11.19.4",
        ]

    def test_starts_stopped_container(self):
        manager, runtime = manager_with(completed(), completed(stdout=b"false"), completed())

        assert manager.ensure_running() == ContainerState.STOPPED
        assert docker_calls(runtime)[-1] == ["start", "fmr"]

    def test_running_container_is_left_alone(self):
        manager, runtime = manager_with(completed(), completed(stdout=b"true"))

        assert manager.ensure_running() == ContainerState.RUNNING
        assert len(docker_calls(runtime)) == 2

    def test_failed_run_raises(self):
        manager, _ = manager_with(completed(returncode=1), completed(returncode=125))

        with pytest.raises(ContainerError, match="exit code 125"):
            manager.ensure_running()

    def test_custom_container_settings(self):
        runtime = MagicMock()
        runtime.run.side_effect = [completed(returncode=1), completed()]
        config = ContainerConfig(name="registry", image="sdmxio/fmr-mysql:latest", port=9090, environment={})

        ContainerManager(ToolSet(runtime=runtime), config).ensure_running()

        assert docker_calls(runtime)[-1] == [
            "run", "-d", "--name", "registry", "-p", "9090:9090", "sdmxio/fmr-mysql:latest",
        ]


class TestCleanup:
    def test_stop_and_remove(self):
        manager, runtime = manager_with(completed(), completed())

        assert manager.stop() is True
        assert manager.remove() is True
        assert docker_calls(runtime) == [["stop", "fmr"], ["rm", "fmr"]]
