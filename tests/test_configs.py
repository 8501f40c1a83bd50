# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
import yaml

from fmrctl.core.config import default_recipe_path, load_config, resolve_config_with_overrides
from fmrctl.core.schema import DemoConfig, StructureSource


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run from a directory tree without fmrctl.yaml."""
    workdir = tmp_path / "a" / "b" / "c"
    workdir.mkdir(parents=True)
    monkeypatch.chdir(workdir)
    return workdir


def write_yaml(path: Path, data: dict) -> Path:
    path.write_text(yaml.safe_dump(data))
    return path


class TestPackagedRecipe:
    """The packaged ECB demo recipe."""

    def test_default_recipe_loads(self, isolated_cwd):
        config = load_config()

        assert config.name == "ecb-exr-demo"
        assert config.container.name == "fmr"
        assert config.container.image == "sdmxio/fmr-mysql:11.19.4"
        assert config.polling.interval_seconds == 5
        assert config.polling.timeout_seconds is None

    def test_structures_in_order(self, isolated_cwd):
        config = load_config(default_recipe_path())

        assert [s.name for s in config.structures] == ["CL_FREQ", "ECB_EXR1", "ECB_TRD1", "SDMX_EXR"]
        assert [s.kind for s in config.structures] == ["url", "url", "url", "template"]

    def test_data_load_and_revalidations(self, isolated_cwd):
        config = load_config()

        assert config.data_load.dsd == "prov"
        assert config.data_load.output == "ecb_exr.csv"
        assert [r.output for r in config.revalidations] == ["sdmx_exr.csv", "sdmx_exr_a.csv"]
        assert config.output_files == [
            ("ECB:EXR", "ecb_exr.csv"),
            ("SDMX:EXR", "sdmx_exr.csv"),
            ("SDMX:EXR_A", "sdmx_exr_a.csv"),
        ]


class TestDemoConfigDefaults:
    def test_defaults_match_registry_demo(self):
        config = DemoConfig()

        assert config.registry.base_url == "http://localhost:8080"
        assert (config.registry.username, config.registry.password) == ("root", "password")
        assert config.container.environment == {
            "SERVER_URL": "http://localhost:8080",
            "CATALINA_OPTS": "-Xmx6G",
        }
        assert [f.name for f in config.tools.fallbacks] == ["curl", "jq", "xmlstarlet"]
        assert config.structures == []
        assert config.data_load is None

    def test_minimal_recipe(self, isolated_cwd):
        path = write_yaml(isolated_cwd / "recipe.yaml", {"name": "minimal"})

        config = load_config(path)

        assert config.name == "minimal"
        assert config.output_files == []


class TestValidation:
    def test_missing_file(self, isolated_cwd):
        with pytest.raises(FileNotFoundError):
            load_config(isolated_cwd / "missing.yaml")

    def test_structure_source_needs_exactly_one_location(self, isolated_cwd):
        path = write_yaml(
            isolated_cwd / "recipe.yaml",
            {"structures": [{"name": "both", "url": "https://x", "path": "local.xml"}]},
        )

        with pytest.raises(ValueError, match="exactly one of url, path, template"):
            load_config(path)

    def test_structure_source_without_location(self, isolated_cwd):
        path = write_yaml(isolated_cwd / "recipe.yaml", {"structures": [{"name": "none"}]})

        with pytest.raises(ValueError):
            load_config(path)

    def test_wrong_type(self, isolated_cwd):
        path = write_yaml(isolated_cwd / "recipe.yaml", {"polling": {"interval_seconds": "soon"}})

        with pytest.raises(ValueError):
            load_config(path)

    def test_unknown_upload_type(self, isolated_cwd):
        path = write_yaml(
            isolated_cwd / "recipe.yaml",
            {"data_load": {"upload_url": "u", "data_file_name": "f", "output": "o.csv", "upload_type": "ftp"}},
        )

        with pytest.raises(ValueError, match="upload_type"):
            load_config(path)

    def test_non_mapping_recipe(self, isolated_cwd):
        path = isolated_cwd / "recipe.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValueError, match="expected a mapping"):
            load_config(path)

    def test_structure_source_kind(self):
        assert StructureSource(name="x", path="a.xml").kind == "path"


class TestWorkspaceOverrides:
    """fmrctl.yaml overrides recipe values."""

    def test_override_applied_from_parent_directory(self, isolated_cwd):
        write_yaml(isolated_cwd.parent / "fmrctl.yaml", {"base_url": "http://registry:9090", "poll_timeout_seconds": 600})

        config = load_config()

        assert config.registry.base_url == "http://registry:9090"
        assert config.polling.timeout_seconds == 600
        assert config.polling.interval_seconds == 5

    def test_invalid_workspace_file_is_ignored(self, isolated_cwd):
        write_yaml(isolated_cwd / "fmrctl.yaml", {"poll_interval_seconds": "often"})

        config = load_config()

        assert config.polling.interval_seconds == 5

    def test_resolve_does_not_mutate_input(self):
        recipe = {"registry": {"base_url": "http://a"}}

        resolved = resolve_config_with_overrides(recipe, {"base_url": "http://b", "username": None})

        assert resolved["registry"]["base_url"] == "http://b"
        assert recipe["registry"]["base_url"] == "http://a"
        assert "username" not in resolved["registry"]
