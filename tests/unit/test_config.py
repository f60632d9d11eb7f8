"""
Unit tests for configuration loading and config-to-options translation.

Coverage:
- load_config: packaged defaults, user files, missing and malformed files
- options_from_config: common keys, test and lint sections, ordering,
  lenient handling of unknown cover modes, unknown pipeline kinds
"""

import logging

import pytest

from goci.config import load_config, options_from_config
from goci.errors import ConfigError, GociError
from goci.golang import (
    BaseImage,
    BaseImageRepository,
    BaseImageTag,
    CoverMode,
    CoverProfile,
    DisableCgo,
    EnableCgo,
    EnableRaceDetector,
    ProjectRoot,
    SourceImage,
    SourceImageRepository,
    SourceImageTag,
    Verbose,
    base_plan,
    gotest_plan,
    lint_plan,
)


@pytest.mark.unit
class TestLoadConfig:
    """load_config()."""

    def test_packaged_defaults(self):
        cfg = load_config()
        assert cfg["base_image_repository"] == "docker.io/library/golang"
        assert cfg["base_image_tag"] == "latest"
        assert cfg["project_root"] == "."
        assert cfg["cgo"] is None
        assert cfg["lint"]["linter_image_repository"] == "docker.io/golangci/golangci-lint"

    def test_user_file(self, write_config):
        path = write_config({"base_image_tag": "1.21"})
        assert load_config(path) == {"base_image_tag": "1.21"}

    def test_missing_file(self, tmp_path):
        missing = str(tmp_path / "missing.json")
        with pytest.raises(ConfigError, match="not found") as excinfo:
            load_config(missing)
        assert excinfo.value.config_file == missing

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Error parsing JSON"):
            load_config(str(path))

    def test_non_object(self, write_config):
        with pytest.raises(ConfigError, match="JSON object"):
            load_config(write_config(["base_image_tag", "1.21"]))

    def test_config_error_is_a_goci_error(self, tmp_path):
        with pytest.raises(GociError):
            load_config(str(tmp_path / "missing.json"))


@pytest.mark.unit
class TestOptionsFromConfig:
    """options_from_config()."""

    def test_empty_config(self):
        assert options_from_config({}, "base") == []
        assert options_from_config({}, "test") == []
        assert options_from_config({}, "lint") == []

    def test_common_keys(self):
        cfg = {
            "base_image_repository": "registry.example.com/go",
            "base_image_tag": "1.21",
            "base_image": "golang:1.20",
            "project_root": "./sub",
            "cgo": False,
        }
        assert options_from_config(cfg, "base") == [
            BaseImageRepository("registry.example.com/go"),
            BaseImageTag("1.21"),
            BaseImage("golang:1.20"),
            ProjectRoot("./sub"),
            DisableCgo(),
        ]

    def test_numeric_tag_is_rejected(self):
        with pytest.raises(ConfigError, match="base_image_tag.*must be a string"):
            options_from_config({"base_image_tag": 1.2}, "base")

    @pytest.mark.parametrize(
        "cfg, kind, key",
        [
            ({"base_image_repository": ["golang"]}, "base", "base_image_repository"),
            ({"base_image": 42}, "lint", "base_image"),
            ({"project_root": True}, "test", "project_root"),
            ({"test": {"covermode": 1}}, "test", "covermode"),
            ({"test": {"coverprofile": 0.5}}, "test", "coverprofile"),
            ({"lint": {"linter_image_repository": {}}}, "lint", "linter_image_repository"),
            ({"lint": {"linter_image_tag": 1.55}}, "lint", "linter_image_tag"),
            ({"lint": {"linter_image": 7}}, "lint", "linter_image"),
        ],
    )
    def test_non_string_values_are_rejected(self, cfg, kind, key):
        with pytest.raises(ConfigError, match=key):
            options_from_config(cfg, kind)

    def test_null_values_are_ignored(self):
        cfg = {"base_image_tag": None, "test": {"covermode": None, "coverprofile": None}}
        assert options_from_config(cfg, "test") == []

    def test_cgo_tri_state(self):
        assert options_from_config({"cgo": True}, "base") == [EnableCgo()]
        assert options_from_config({"cgo": False}, "base") == [DisableCgo()]
        assert options_from_config({"cgo": None}, "base") == []

    def test_test_section(self):
        cfg = {
            "project_root": "./sub",
            "test": {"verbose": True, "race": True, "covermode": "atomic", "coverprofile": "c.out"},
        }
        assert options_from_config(cfg, "test") == [
            ProjectRoot("./sub"),
            Verbose(),
            EnableRaceDetector(),
            CoverMode.ATOMIC,
            CoverProfile("c.out"),
        ]

    def test_lint_section(self):
        cfg = {
            "lint": {
                "linter_image_repository": "ghcr.io/golangci/golangci-lint",
                "linter_image_tag": "v1.55.2",
                "linter_image": "golangci/golangci-lint:v1.54.0",
            }
        }
        assert options_from_config(cfg, "lint") == [
            SourceImageRepository("ghcr.io/golangci/golangci-lint"),
            SourceImageTag("v1.55.2"),
            SourceImage("golangci/golangci-lint:v1.54.0"),
        ]

    def test_sections_only_apply_to_their_kind(self):
        cfg = {"test": {"verbose": True}, "lint": {"linter_image_tag": "v1.55.2"}}
        assert options_from_config(cfg, "base") == []
        assert options_from_config(cfg, "test") == [Verbose()]
        assert options_from_config(cfg, "lint") == [SourceImageTag("v1.55.2")]

    def test_unknown_cover_mode_is_dropped(self, caplog):
        caplog.set_level(logging.WARNING, logger="goci")
        opts = options_from_config({"test": {"covermode": "statement"}}, "test")

        assert opts == []
        assert "Ignoring unknown cover mode" in caplog.text

    def test_unknown_kind(self):
        with pytest.raises(ConfigError, match="Unknown pipeline kind"):
            options_from_config({}, "build")

    def test_section_must_be_an_object(self):
        with pytest.raises(ConfigError, match="must be an object"):
            options_from_config({"test": ["verbose"]}, "test")

    def test_packaged_defaults_resolve_to_documented_defaults(self):
        cfg = load_config()

        assert base_plan(*options_from_config(cfg, "base")) == base_plan()
        assert gotest_plan(*options_from_config(cfg, "test")) == gotest_plan()
        assert lint_plan(*options_from_config(cfg, "lint")) == lint_plan()

    def test_later_options_override_config(self):
        opts = options_from_config({"base_image_tag": "1.20"}, "test") + [BaseImageTag("1.21")]
        assert gotest_plan(*opts).image == "docker.io/library/golang:1.21"
