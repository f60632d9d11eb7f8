# File: goci/config.py
# Location: goci/goci/config.py

"""
Configuration management module.

This module handles loading pipeline configuration from a JSON file and
translating it into option lists for the Go assemblies. The default values
reside in config.json, which is included in the installed package directory.

If no config_file is provided, this module loads the default config.json
from the package installation directory.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from .errors import ConfigError
from .golang.options import (
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
)

logger = logging.getLogger("goci")

PIPELINE_KINDS = ("base", "test", "lint")


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file.

    Parameters
    ----------
    config_file : str, optional
        Path to a configuration file in JSON format. If None, defaults to
        the package-installed 'config.json'.

    Returns
    -------
    dict
        Configuration dictionary loaded from the JSON file.

    Raises
    ------
    ConfigError
        If the file does not exist, cannot be parsed, or does not hold a
        JSON object.
    """
    if not config_file:
        config_file = os.path.join(os.path.dirname(__file__), "config.json")

    if not os.path.exists(config_file):
        raise ConfigError(f"Configuration file '{config_file}' not found.", config_file)

    with open(config_file, "r", encoding="utf-8") as f:
        try:
            config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Error parsing JSON configuration: {e}", config_file)

    if not isinstance(config, dict):
        raise ConfigError(
            f"Configuration must be a JSON object, got {type(config).__name__}", config_file
        )

    logger.debug("Loaded configuration from %s", config_file)
    return config


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = cfg.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Configuration section '{name}' must be an object")
    return section


def _string(cfg: Dict[str, Any], key: str) -> Optional[str]:
    """Return a string value, or None when the key is unset or null."""
    value = cfg.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(
            f"Configuration key '{key}' must be a string, got {type(value).__name__} {value!r}"
        )
    return value


def _common_options(cfg: Dict[str, Any]) -> List[Any]:
    opts: List[Any] = []

    repository = _string(cfg, "base_image_repository")
    if repository:
        opts.append(BaseImageRepository(repository))
    tag = _string(cfg, "base_image_tag")
    if tag:
        opts.append(BaseImageTag(tag))
    image = _string(cfg, "base_image")
    if image:
        opts.append(BaseImage(image))
    project_root = _string(cfg, "project_root")
    if project_root:
        opts.append(ProjectRoot(project_root))

    cgo = cfg.get("cgo")
    if cgo is True:
        opts.append(EnableCgo())
    elif cgo is False:
        opts.append(DisableCgo())

    return opts


def _test_options(section: Dict[str, Any]) -> List[Any]:
    opts: List[Any] = []

    if section.get("verbose"):
        opts.append(Verbose())
    if section.get("race"):
        opts.append(EnableRaceDetector())

    covermode = _string(section, "covermode")
    if covermode:
        mode = CoverMode.parse(covermode)
        if mode.is_valid():
            opts.append(mode)
        else:
            logger.warning("Ignoring unknown cover mode in configuration: %r", covermode)

    coverprofile = _string(section, "coverprofile")
    if coverprofile:
        opts.append(CoverProfile(coverprofile))

    return opts


def _lint_options(section: Dict[str, Any]) -> List[Any]:
    opts: List[Any] = []

    repository = _string(section, "linter_image_repository")
    if repository:
        opts.append(SourceImageRepository(repository))
    tag = _string(section, "linter_image_tag")
    if tag:
        opts.append(SourceImageTag(tag))
    image = _string(section, "linter_image")
    if image:
        opts.append(SourceImage(image))

    return opts


def options_from_config(cfg: Dict[str, Any], kind: str) -> List[Any]:
    """
    Translate a configuration dictionary into options for one pipeline kind.

    Common keys come first, followed by the keys of the kind's own section,
    so options appended by the caller afterwards take precedence.

    Parameters
    ----------
    cfg : dict
        Configuration dictionary, typically from load_config.
    kind : str
        One of 'base', 'test' or 'lint'.

    Returns
    -------
    list
        Options in application order. Unset or null keys produce no option.

    Raises
    ------
    ConfigError
        If the pipeline kind is unknown or a section is not an object.
    """
    if kind not in PIPELINE_KINDS:
        raise ConfigError(f"Unknown pipeline kind '{kind}'. Expected one of {PIPELINE_KINDS}")

    opts = _common_options(cfg)

    if kind == "test":
        opts.extend(_test_options(_section(cfg, "test")))
    elif kind == "lint":
        opts.extend(_lint_options(_section(cfg, "lint")))

    logger.debug("Options from configuration for %s: %s", kind, opts)
    return opts
