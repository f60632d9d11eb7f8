"""
Go pipelines for goci.

This package provides the building blocks for containerized Go pipelines:
- Options: composable configuration shared by base, test and lint pipelines
- base / gotest / lint: assemblies that resolve options into execution plans
  and, given a client, into engine containers
"""

from .base import base, base_plan, resolve_base
from .gotest import gotest, gotest_plan, resolve_test
from .lint import lint, lint_plan, resolve_lint
from .options import (
    BaseImage,
    BaseImageRepository,
    BaseImageTag,
    BaseOption,
    BaseOptions,
    CoverMode,
    CoverProfile,
    DisableCgo,
    EnableCgo,
    EnableRaceDetector,
    GoTestOption,
    GoTestOptions,
    LinterVersion,
    LintOption,
    LintOptions,
    Option,
    ProjectRoot,
    SourceImage,
    SourceImageRepository,
    SourceImageTag,
    Verbose,
    Version,
)
from .plan import CacheMount, ExecutionPlan, FileCopy, SourceMount

__all__ = [
    "base",
    "base_plan",
    "resolve_base",
    "gotest",
    "gotest_plan",
    "resolve_test",
    "lint",
    "lint_plan",
    "resolve_lint",
    "BaseImage",
    "BaseImageRepository",
    "BaseImageTag",
    "BaseOption",
    "BaseOptions",
    "CoverMode",
    "CoverProfile",
    "DisableCgo",
    "EnableCgo",
    "EnableRaceDetector",
    "GoTestOption",
    "GoTestOptions",
    "LinterVersion",
    "LintOption",
    "LintOptions",
    "Option",
    "ProjectRoot",
    "SourceImage",
    "SourceImageRepository",
    "SourceImageTag",
    "Verbose",
    "Version",
    "CacheMount",
    "ExecutionPlan",
    "FileCopy",
    "SourceMount",
]
