"""
golangci-lint pipeline assembly.

The linter binary is copied from a separate, independently configurable
image into the Go base container.
"""

import logging

from ..client import Client
from ..executor import build_container
from .base import resolve_base
from .options import LintOption, LintOptions, lint_options
from .plan import ExecutionPlan, image_reference

logger = logging.getLogger("goci")

DEFAULT_GOLANGCI_LINT_IMAGE_REPOSITORY = "docker.io/golangci/golangci-lint"
DEFAULT_GOLANGCI_LINT_IMAGE_TAG = "latest"

GOLANGCI_LINT_SOURCE_PATH = "/usr/bin/golangci-lint"
GOLANGCI_LINT_PATH = "/usr/local/bin/golangci-lint"

LINT_ARGS = ("golangci-lint", "run", "--verbose")


def resolve_lint(options: LintOptions) -> ExecutionPlan:
    """
    Resolve a lint configuration record into an execution plan.

    Parameters
    ----------
    options : LintOptions
        Configuration record produced by applying lint options.

    Returns
    -------
    ExecutionPlan
        Base plan with the golangci-lint binary copied in and the lint
        command attached.
    """
    source_image = image_reference(
        options.source_image_repository,
        options.source_image_tag,
        options.source_image,
        DEFAULT_GOLANGCI_LINT_IMAGE_REPOSITORY,
        DEFAULT_GOLANGCI_LINT_IMAGE_TAG,
    )
    logger.debug("Resolved golangci-lint source image: %s", source_image)

    return (
        resolve_base(options.base)
        .with_file(GOLANGCI_LINT_PATH, source_image, GOLANGCI_LINT_SOURCE_PATH)
        .with_exec(LINT_ARGS)
    )


def lint_plan(*opts: LintOption) -> ExecutionPlan:
    """Return the golangci-lint execution plan for the given options."""
    return resolve_lint(lint_options(*opts))


def lint(client: Client, *opts: LintOption):
    """Return a container that runs golangci-lint on the project."""
    return build_container(client, lint_plan(*opts))
