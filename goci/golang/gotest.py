"""
``go test`` pipeline assembly.
"""

import logging
from typing import List

from ..client import Client
from ..executor import build_container
from .base import copy_base_options, resolve_base
from .options import GoTestOption, GoTestOptions, gotest_options
from .plan import ExecutionPlan

logger = logging.getLogger("goci")


def gotest_args(options: GoTestOptions) -> List[str]:
    """Build the ``go test`` argument list for a test configuration record."""
    args = ["go", "test"]

    if options.verbose:
        args.append("-v")

    if options.race_detector_enabled:
        args.append("-race")

    if options.cover_mode.is_valid():
        args.extend(["-covermode", str(options.cover_mode)])

    if options.cover_profile:
        args.extend(["-coverprofile", options.cover_profile])

    args.append("./...")
    return args


def resolve_test(options: GoTestOptions) -> ExecutionPlan:
    """
    Resolve a test configuration record into an execution plan.

    The race detector needs cgo, so enabling it forces CGO_ENABLED=1 even
    when the caller disabled cgo explicitly. The caller's record is left
    untouched.

    Parameters
    ----------
    options : GoTestOptions
        Configuration record produced by applying test options.

    Returns
    -------
    ExecutionPlan
        Base plan with the ``go test`` command attached.
    """
    base_options = copy_base_options(options.base)

    if options.race_detector_enabled:
        if base_options.cgo_enabled is False:
            logger.debug("Race detector requested, overriding disabled cgo")
        base_options.cgo_enabled = True

    args = gotest_args(options)
    logger.debug("Resolved go test command: %s", " ".join(args))

    return resolve_base(base_options).with_exec(args)


def gotest_plan(*opts: GoTestOption) -> ExecutionPlan:
    """Return the ``go test`` execution plan for the given options."""
    return resolve_test(gotest_options(*opts))


def gotest(client: Client, *opts: GoTestOption):
    """Return a container that runs ``go test`` on the project."""
    return build_container(client, gotest_plan(*opts))
