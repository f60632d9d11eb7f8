"""Command-line interface for goci."""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Any, List, Optional

import dagger

from .ci import CIDetectorClient, ci_environment
from .client import BaseClient, Client
from .config import PIPELINE_KINDS, load_config, options_from_config
from .errors import GociError
from .executor import build_container, run_container
from .golang import (
    BaseImage,
    BaseImageRepository,
    BaseImageTag,
    CoverMode,
    CoverProfile,
    DisableCgo,
    EnableCgo,
    EnableRaceDetector,
    ExecutionPlan,
    ProjectRoot,
    SourceImage,
    SourceImageRepository,
    SourceImageTag,
    Verbose,
    base_plan,
    gotest_plan,
    lint_plan,
)
from .render import FORMATS, render_plan
from .version import __version__

logger = logging.getLogger("goci")

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _common_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)

    image_group = parser.add_argument_group("Go Image")
    image_group.add_argument(
        "--base-image-repository",
        help="Image repository for the Go base image (without tag or digest)",
    )
    image_group.add_argument(
        "--base-image-tag",
        "--go-version",
        dest="base_image_tag",
        help="Tag of the Go base image, usually the Go version",
    )
    image_group.add_argument(
        "--base-image",
        help="Full Go base image reference. Takes precedence over repository and tag.",
    )

    project_group = parser.add_argument_group("Project")
    project_group.add_argument("--project-root", help="Host path of the Go project (default: .)")
    cgo_group = project_group.add_mutually_exclusive_group()
    cgo_group.add_argument(
        "--cgo", dest="cgo", action="store_const", const=True, default=None, help="Set CGO_ENABLED=1"
    )
    cgo_group.add_argument(
        "--no-cgo", dest="cgo", action="store_const", const=False, help="Set CGO_ENABLED=0"
    )

    output_group = parser.add_argument_group("Output")
    output_group.add_argument(
        "--format",
        choices=FORMATS,
        default="text",
        help="How to print the execution plan when not running it",
    )
    output_group.add_argument(
        "--run",
        action="store_true",
        help="Run the pipeline on the Dagger engine instead of printing the plan",
    )
    output_group.add_argument(
        "--no-ci",
        action="store_true",
        help="Do not forward CI environment variables into containers",
    )

    return parser


def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser for the goci CLI."""
    parser = argparse.ArgumentParser(
        prog="goci", description="goci: Containerized build, test and lint pipelines for Go."
    )

    general_group = parser.add_argument_group("General Options")
    general_group.add_argument(
        "--version",
        action="version",
        version=f"goci {__version__}",
        help="Show the current version and exit",
    )
    general_group.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default="INFO",
        help="Set the logging level",
    )
    general_group.add_argument(
        "--log-file", help="Path to a file to write logs to (in addition to stderr)."
    )
    general_group.add_argument(
        "-c",
        "--config",
        help="Path to configuration file",
        default=None,
    )

    common = _common_parser()
    subparsers = parser.add_subparsers(dest="pipeline", required=True, metavar="PIPELINE")

    base_parser = subparsers.add_parser(
        "base", parents=[common], help="Go base container, optionally running a command"
    )
    base_parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to run in the base container (e.g. -- go version)",
    )

    test_parser = subparsers.add_parser("test", parents=[common], help="Run go test")
    test_group = test_parser.add_argument_group("Test Options")
    test_group.add_argument("-v", "--verbose", action="store_true", help="Verbose test output")
    test_group.add_argument(
        "--race", action="store_true", help="Enable the race detector (implies --cgo)"
    )
    test_group.add_argument(
        "--covermode",
        choices=[str(mode) for mode in CoverMode if mode.is_valid()],
        help="Coverage mode",
    )
    test_group.add_argument("--coverprofile", help="Write a coverage profile to this file")

    lint_parser = subparsers.add_parser("lint", parents=[common], help="Run golangci-lint")
    lint_group = lint_parser.add_argument_group("Lint Options")
    lint_group.add_argument(
        "--linter-image-repository",
        help="Image repository to copy golangci-lint from (without tag or digest)",
    )
    lint_group.add_argument(
        "--linter-version", help="Tag of the golangci-lint image, usually the linter version"
    )
    lint_group.add_argument(
        "--linter-image",
        help="Full golangci-lint image reference. Takes precedence over repository and version.",
    )

    return parser


def parse_args(args_list: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Parameters
    ----------
    args_list : list of str, optional
        Arguments to parse. Defaults to sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments
    """
    parser = create_parser()
    return parser.parse_args(args_list)


def options_from_args(args: argparse.Namespace) -> List[Any]:
    """Translate parsed CLI arguments into options for the selected pipeline."""
    opts: List[Any] = []

    if args.base_image_repository:
        opts.append(BaseImageRepository(args.base_image_repository))
    if args.base_image_tag:
        opts.append(BaseImageTag(args.base_image_tag))
    if args.base_image:
        opts.append(BaseImage(args.base_image))
    if args.project_root:
        opts.append(ProjectRoot(args.project_root))
    if args.cgo is True:
        opts.append(EnableCgo())
    elif args.cgo is False:
        opts.append(DisableCgo())

    if args.pipeline == "test":
        if args.verbose:
            opts.append(Verbose())
        if args.race:
            opts.append(EnableRaceDetector())
        if args.covermode:
            opts.append(CoverMode.parse(args.covermode))
        if args.coverprofile:
            opts.append(CoverProfile(args.coverprofile))

    elif args.pipeline == "lint":
        if args.linter_image_repository:
            opts.append(SourceImageRepository(args.linter_image_repository))
        if args.linter_version:
            opts.append(SourceImageTag(args.linter_version))
        if args.linter_image:
            opts.append(SourceImage(args.linter_image))

    return opts


def build_plan(pipeline: str, opts: List[Any], command: Optional[List[str]] = None) -> ExecutionPlan:
    """Resolve options into the execution plan of a pipeline kind."""
    if pipeline == "test":
        return gotest_plan(*opts)
    if pipeline == "lint":
        return lint_plan(*opts)
    if pipeline == "base":
        plan = base_plan(*opts)
        if command and command[0] == "--":
            command = command[1:]
        if command:
            plan = plan.with_exec(command)
        return plan

    raise GociError(f"Unknown pipeline kind '{pipeline}'. Expected one of {PIPELINE_KINDS}")


async def run_plan(plan: ExecutionPlan, detect_ci: bool = True) -> str:
    """Connect to the Dagger engine, run a plan and return its output."""
    async with dagger.Connection(dagger.Config(log_output=sys.stderr)) as dagger_client:
        client: Client = BaseClient(dagger_client)
        if detect_ci:
            client = CIDetectorClient(client)

        container = build_container(client, plan)
        return await run_container(container)


def _configure_file_logging(log_file: str, level: int) -> None:
    log_file_path = Path(log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    fh = logging.FileHandler(log_file)
    fh.setLevel(level)
    fh.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(fh)
    logger.debug(f"Logging to file enabled: {log_file}")


def main(argv: Optional[List[str]] = None) -> int:
    """Run main entry point for the goci CLI.

    Steps:
        1. Parse arguments and configure logging.
        2. Load configuration and translate it into options.
        3. Append CLI options (they win over configuration values).
        4. Resolve the execution plan.
        5. Print the plan, or run it on the Dagger engine with --run.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    args = parse_args(argv)

    level = LOG_LEVELS[args.log_level]
    logger.setLevel(level)
    if args.log_file:
        _configure_file_logging(args.log_file, level)

    logger.debug(f"CLI arguments: {args}")

    try:
        cfg = load_config(args.config)
        opts = options_from_config(cfg, args.pipeline) + options_from_args(args)
        plan = build_plan(args.pipeline, opts, getattr(args, "command", None))
    except GociError as e:
        logger.error(f"Could not resolve {args.pipeline} pipeline: {e}")
        return 1

    if not args.run:
        extra_env = {} if args.no_ci else ci_environment(os.environ)
        sys.stdout.write(render_plan(plan, args.format, extra_env))
        return 0

    try:
        output = asyncio.run(run_plan(plan, detect_ci=not args.no_ci))
    except dagger.DaggerError as e:
        logger.error(f"Pipeline failed: {e}")
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
