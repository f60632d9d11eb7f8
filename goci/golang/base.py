"""
Base Go container assembly.

The base plan starts from a Go image, mounts the build and module caches,
mounts the project at /src and makes it the working directory. It is the
starting point for more specific Go pipelines (test, lint, ...).
"""

import logging
from dataclasses import replace

from ..client import Client
from ..executor import build_container
from .options import BaseOption, BaseOptions, base_options
from .plan import CacheMount, ExecutionPlan, SourceMount, cache_namespace, image_reference

logger = logging.getLogger("goci")

DEFAULT_BASE_IMAGE_REPOSITORY = "docker.io/library/golang"
DEFAULT_BASE_IMAGE_TAG = "latest"

DEFAULT_PROJECT_ROOT = "."

BUILD_CACHE_PATH = "/root/.cache/go-build"
MODULE_CACHE_PATH = "/go/pkg/mod"
SOURCE_PATH = "/src"


def build_cache_key(image: str) -> str:
    """Return the build cache volume name for an image reference."""
    return f"go-build-{cache_namespace(image)}"


def module_cache_key(image: str) -> str:
    """Return the module cache volume name for an image reference."""
    return f"go-mod-{cache_namespace(image)}"


def resolve_base(options: BaseOptions) -> ExecutionPlan:
    """
    Resolve a base configuration record into an execution plan.

    Parameters
    ----------
    options : BaseOptions
        Configuration record produced by applying base options.

    Returns
    -------
    ExecutionPlan
        Plan with the Go image, cache mounts, mounted project root, working
        directory and, when a CGO preference is set, CGO_ENABLED.
    """
    project_root = options.project_root or DEFAULT_PROJECT_ROOT

    image = image_reference(
        options.base_image_repository,
        options.base_image_tag,
        options.base_image,
        DEFAULT_BASE_IMAGE_REPOSITORY,
        DEFAULT_BASE_IMAGE_TAG,
    )
    logger.debug("Resolved Go base image: %s (cache namespace %s)", image, cache_namespace(image))

    plan = ExecutionPlan(
        image=image,
        cache_mounts=(
            CacheMount(BUILD_CACHE_PATH, build_cache_key(image)),
            CacheMount(MODULE_CACHE_PATH, module_cache_key(image)),
        ),
        source=SourceMount(SOURCE_PATH, project_root),
        workdir=SOURCE_PATH,
    )

    if options.has_cgo_value():
        plan = plan.with_env_variable("CGO_ENABLED", options.cgo_value())

    return plan


def base_plan(*opts: BaseOption) -> ExecutionPlan:
    """Return the base execution plan for the given options."""
    return resolve_base(base_options(*opts))


def base(client: Client, *opts: BaseOption):
    """
    Return a basic Go container with the project mounted to /src.

    The container can be used as a base for more specific Go actions, for
    example ``base(client).with_exec(["go", "version"])``.
    """
    return build_container(client, base_plan(*opts))


def copy_base_options(options: BaseOptions) -> BaseOptions:
    """Return a copy of a base record that assemblies may modify freely."""
    return replace(options)
