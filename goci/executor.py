"""
Plan execution.

Turns an ExecutionPlan into an engine container through a Client and runs
it. This is the only place that knows how plan fields map onto engine calls.
Engine errors (unreachable registry, missing project root, non-zero exit
codes) are not caught here; they reach the caller as raised by the engine.
"""

import logging
from typing import TYPE_CHECKING

import dagger

from .client import Client

if TYPE_CHECKING:
    from .golang.plan import ExecutionPlan

logger = logging.getLogger("goci")


def build_container(client: Client, plan: "ExecutionPlan") -> dagger.Container:
    """
    Build an engine container that matches an execution plan.

    Parameters
    ----------
    client : Client
        Client used to obtain containers, cache volumes and host directories.
    plan : ExecutionPlan
        Resolved plan.

    Returns
    -------
    dagger.Container
        Lazily evaluated container. Nothing runs until a result is requested.
    """
    logger.debug("Building container from %s", plan.image)

    container = client.container().from_(plan.image)

    for mount in plan.cache_mounts:
        container = container.with_mounted_cache(mount.path, client.cache_volume(mount.key))

    if plan.source is not None:
        container = container.with_mounted_directory(
            plan.source.path, client.host().directory(plan.source.host_path)
        )

    if plan.workdir:
        container = container.with_workdir(plan.workdir)

    for name, value in sorted(plan.env.items()):
        container = container.with_env_variable(name, value)

    for copied in plan.files:
        source_file = client.container().from_(copied.source_image).file(copied.source_path)
        container = container.with_file(copied.path, source_file)

    if plan.args:
        container = container.with_exec(list(plan.args))

    return container


async def run_container(container: dagger.Container) -> str:
    """Evaluate a container and return the standard output of its last command."""
    return await container.stdout()
