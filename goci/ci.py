"""
CI environment detection.

CIDetectorClient wraps a Client and adds CI metadata variables to every
container it creates when the process runs on GitHub Actions. The host
environment is read once, at construction, so the wrapper behaves the same
for its whole lifetime and can be tested with an explicit mapping.
"""

import logging
import os
from typing import Dict, Mapping, Optional

import dagger

from .client import Client

logger = logging.getLogger("goci")

CI_INDICATOR = "GITHUB_ACTIONS"

CI_VARIABLES = (
    "GITHUB_ACTIONS",
    "GITHUB_HEAD_REF",
    "GITHUB_REF",
    "GITHUB_REPOSITORY",
    "GITHUB_RUN_ID",
    "GITHUB_SERVER_URL",
    "GITHUB_SHA",
    "GITHUB_WORKFLOW",
)


def ci_environment(environ: Mapping[str, str]) -> Dict[str, str]:
    """
    Return the CI variables to forward into containers.

    Parameters
    ----------
    environ : Mapping[str, str]
        Host environment snapshot.

    Returns
    -------
    dict
        Empty when no CI run is detected. Otherwise every name in
        CI_VARIABLES mapped to its host value (empty string when missing).
    """
    if not environ.get(CI_INDICATOR):
        return {}

    return {name: environ.get(name, "") for name in CI_VARIABLES}


class CIDetectorClient(Client):
    """Client wrapper that adds CI environment variables to every container."""

    def __init__(self, client: Client, environ: Optional[Mapping[str, str]] = None):
        self._client = client
        if environ is None:
            environ = os.environ
        self.env = ci_environment(environ)

        if self.env:
            logger.info("GitHub Actions detected, forwarding CI environment into containers")

    def container(self) -> dagger.Container:
        container = self._client.container()

        for name, value in self.env.items():
            container = container.with_env_variable(name, value)

        return container

    def host(self) -> dagger.Host:
        return self._client.host()

    def cache_volume(self, key: str) -> dagger.CacheVolume:
        return self._client.cache_volume(key)
