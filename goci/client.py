"""
Execution client abstraction.

Assemblies never talk to dagger.Client directly. They go through Client,
which exposes just the calls they need. Wrapping a Client makes it possible
to inject custom logic into every produced container (for example CI
environment variables, see goci.ci).
"""

from abc import ABC, abstractmethod

import dagger


class Client(ABC):
    """Minimal set of engine calls used to build Go pipelines."""

    @abstractmethod
    def container(self) -> dagger.Container:
        """Return a new, empty container."""

    @abstractmethod
    def host(self) -> dagger.Host:
        """Return a handle to the host (for mounting directories)."""

    @abstractmethod
    def cache_volume(self, key: str) -> dagger.CacheVolume:
        """Return the named cache volume."""


class BaseClient(Client):
    """Client backed by a connected dagger.Client.

    It can be subclassed by alternative client implementations to provide
    default implementations for supported calls.
    """

    def __init__(self, client: dagger.Client):
        self._client = client

    def container(self) -> dagger.Container:
        return self._client.container()

    def host(self) -> dagger.Host:
        return self._client.host()

    def cache_volume(self, key: str) -> dagger.CacheVolume:
        return self._client.cache_volume(key)
