"""Test doubles for goci tests."""

from .dagger_client import (
    FakeCacheVolume,
    FakeClient,
    FakeContainer,
    FakeDirectory,
    FakeFile,
    FakeHost,
)

__all__ = [
    "FakeCacheVolume",
    "FakeClient",
    "FakeContainer",
    "FakeDirectory",
    "FakeFile",
    "FakeHost",
]
