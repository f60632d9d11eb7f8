"""
Execution plan value types.

An ExecutionPlan is the resolved description of a container: which image to
start from, which cache volumes and host directory to mount, the working
directory, environment, files copied in from other images and the command to
run. Plans are immutable; the ``with_*`` helpers return updated copies.

Nothing in this module talks to a container engine. See goci.executor for
turning a plan into an engine container.
"""

import hashlib
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class CacheMount:
    """A named cache volume mounted at a container path."""

    path: str
    key: str


@dataclass(frozen=True)
class SourceMount:
    """A host directory mounted at a container path."""

    path: str
    host_path: str


@dataclass(frozen=True)
class FileCopy:
    """A file copied from another image into the container."""

    path: str
    source_image: str
    source_path: str


@dataclass(frozen=True)
class ExecutionPlan:
    """Fully resolved container description, ready for an execution engine."""

    image: str
    cache_mounts: Tuple[CacheMount, ...] = ()
    source: Optional[SourceMount] = None
    workdir: str = ""
    env: Mapping[str, str] = field(default_factory=dict, hash=False)
    files: Tuple[FileCopy, ...] = ()
    args: Tuple[str, ...] = ()

    def __post_init__(self):
        # Plans own read-only copies of their collections.
        object.__setattr__(self, "cache_mounts", tuple(self.cache_mounts))
        object.__setattr__(self, "env", MappingProxyType(dict(self.env)))
        object.__setattr__(self, "files", tuple(self.files))
        object.__setattr__(self, "args", tuple(self.args))

    def with_env_variable(self, name: str, value: str) -> "ExecutionPlan":
        env = dict(self.env)
        env[name] = value
        return replace(self, env=env)

    def with_file(self, path: str, source_image: str, source_path: str) -> "ExecutionPlan":
        return replace(self, files=self.files + (FileCopy(path, source_image, source_path),))

    def with_exec(self, args: Sequence[str]) -> "ExecutionPlan":
        return replace(self, args=tuple(args))

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable view of the plan."""
        return {
            "image": self.image,
            "cache_mounts": [{"path": m.path, "key": m.key} for m in self.cache_mounts],
            "source": (
                {"path": self.source.path, "host_path": self.source.host_path}
                if self.source is not None
                else None
            ),
            "workdir": self.workdir,
            "env": dict(sorted(self.env.items())),
            "files": [
                {"path": f.path, "source_image": f.source_image, "source_path": f.source_path}
                for f in self.files
            ],
            "args": list(self.args),
        }


def image_reference(
    repository: str,
    tag: str,
    image: str,
    default_repository: str,
    default_tag: str,
) -> str:
    """Resolve an image reference.

    A full image reference wins. Otherwise ``repository:tag`` is composed,
    falling back to the defaults for whichever part is empty.
    """
    if image:
        return image

    return f"{repository or default_repository}:{tag or default_tag}"


def cache_namespace(image: str) -> str:
    """Return the hex SHA-256 digest of an image reference.

    Used in cache volume names so that different images never share a cache
    and the same image always reuses its cache.
    """
    return hashlib.sha256(image.encode("utf-8")).hexdigest()
