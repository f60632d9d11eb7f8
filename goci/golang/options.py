"""
Option model for Go pipelines.

Options are small immutable values that mutate a configuration record when
applied. Each option declares which pipeline kinds it can configure by
deriving from one or more of the capability classes:

- BaseOption: configures a BaseOptions record (``apply_base``)
- GoTestOption: configures a GoTestOptions record (``apply_test``)
- LintOption: configures a LintOptions record (``apply_lint``)

Options deriving from Option configure every pipeline kind, which lets a
single list of shared options (image, CGO, project root) be passed to base,
test and lint assemblies alike.

Options are applied strictly left to right. Later options win when they set
the same field. Nothing is validated while applying; resolution into a plan
decides what a combination means.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Optional, Type, TypeVar

from ..errors import UnsupportedOptionError

logger = logging.getLogger("goci")

R = TypeVar("R")


@dataclass
class BaseOptions:
    """Configuration record shared by every Go pipeline."""

    base_image_repository: str = ""
    base_image_tag: str = ""
    base_image: str = ""

    project_root: str = ""

    # None means "let the Go toolchain decide"
    cgo_enabled: Optional[bool] = None

    def has_cgo_value(self) -> bool:
        """Return True if a CGO preference was set explicitly."""
        return self.cgo_enabled is not None

    def cgo_value(self) -> str:
        """Return the CGO_ENABLED value for the preference, or an empty string if unset."""
        if self.cgo_enabled is None:
            return ""
        return "1" if self.cgo_enabled else "0"


class CoverMode(IntEnum):
    """Coverage mode for ``go test``.

    A CoverMode member is itself a test option, so ``CoverMode.COUNT`` can be
    passed straight to the test assembly.
    """

    UNDEFINED = 0
    SET = 1
    COUNT = 2
    ATOMIC = 3

    def is_valid(self) -> bool:
        """Return True for modes that render to a ``-covermode`` flag."""
        return CoverMode.UNDEFINED < self <= CoverMode.ATOMIC

    def __str__(self) -> str:
        if self.is_valid():
            return self.name.lower()
        return ""

    @classmethod
    def parse(cls, value: Optional[str]) -> "CoverMode":
        """Map a mode name to a CoverMode.

        Unknown or empty names map to UNDEFINED instead of raising, so an
        unusable mode degrades to "no coverage flag".
        """
        if not value:
            return cls.UNDEFINED
        try:
            return cls[value.strip().upper()]
        except KeyError:
            logger.debug("Unknown cover mode %r, ignoring", value)
            return cls.UNDEFINED

    def apply_test(self, options: "GoTestOptions") -> None:
        options.cover_mode = self


@dataclass
class GoTestOptions:
    """Configuration record for ``go test`` pipelines."""

    base: BaseOptions = field(default_factory=BaseOptions)

    verbose: bool = False
    race_detector_enabled: bool = False
    cover_mode: CoverMode = CoverMode.UNDEFINED
    cover_profile: str = ""


@dataclass
class LintOptions:
    """Configuration record for golangci-lint pipelines."""

    base: BaseOptions = field(default_factory=BaseOptions)

    source_image_repository: str = ""
    source_image_tag: str = ""
    source_image: str = ""


class BaseOption(ABC):
    """Configures base parameters."""

    @abstractmethod
    def apply_base(self, options: BaseOptions) -> None:
        pass


class GoTestOption(ABC):
    """Configures test parameters."""

    @abstractmethod
    def apply_test(self, options: GoTestOptions) -> None:
        pass


class LintOption(ABC):
    """Configures lint parameters."""

    @abstractmethod
    def apply_lint(self, options: LintOptions) -> None:
        pass


GoTestOption.register(CoverMode)


class Option(BaseOption, GoTestOption, LintOption):
    """Configures common parameters of every pipeline kind."""

    def apply_test(self, options: GoTestOptions) -> None:
        self.apply_base(options.base)

    def apply_lint(self, options: LintOptions) -> None:
        self.apply_base(options.base)


@dataclass(frozen=True)
class BaseImageRepository(Option):
    """Image repository to use as a base image for Go operations.

    The value should follow the OCI content addressable format, without a tag
    or digest. Ignored when a full image reference is given with BaseImage.
    """

    value: str

    def apply_base(self, options: BaseOptions) -> None:
        options.base_image_repository = self.value


@dataclass(frozen=True)
class BaseImageTag(Option):
    """Tag from the image repository to use as a base image for Go operations.

    Ignored when a full image reference is given with BaseImage.
    """

    value: str

    def apply_base(self, options: BaseOptions) -> None:
        options.base_image_tag = self.value


# Version reads better at call sites that pin a Go release.
Version = BaseImageTag


@dataclass(frozen=True)
class BaseImage(Option):
    """Full image reference to use as a base image for Go operations."""

    value: str

    def apply_base(self, options: BaseOptions) -> None:
        options.base_image = self.value


@dataclass(frozen=True)
class EnableCgo(Option):
    """Set CGO_ENABLED to 1."""

    def apply_base(self, options: BaseOptions) -> None:
        options.cgo_enabled = True


@dataclass(frozen=True)
class DisableCgo(Option):
    """Set CGO_ENABLED to 0."""

    def apply_base(self, options: BaseOptions) -> None:
        options.cgo_enabled = False


@dataclass(frozen=True)
class ProjectRoot(Option):
    """Mount an alternate project root (relative or absolute host path)."""

    value: str

    def apply_base(self, options: BaseOptions) -> None:
        options.project_root = self.value


@dataclass(frozen=True)
class Verbose(GoTestOption):
    """Toggle verbose test output."""

    enabled: bool = True

    def apply_test(self, options: GoTestOptions) -> None:
        options.verbose = self.enabled


@dataclass(frozen=True)
class EnableRaceDetector(GoTestOption):
    """Enable the race detector. Implies CGO_ENABLED=1."""

    def apply_test(self, options: GoTestOptions) -> None:
        options.race_detector_enabled = True


@dataclass(frozen=True)
class CoverProfile(GoTestOption):
    """Output file for coverage information."""

    path: str

    def apply_test(self, options: GoTestOptions) -> None:
        options.cover_profile = self.path


@dataclass(frozen=True)
class SourceImageRepository(LintOption):
    """Image repository to copy the golangci-lint binary from.

    Ignored when a full image reference is given with SourceImage.
    """

    value: str

    def apply_lint(self, options: LintOptions) -> None:
        options.source_image_repository = self.value


@dataclass(frozen=True)
class SourceImageTag(LintOption):
    """Tag of the image to copy the golangci-lint binary from.

    Ignored when a full image reference is given with SourceImage.
    """

    value: str

    def apply_lint(self, options: LintOptions) -> None:
        options.source_image_tag = self.value


LinterVersion = SourceImageTag


@dataclass(frozen=True)
class SourceImage(LintOption):
    """Full image reference to copy the golangci-lint binary from."""

    value: str

    def apply_lint(self, options: LintOptions) -> None:
        options.source_image = self.value


def _fold(record: R, opts: Iterable[object], capability: Type, method: str, pipeline: str) -> R:
    opts = list(opts)
    for opt in opts:
        if not isinstance(opt, capability):
            raise UnsupportedOptionError(opt, pipeline)

    for opt in opts:
        getattr(opt, method)(record)

    return record


def base_options(*opts: BaseOption) -> BaseOptions:
    """Apply options, in order, to an empty BaseOptions record."""
    return _fold(BaseOptions(), opts, BaseOption, "apply_base", "base")


def gotest_options(*opts: GoTestOption) -> GoTestOptions:
    """Apply options, in order, to an empty GoTestOptions record."""
    return _fold(GoTestOptions(), opts, GoTestOption, "apply_test", "test")


def lint_options(*opts: LintOption) -> LintOptions:
    """Apply options, in order, to an empty LintOptions record."""
    return _fold(LintOptions(), opts, LintOption, "apply_lint", "lint")
