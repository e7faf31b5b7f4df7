"""Host version parsing and the modern/legacy path gate."""

from __future__ import annotations

import logging
from enum import Enum
from typing import NamedTuple

from .errors import VersionParseError

logger = logging.getLogger(__name__)


class HostVersion(NamedTuple):
    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


class ExtractionPath(Enum):
    MODERN = "modern"
    LEGACY = "legacy"


# First host release without legacyContentData on adjustment objects.
MODERN_SCHEMA_VERSION = HostVersion(24, 6)


def _component(text: str, *, where: str) -> int:
    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        raise VersionParseError(f"{where} component {text!r} is not numeric")
    return int(text)


def parse_host_version(text: str) -> HostVersion:
    """Parse ``"major.minor[.patch...]"``; anything past minor is ignored."""

    if not isinstance(text, str):
        raise VersionParseError(f"version must be a string, got {type(text).__name__}")
    parts = text.strip().split(".")
    major = _component(parts[0], where="major")
    minor = _component(parts[1], where="minor") if len(parts) > 1 else 0
    return HostVersion(major, minor)


def resolve_path(
    version_text: str, threshold: HostVersion = MODERN_SCHEMA_VERSION
) -> ExtractionPath:
    """Pick the extraction path for a host version string.

    Unparsable versions fall back to LEGACY, which is stable on every
    older host.
    """
    try:
        version = parse_host_version(version_text)
    except VersionParseError as exc:
        logger.warning("unparsable host version %r, using legacy path: %s", version_text, exc)
        return ExtractionPath.LEGACY
    if version >= threshold:
        return ExtractionPath.MODERN
    return ExtractionPath.LEGACY
