"""Exceptions raised while reading layer adjustments.

Every extraction failure degrades to "value not found" at the public
boundary; these types exist so the intermediate layers can say *why*.
"""

from __future__ import annotations


class AdjustmentError(Exception):
    """Base class for all extraction errors."""


class HostUnavailable(AdjustmentError, RuntimeError):
    """No matching host entity (document/layer), or the host call failed."""


class KeyNotFound(AdjustmentError, KeyError):
    """Descriptor does not contain the requested key."""


class DescriptorTypeError(AdjustmentError, TypeError):
    """Descriptor value has a different type than the caller asked for."""


class IndexOutOfRange(AdjustmentError, IndexError):
    """Positional read past the end of a list or word sequence."""


class MalformedBlob(AdjustmentError, ValueError):
    """Legacy content blob cannot be split into 32-bit words."""


class VersionParseError(AdjustmentError, ValueError):
    """Host version string has non-numeric major/minor components."""
