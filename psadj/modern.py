"""Structured adjustment reads for hosts >= 24.6.

Modern hosts list the layer's adjustments under ``adjustment``; the
first entry is an object whose properties are plain integers.  There is
no fallback decoding on this path.
"""

from __future__ import annotations

from .descriptor import HostDescriptor, ValueType
from .errors import AdjustmentError, DescriptorTypeError, KeyNotFound
from .records import RECORD_FIELDS, AdjustmentRecord, Extraction


ADJUSTMENT_LIST_KEY = "adjustment"

# Public property name -> key inside the adjustment object.
MODERN_PROPERTY_KEYS = {
    "threshold": "level",
    "vibrance": "vibrance",
    "saturation": "saturation",
    "brightness": "brightness",
    "contrast": "contrast",
}


def read_modern_property(descriptor: HostDescriptor, name: str) -> Extraction[int]:
    """Read one integer property from the first entry of the adjustment list."""
    try:
        key = MODERN_PROPERTY_KEYS[name]
    except KeyError:
        raise ValueError(f"unknown adjustment property {name!r}") from None

    if not descriptor.has_key(ADJUSTMENT_LIST_KEY):
        return Extraction.absent(KeyNotFound(ADJUSTMENT_LIST_KEY))
    try:
        adjustments = descriptor.get_list(ADJUSTMENT_LIST_KEY)
        if adjustments.count == 0:
            return Extraction.absent()
        entry = adjustments.get_object_value(0)
        if not entry.has_key(key):
            return Extraction.absent(KeyNotFound(key))
        if entry.get_type(key) is not ValueType.INTEGER:
            return Extraction.absent(
                DescriptorTypeError(f"{key}: expected integer, found {entry.get_type(key).value}")
            )
        return Extraction(entry.get_integer(key))
    except AdjustmentError as exc:
        return Extraction.absent(exc)


def read_modern_record(descriptor: HostDescriptor) -> Extraction[AdjustmentRecord]:
    values = {}
    errors = []
    for name in RECORD_FIELDS:
        result = read_modern_property(descriptor, name)
        errors.extend(result.errors)
        if result.found:
            values[name] = result.value
    if not values:
        return Extraction.absent(*errors)
    return Extraction(AdjustmentRecord(**values), tuple(errors))
