"""Adjustments applied as smart filters.

Path: layer -> ``smartObject`` -> ``filterFX`` (list) -> entry object ->
``Fltr`` object.  Smart filters carry structured integer properties on
every host version, so no blob decoding happens here.

A threshold-tagged filter is only trusted when it carries the ``Lvl ``
key; other filters reuse the same tag.
"""

from __future__ import annotations

from typing import Dict, List

from .descriptor import HostDescriptor
from .errors import AdjustmentError
from .records import AdjustmentRecord, Extraction
from .typeids import charid, stringid


SMART_OBJECT_KEY = stringid("smartObject")
FILTER_FX_KEY = stringid("filterFX")
FILTER_KEY = charid("Fltr")
VIBRANCE_TAG = stringid("vibrance")
THRESHOLD_TAG = charid("Thrs")
VIBRANCE_KEY = stringid("vibrance")
SATURATION_KEY = charid("Strt")
LEVEL_KEY = charid("Lvl ")


FILTER_FIELDS = {
    VIBRANCE_TAG: (("vibrance", VIBRANCE_KEY), ("saturation", SATURATION_KEY)),
    THRESHOLD_TAG: (("threshold", LEVEL_KEY),),
}


def _read_filter(
    filter_type: int, filter_obj: HostDescriptor, values: Dict[str, int], errors: List[Exception]
) -> None:
    if filter_type == THRESHOLD_TAG and not filter_obj.has_key(LEVEL_KEY):
        return
    for name, key in FILTER_FIELDS.get(filter_type, ()):
        try:
            values[name] = filter_obj.get_integer(key)
        except AdjustmentError as exc:
            errors.append(exc)


def scan_smart_filter_adjustments(descriptor: HostDescriptor) -> Extraction[AdjustmentRecord]:
    if not descriptor.has_key(SMART_OBJECT_KEY):
        return Extraction.absent()

    errors: List[Exception] = []
    values: Dict[str, int] = {}
    try:
        smart = descriptor.get_object_value(SMART_OBJECT_KEY)
        if not smart.has_key(FILTER_FX_KEY):
            return Extraction.absent()
        effects = smart.get_list(FILTER_FX_KEY)
    except AdjustmentError as exc:
        return Extraction.absent(exc)

    for wrapper in effects.all_where(lambda entry: entry.has_key(FILTER_KEY)):
        try:
            filter_type = wrapper.get_object_type(FILTER_KEY)
            filter_obj = wrapper.get_object_value(FILTER_KEY)
        except AdjustmentError as exc:
            errors.append(exc)
            continue
        _read_filter(filter_type, filter_obj, values, errors)

    if not values:
        return Extraction.absent(*errors)
    return Extraction(AdjustmentRecord(**values), tuple(errors))
