"""Adjustment scan for hosts older than 24.6.

Walks the active layer's ``Adjs`` list, classifies each entry by its
object-type tag and decodes the ``legacyContentData`` blob with the
layout tied to that tag.  Every entry is visited; when a field appears
more than once the last entry wins.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from .descriptor import HostDescriptor, ValueType
from .errors import AdjustmentError
from .legacy_blob import decode_threshold_blob, decode_vibrance_blob
from .records import AdjustmentRecord, Extraction
from .typeids import charid, stringid


ADJUSTMENTS_KEY = charid("Adjs")
LEGACY_CONTENT_KEY = stringid("legacyContentData")
VIBRANCE_TAG = stringid("vibrance")
THRESHOLD_TAG = charid("Thrs")

Decoder = Callable[..., Dict[str, int]]

DECODERS: Dict[int, Decoder] = {
    VIBRANCE_TAG: decode_vibrance_blob,
    THRESHOLD_TAG: decode_threshold_blob,
}


def scan_layer_adjustments(
    descriptor: HostDescriptor, *, pad_partial: bool = False
) -> Extraction[AdjustmentRecord]:
    if not descriptor.has_key(ADJUSTMENTS_KEY):
        return Extraction.absent()

    errors: List[Exception] = []
    values: Dict[str, int] = {}
    try:
        adjustments = descriptor.get_list(ADJUSTMENTS_KEY)
    except AdjustmentError as exc:
        return Extraction.absent(exc)

    for index in range(adjustments.count):
        if adjustments.get_type(index) is not ValueType.OBJECT:
            continue
        decoder = DECODERS.get(adjustments.get_object_type(index))
        if decoder is None:
            continue
        entry = adjustments.get_object_value(index)
        if not entry.has_key(LEGACY_CONTENT_KEY):
            continue
        try:
            blob = entry.get_data(LEGACY_CONTENT_KEY)
            # Fields past the end of the blob are reported one by one.
            values.update(decoder(blob, pad_partial=pad_partial, errors=errors))
        except AdjustmentError as exc:
            # An unreadable blob costs this entry's fields.
            errors.append(exc)

    if not values:
        return Extraction.absent(*errors)
    return Extraction(AdjustmentRecord(**values), tuple(errors))
