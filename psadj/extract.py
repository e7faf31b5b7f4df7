"""Public entry points for reading a layer's adjustment values.

Each getter activates the requested layer, queries it, and puts the
previous selection back no matter what happened.  The host version
decides between the structured (>= 24.6) and the legacy blob path.
On the legacy path, adjustments applied as smart filters are also read
to fill fields the blobs did not provide; the structured path reports
whatever the host schema holds and nothing else.

Failures never escape: internally every step returns an ``Extraction``
carrying the swallowed errors, which are logged before the result is
collapsed to a not-found value (``-1`` for threshold, ``None`` for the
other scalars and for the aggregate record).
"""

from __future__ import annotations

import logging
from typing import Callable, Hashable, Optional

from .config import DEFAULT_CONFIG, ExtractionConfig
from .descriptor import HostDescriptor
from .errors import AdjustmentError, HostUnavailable
from .host import Host, active_layer
from .legacy import scan_layer_adjustments
from .modern import MODERN_PROPERTY_KEYS, read_modern_property, read_modern_record
from .records import RECORD_FIELDS, AdjustmentRecord, Extraction
from .reference import target_layer_reference
from .smart_filters import scan_smart_filter_adjustments
from .version import ExtractionPath, resolve_path

logger = logging.getLogger(__name__)


def _field(result: Extraction[AdjustmentRecord], name: str) -> Extraction[int]:
    if result.value is None:
        return Extraction.absent(*result.errors)
    value = getattr(result.value, name)
    if value is None:
        return Extraction.absent(*result.errors)
    return Extraction(value, result.errors)


class AdjustmentReader:
    def __init__(self, host: Host, config: ExtractionConfig = DEFAULT_CONFIG) -> None:
        self.host = host
        self.config = config

    def resolve_path(self) -> ExtractionPath:
        return resolve_path(self.host.version, self.config.modern_schema_version)

    def _with_layer(
        self,
        layer: Hashable,
        read: Callable[[HostDescriptor, ExtractionPath], Extraction],
    ) -> Extraction:
        try:
            with active_layer(self.host, layer):
                path = self.resolve_path()
                descriptor = self.host.query(target_layer_reference())
                return read(descriptor, path)
        except AdjustmentError as exc:
            return Extraction.absent(exc)
        except Exception as exc:
            wrapped = HostUnavailable(f"host call failed: {exc}")
            wrapped.__cause__ = exc
            return Extraction.absent(wrapped)

    def _read_property(self, descriptor: HostDescriptor, path: ExtractionPath, name: str) -> Extraction[int]:
        if path is ExtractionPath.MODERN:
            return read_modern_property(descriptor, name)
        if name in RECORD_FIELDS:
            result = _field(
                scan_layer_adjustments(descriptor, pad_partial=self.config.pad_partial_words),
                name,
            )
        else:
            # Legacy blobs carry no brightness/contrast layout.
            return Extraction.absent()

        if result.found or not self.config.include_smart_filters:
            return result
        smart = _field(scan_smart_filter_adjustments(descriptor), name)
        if smart.found:
            return smart.with_errors(*result.errors)
        return result.with_errors(*smart.errors)

    def _read_record(self, descriptor: HostDescriptor, path: ExtractionPath) -> Extraction[AdjustmentRecord]:
        if path is ExtractionPath.MODERN:
            return read_modern_record(descriptor)
        result = scan_layer_adjustments(descriptor, pad_partial=self.config.pad_partial_words)

        if not self.config.include_smart_filters:
            return result
        smart = scan_smart_filter_adjustments(descriptor)
        errors = result.errors + smart.errors
        if result.value is None:
            return Extraction(smart.value, errors)
        if smart.value is None:
            return Extraction(result.value, errors)
        return Extraction(result.value.fill_missing(smart.value), errors)

    def read_property(self, layer: Hashable, name: str) -> Extraction[int]:
        """Read one property, keeping the errors that were swallowed."""
        if name not in MODERN_PROPERTY_KEYS:
            raise ValueError(f"unknown adjustment property {name!r}")
        result = self._with_layer(layer, lambda d, p: self._read_property(d, p, name))
        self._log(layer, name, result)
        return result

    def read_adjustments(self, layer: Hashable) -> Extraction[AdjustmentRecord]:
        result = self._with_layer(layer, self._read_record)
        if result.value is not None and result.value.is_empty:
            result = Extraction.absent(*result.errors)
        self._log(layer, "adjustments", result)
        return result

    def _log(self, layer: Hashable, what: str, result: Extraction) -> None:
        if not result.found:
            logger.debug("layer %r: %s not found", layer, what)
        for exc in result.errors:
            logger.debug("layer %r: %s lookup error: %s: %s", layer, what, type(exc).__name__, exc)

    def get_threshold(self, layer: Hashable) -> int:
        value = self.read_property(layer, "threshold").value
        return self.config.threshold_not_found if value is None else value

    def get_contrast(self, layer: Hashable) -> Optional[int]:
        return self.read_property(layer, "contrast").value

    def get_brightness(self, layer: Hashable) -> Optional[int]:
        return self.read_property(layer, "brightness").value

    def get_vibrance(self, layer: Hashable) -> Optional[int]:
        return self.read_property(layer, "vibrance").value

    def get_saturation(self, layer: Hashable) -> Optional[int]:
        return self.read_property(layer, "saturation").value

    def get_adjustments(self, layer: Hashable) -> Optional[AdjustmentRecord]:
        return self.read_adjustments(layer).value


def get_threshold(host: Host, layer: Hashable) -> int:
    return AdjustmentReader(host).get_threshold(layer)


def get_contrast(host: Host, layer: Hashable) -> Optional[int]:
    return AdjustmentReader(host).get_contrast(layer)


def get_brightness(host: Host, layer: Hashable) -> Optional[int]:
    return AdjustmentReader(host).get_brightness(layer)


def get_vibrance(host: Host, layer: Hashable) -> Optional[int]:
    return AdjustmentReader(host).get_vibrance(layer)


def get_saturation(host: Host, layer: Hashable) -> Optional[int]:
    return AdjustmentReader(host).get_saturation(layer)


def get_adjustments(host: Host, layer: Hashable) -> Optional[AdjustmentRecord]:
    return AdjustmentReader(host).get_adjustments(layer)
