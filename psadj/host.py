"""Host collaborator interface and an in-memory snapshot host.

The extraction core only needs four things from the host: a descriptor
query, the active-layer selection (read and write), and the version
string.  ``SnapshotHost`` provides them from recorded descriptors so the
core can run offline against dumps and in tests.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, Mapping, Optional, Protocol

from .descriptor import HostDescriptor
from .errors import HostUnavailable
from .reference import (
    HostReference,
    SelectorForm,
    current_document_reference,
    layer_by_name_reference,
)
from .typeids import stringid

logger = logging.getLogger(__name__)


class Host(Protocol):
    @property
    def version(self) -> str: ...

    def query(self, reference: HostReference) -> HostDescriptor: ...

    def get_active_layer(self) -> Optional[Hashable]: ...

    def set_active_layer(self, layer: Optional[Hashable]) -> None: ...


@contextmanager
def active_layer(host: Host, layer: Hashable) -> Iterator[None]:
    """Make `layer` the active layer for the duration of the block.

    The host can only be queried about "the active layer", so callers
    switch selection around each query.  The previous selection is put
    back on every exit path, including when activation itself fails.
    A failed restore is logged and does not replace the block's outcome.
    """

    previous = host.get_active_layer()
    try:
        host.set_active_layer(layer)
        yield
    finally:
        try:
            host.set_active_layer(previous)
        except Exception:
            logger.warning("could not restore active layer %r", previous, exc_info=True)


def for_layer_by_name(host: Host, name: str) -> HostDescriptor:
    """Descriptor of the layer called `name`, without touching the selection."""
    return host.query(layer_by_name_reference(name))


def for_current_document(host: Host) -> HostDescriptor:
    return host.query(current_document_reference())


class SnapshotHost:
    """Host backed by a fixed mapping of layer name -> descriptor."""

    def __init__(
        self,
        layers: Mapping[Hashable, HostDescriptor],
        *,
        version: str = "24.6.0",
        active: Optional[Hashable] = None,
        document: Optional[HostDescriptor] = None,
    ) -> None:
        self._layers: Dict[Hashable, HostDescriptor] = dict(layers)
        self._version = version
        if active is not None and active not in self._layers:
            raise ValueError(f"unknown active layer {active!r}")
        self._active = active
        self._document = document

    @property
    def version(self) -> str:
        return self._version

    @property
    def layers(self) -> list:
        return list(self._layers)

    def get_active_layer(self) -> Optional[Hashable]:
        return self._active

    def set_active_layer(self, layer: Optional[Hashable]) -> None:
        if layer is not None and layer not in self._layers:
            raise HostUnavailable(f"no layer named {layer!r}")
        self._active = layer

    def _query_document(self, reference: HostReference) -> HostDescriptor:
        target = reference.target
        if target.form is not SelectorForm.ENUMERATED or target.value != stringid("targetEnum"):
            raise HostUnavailable(f"unsupported reference {reference}")
        if self._document is None:
            raise HostUnavailable("no open document")
        return self._document

    def query(self, reference: HostReference) -> HostDescriptor:
        target = reference.target
        if target.desired_class == stringid("document"):
            return self._query_document(reference)
        if target.desired_class != stringid("layer"):
            raise HostUnavailable(f"unsupported reference {reference}")

        if target.form is SelectorForm.ENUMERATED and target.value == stringid("targetEnum"):
            if self._active is None:
                raise HostUnavailable("no active layer")
            return self._layers[self._active]
        if target.form is SelectorForm.NAME:
            try:
                return self._layers[target.value]
            except KeyError:
                raise HostUnavailable(f"no layer named {target.value!r}") from None
        raise HostUnavailable(f"unsupported reference {reference}")
