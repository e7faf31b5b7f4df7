"""Host references: selector chains naming the entity a query targets.

A reference carries no data of its own.  It is built by appending
selectors (``put_enumerated``, ``put_property``, ...) and handed to
``Host.query``; nothing keeps it afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from .typeids import Key, key_label, resolve_key


class SelectorForm(Enum):
    ENUMERATED = "enumerated"
    PROPERTY = "property"
    NAME = "name"
    INDEX = "index"
    IDENTIFIER = "identifier"


@dataclass(frozen=True)
class Selector:
    form: SelectorForm
    desired_class: int
    value: Union[int, str]
    enum_type: int = 0  # ENUMERATED only

    def __str__(self) -> str:
        cls = key_label(self.desired_class)
        if self.form is SelectorForm.ENUMERATED:
            return f"{cls}[{key_label(self.enum_type)}={key_label(self.value)}]"  # type: ignore[arg-type]
        if self.form is SelectorForm.PROPERTY:
            return f"{cls}.{key_label(self.value)}"  # type: ignore[arg-type]
        return f"{cls}[{self.form.value}={self.value!r}]"


@dataclass(frozen=True)
class HostReference:
    selectors: Tuple[Selector, ...] = ()

    def _append(self, selector: Selector) -> "HostReference":
        return HostReference(self.selectors + (selector,))

    def put_enumerated(self, desired_class: Key, enum_type: Key, value: Key) -> "HostReference":
        return self._append(
            Selector(
                SelectorForm.ENUMERATED,
                resolve_key(desired_class),
                resolve_key(value),
                enum_type=resolve_key(enum_type),
            )
        )

    def put_property(self, desired_class: Key, key: Key) -> "HostReference":
        return self._append(
            Selector(SelectorForm.PROPERTY, resolve_key(desired_class), resolve_key(key))
        )

    def put_name(self, desired_class: Key, name: str) -> "HostReference":
        return self._append(Selector(SelectorForm.NAME, resolve_key(desired_class), name))

    def put_index(self, desired_class: Key, index: int) -> "HostReference":
        if index < 1:
            raise ValueError(f"reference index is 1-based, got {index}")
        return self._append(Selector(SelectorForm.INDEX, resolve_key(desired_class), index))

    def put_identifier(self, desired_class: Key, identifier: int) -> "HostReference":
        return self._append(
            Selector(SelectorForm.IDENTIFIER, resolve_key(desired_class), identifier)
        )

    @property
    def target(self) -> Selector:
        if not self.selectors:
            raise ValueError("empty reference")
        return self.selectors[0]

    def __str__(self) -> str:
        return " / ".join(str(s) for s in self.selectors) or "<empty>"


def target_layer_reference() -> HostReference:
    """Reference to the current document's active (target) layer."""

    return HostReference().put_enumerated("layer", "ordinal", "targetEnum")


def layer_by_name_reference(name: str) -> HostReference:
    return HostReference().put_name("layer", name)


def current_document_reference() -> HostReference:
    return HostReference().put_enumerated("document", "ordinal", "targetEnum")
