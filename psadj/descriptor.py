"""Read-only access to host descriptors and lists.

A descriptor is the host's self-describing key/value snapshot of an
entity.  Values are a tagged union; every typed getter checks the tag
before returning, so a caller never silently reads an object as an int.

Snapshots are immutable.  Building a descriptor (for host commands or
tests) goes through ``DescriptorBuilder`` / ``ListBuilder``, which hand
back fresh frozen objects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, NamedTuple, Optional, Tuple

from .errors import AdjustmentError, DescriptorTypeError, IndexOutOfRange, KeyNotFound
from .typeids import Key, key_label, resolve_key, typeid_to_charid, typeid_to_stringid

logger = logging.getLogger(__name__)


class ValueType(Enum):
    STRING = "string"
    INTEGER = "integer"
    DOUBLE = "double"
    UNIT_DOUBLE = "unitDouble"
    BOOLEAN = "boolean"
    ENUMERATED = "enumerated"
    LIST = "list"
    OBJECT = "object"
    RAW = "raw"


@dataclass(frozen=True)
class DescriptorValue:
    type: ValueType
    value: object
    object_type: Optional[int] = None  # class TypeID, OBJECT values only


class Bounds(NamedTuple):
    left: float
    top: float
    right: float
    bottom: float
    width: float
    height: float


def _expect(value: DescriptorValue, expected: ValueType, where: str) -> object:
    if value.type is not expected:
        raise DescriptorTypeError(
            f"{where}: expected {expected.value}, found {value.type.value}"
        )
    return value.value


class HostDescriptor:
    """Ordered, read-only mapping TypeID -> DescriptorValue."""

    __slots__ = ("_items",)

    def __init__(self, items: Tuple[Tuple[int, DescriptorValue], ...] = ()) -> None:
        seen: Dict[int, DescriptorValue] = {}
        for type_id, value in items:
            if type_id in seen:
                raise ValueError(f"duplicate descriptor key {key_label(type_id)}")
            seen[type_id] = value
        self._items = seen

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)

    def __repr__(self) -> str:
        keys = ", ".join(key_label(k) for k in self._items)
        return f"HostDescriptor({keys})"

    @property
    def count(self) -> int:
        return len(self._items)

    def keys(self) -> List[int]:
        return list(self._items)

    def has_key(self, key: Key) -> bool:
        return resolve_key(key) in self._items

    def get(self, key: Key) -> DescriptorValue:
        type_id = resolve_key(key)
        try:
            return self._items[type_id]
        except KeyError:
            raise KeyNotFound(key_label(type_id)) from None

    def get_type(self, key: Key) -> ValueType:
        return self.get(key).type

    def _typed(self, key: Key, expected: ValueType) -> object:
        return _expect(self.get(key), expected, key_label(resolve_key(key)))

    def get_integer(self, key: Key) -> int:
        return self._typed(key, ValueType.INTEGER)  # type: ignore[return-value]

    def get_double(self, key: Key) -> float:
        return self._typed(key, ValueType.DOUBLE)  # type: ignore[return-value]

    def get_unit_double(self, key: Key) -> float:
        return self._typed(key, ValueType.UNIT_DOUBLE)  # type: ignore[return-value]

    def get_string(self, key: Key) -> str:
        return self._typed(key, ValueType.STRING)  # type: ignore[return-value]

    def get_boolean(self, key: Key) -> bool:
        return self._typed(key, ValueType.BOOLEAN)  # type: ignore[return-value]

    def get_enumerated(self, key: Key) -> int:
        return self._typed(key, ValueType.ENUMERATED)  # type: ignore[return-value]

    def get_list(self, key: Key) -> "DescriptorList":
        return self._typed(key, ValueType.LIST)  # type: ignore[return-value]

    def get_object_value(self, key: Key) -> "HostDescriptor":
        return self._typed(key, ValueType.OBJECT)  # type: ignore[return-value]

    def get_object_type(self, key: Key) -> int:
        value = self.get(key)
        _expect(value, ValueType.OBJECT, key_label(resolve_key(key)))
        return value.object_type  # type: ignore[return-value]

    def get_data(self, key: Key) -> bytes:
        return self._typed(key, ValueType.RAW)  # type: ignore[return-value]

    def get_enumeration_string(self, key: Key) -> str:
        """Enumerated value as its symbolic name, falling back to the char code."""
        value = self.get_enumerated(key)
        name = typeid_to_stringid(value)
        if name is not None:
            return name
        code = typeid_to_charid(value)
        return code if code is not None else f"0x{value:08X}"

    def get_bounds(self) -> Bounds:
        """Read the ``bounds`` object (unit doubles) with derived width/height."""
        box = self.get_object_value("bounds")
        left = box.get_unit_double("left")
        top = box.get_unit_double("top")
        right = box.get_unit_double("right")
        bottom = box.get_unit_double("bottom")
        return Bounds(left, top, right, bottom, right - left, bottom - top)


Predicate = Callable[[HostDescriptor], bool]


class DescriptorList:
    """Ordered, read-only list of DescriptorValue (positional, 0-based)."""

    __slots__ = ("_values",)

    def __init__(self, values: Tuple[DescriptorValue, ...] = ()) -> None:
        self._values = tuple(values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[DescriptorValue]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"DescriptorList(count={len(self._values)})"

    @property
    def count(self) -> int:
        return len(self._values)

    def get(self, index: int) -> DescriptorValue:
        if not 0 <= index < len(self._values):
            raise IndexOutOfRange(
                f"list index {index} out of range for {len(self._values)} entries"
            )
        return self._values[index]

    def get_type(self, index: int) -> ValueType:
        return self.get(index).type

    def _typed(self, index: int, expected: ValueType) -> object:
        return _expect(self.get(index), expected, f"[{index}]")

    def get_integer(self, index: int) -> int:
        return self._typed(index, ValueType.INTEGER)  # type: ignore[return-value]

    def get_string(self, index: int) -> str:
        return self._typed(index, ValueType.STRING)  # type: ignore[return-value]

    def get_list(self, index: int) -> "DescriptorList":
        return self._typed(index, ValueType.LIST)  # type: ignore[return-value]

    def get_object_value(self, index: int) -> HostDescriptor:
        return self._typed(index, ValueType.OBJECT)  # type: ignore[return-value]

    def get_object_type(self, index: int) -> int:
        value = self.get(index)
        _expect(value, ValueType.OBJECT, f"[{index}]")
        return value.object_type  # type: ignore[return-value]

    def get_data(self, index: int) -> bytes:
        return self._typed(index, ValueType.RAW)  # type: ignore[return-value]

    def objects(self) -> Iterator[HostDescriptor]:
        """Yield the OBJECT entries in order, skipping every other type."""
        for value in self._values:
            if value.type is ValueType.OBJECT:
                yield value.value  # type: ignore[misc]

    def all_where(self, predicate: Predicate) -> List[HostDescriptor]:
        """Object entries for which `predicate` holds.

        An entry whose predicate fails a descriptor lookup (missing key,
        wrong type) counts as a non-match.
        """
        matches = []
        for obj in self.objects():
            try:
                if predicate(obj):
                    matches.append(obj)
            except AdjustmentError:
                continue
        return matches

    def first_where(self, predicate: Predicate) -> Optional[HostDescriptor]:
        for obj in self.objects():
            try:
                if predicate(obj):
                    return obj
            except AdjustmentError:
                continue
        return None

    def single_where(self, predicate: Predicate) -> Optional[HostDescriptor]:
        """The one matching object entry; None when zero or several match."""
        matches = self.all_where(predicate)
        if len(matches) != 1:
            logger.warning("single_where: expected one match, found %d", len(matches))
            return None
        return matches[0]


def _check_int(value: object, where: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{where} must be an integer")
    return value


class DescriptorBuilder:
    """Accumulates entries for a fresh descriptor; ``build()`` freezes it."""

    def __init__(self) -> None:
        self._items: List[Tuple[int, DescriptorValue]] = []

    def _put(self, key: Key, value: DescriptorValue) -> "DescriptorBuilder":
        self._items.append((resolve_key(key), value))
        return self

    def put_string(self, key: Key, value: str) -> "DescriptorBuilder":
        return self._put(key, DescriptorValue(ValueType.STRING, str(value)))

    def put_integer(self, key: Key, value: int) -> "DescriptorBuilder":
        return self._put(key, DescriptorValue(ValueType.INTEGER, _check_int(value, "integer")))

    def put_double(self, key: Key, value: float) -> "DescriptorBuilder":
        return self._put(key, DescriptorValue(ValueType.DOUBLE, float(value)))

    def put_unit_double(self, key: Key, value: float) -> "DescriptorBuilder":
        return self._put(key, DescriptorValue(ValueType.UNIT_DOUBLE, float(value)))

    def put_boolean(self, key: Key, value: bool) -> "DescriptorBuilder":
        return self._put(key, DescriptorValue(ValueType.BOOLEAN, bool(value)))

    def put_enumerated(self, key: Key, value: Key) -> "DescriptorBuilder":
        return self._put(key, DescriptorValue(ValueType.ENUMERATED, resolve_key(value)))

    def put_list(self, key: Key, value: DescriptorList) -> "DescriptorBuilder":
        return self._put(key, DescriptorValue(ValueType.LIST, value))

    def put_object(self, key: Key, object_type: Key, value: HostDescriptor) -> "DescriptorBuilder":
        return self._put(
            key,
            DescriptorValue(ValueType.OBJECT, value, object_type=resolve_key(object_type)),
        )

    def put_data(self, key: Key, value: bytes) -> "DescriptorBuilder":
        return self._put(key, DescriptorValue(ValueType.RAW, bytes(value)))

    def build(self) -> HostDescriptor:
        return HostDescriptor(tuple(self._items))


class ListBuilder:
    def __init__(self) -> None:
        self._values: List[DescriptorValue] = []

    def _put(self, value: DescriptorValue) -> "ListBuilder":
        self._values.append(value)
        return self

    def put_string(self, value: str) -> "ListBuilder":
        return self._put(DescriptorValue(ValueType.STRING, str(value)))

    def put_integer(self, value: int) -> "ListBuilder":
        return self._put(DescriptorValue(ValueType.INTEGER, _check_int(value, "integer")))

    def put_double(self, value: float) -> "ListBuilder":
        return self._put(DescriptorValue(ValueType.DOUBLE, float(value)))

    def put_unit_double(self, value: float) -> "ListBuilder":
        return self._put(DescriptorValue(ValueType.UNIT_DOUBLE, float(value)))

    def put_boolean(self, value: bool) -> "ListBuilder":
        return self._put(DescriptorValue(ValueType.BOOLEAN, bool(value)))

    def put_enumerated(self, value: Key) -> "ListBuilder":
        return self._put(DescriptorValue(ValueType.ENUMERATED, resolve_key(value)))

    def put_list(self, value: DescriptorList) -> "ListBuilder":
        return self._put(DescriptorValue(ValueType.LIST, value))

    def put_object(self, object_type: Key, value: HostDescriptor) -> "ListBuilder":
        return self._put(
            DescriptorValue(ValueType.OBJECT, value, object_type=resolve_key(object_type))
        )

    def put_data(self, value: bytes) -> "ListBuilder":
        return self._put(DescriptorValue(ValueType.RAW, bytes(value)))

    def build(self) -> DescriptorList:
        return DescriptorList(tuple(self._values))
