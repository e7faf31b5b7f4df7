"""TypeID namespace shared by 4-character codes and symbolic names.

The host keys every descriptor entry by a 32-bit TypeID.  Legacy code
addresses them with 4-character codes (``'Lyr '``), newer code with
symbolic names (``'layer'``).  Both spellings land in the same numeric
space:

  * a char code is the big-endian integer of its four Latin-1 bytes
  * a symbolic name with a known char alias resolves to that code's ID
  * any other symbolic name gets a runtime ID, allocated once per name

Only ``resolve_key`` should be used to turn a caller-supplied key into a
TypeID; never compare raw strings or codes directly.
"""

from __future__ import annotations

from typing import Dict, Optional, Union


Key = Union[int, str]

CHAR_CODE_LENGTH = 4
RUNTIME_ID_BASE = 0x0000_1000

# (symbolic name, char code) pairs the host treats as the same TypeID.
KNOWN_ALIASES = (
    ("adjustment", "Adjs"),
    ("brightness", "Brgh"),
    ("contrast", "Cntr"),
    ("document", "Dcmn"),
    ("filter", "Fltr"),
    ("layer", "Lyr "),
    ("level", "Lvl "),
    ("name", "Nm  "),
    ("null", "null"),
    ("ordinal", "Ordn"),
    ("property", "Prpr"),
    ("saturation", "Strt"),
    ("targetEnum", "Trgt"),
    ("threshold", "Thrs"),
)

KNOWN_NAMES = frozenset(name for name, _ in KNOWN_ALIASES)


def charid(code: str) -> int:
    """Return the TypeID for a 4-character legacy code."""

    if not isinstance(code, str) or len(code) != CHAR_CODE_LENGTH:
        raise ValueError(f"char code must be exactly 4 characters, got {code!r}")
    try:
        raw = code.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise ValueError(f"char code must be Latin-1, got {code!r}") from exc
    return int.from_bytes(raw, "big")


class TypeIDRegistry:
    """Bidirectional map between symbolic names and TypeIDs."""

    def __init__(self) -> None:
        self._by_name: Dict[str, int] = {}
        self._by_id: Dict[int, str] = {}
        self._next_runtime_id = RUNTIME_ID_BASE
        for name, code in KNOWN_ALIASES:
            self._bind(name, charid(code))

    def _bind(self, name: str, type_id: int) -> None:
        self._by_name[name] = type_id
        self._by_id.setdefault(type_id, name)

    def stringid(self, name: str) -> int:
        if not isinstance(name, str) or not name:
            raise ValueError(f"symbolic name must be a non-empty string, got {name!r}")
        type_id = self._by_name.get(name)
        if type_id is None:
            type_id = self._next_runtime_id
            self._next_runtime_id += 1
            self._bind(name, type_id)
        return type_id

    def to_stringid(self, type_id: int) -> Optional[str]:
        return self._by_id.get(type_id)


_REGISTRY = TypeIDRegistry()


def stringid(name: str) -> int:
    """Return the TypeID for a symbolic name."""

    return _REGISTRY.stringid(name)


def resolve_key(key: Key) -> int:
    """Canonical key resolution: TypeIDs pass through, strings are symbolic names."""

    if isinstance(key, bool):
        raise TypeError("descriptor keys must be TypeIDs or symbolic names")
    if isinstance(key, int):
        return key
    if isinstance(key, str):
        return stringid(key)
    raise TypeError(f"unsupported descriptor key {key!r}")


def typeid_to_charid(type_id: int) -> Optional[str]:
    """Return the 4-character code for `type_id`, or None if it is a runtime ID."""

    if type_id < RUNTIME_ID_BASE or type_id > 0xFFFF_FFFF:
        return None
    raw = type_id.to_bytes(4, "big")
    if not all(0x20 <= b <= 0x7E for b in raw):
        return None
    return raw.decode("latin-1")


def typeid_to_stringid(type_id: int) -> Optional[str]:
    return _REGISTRY.to_stringid(type_id)


def key_label(type_id: int) -> str:
    """Readable label for logs and dumps: symbolic name, else char code, else hex."""

    name = typeid_to_stringid(type_id)
    if name is not None:
        return name
    code = typeid_to_charid(type_id)
    if code is not None:
        return f"'{code}'"
    return f"0x{type_id:08X}"
