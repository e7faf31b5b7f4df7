"""Load and describe recorded descriptor dumps.

The host's descriptor dump is XML.  Each entry element names its key in
``sym`` (a 4-character code or a symbolic name) and carries its value in
a type-specific attribute:

  <ActionDescriptor count="3">
      <String symname="Name" sym="Nm  " string="Vibrance 1"></String>
      <List symname="Adjustment" sym="Adjs" count="1">
          <Object objectTypeString="Threshold" objectType="Thrs" count="1">
              <Raw symname="legacyContentData" sym="legacyContentData">00A00000</Raw>
          </Object>
      </List>
  </ActionDescriptor>

Raw payloads are whitespace-separated hex.  A ``sym`` or ``objectType``
of exactly four characters is read as a char code unless it is a known
alias name such as ``name``; anything else is a symbolic name.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Union

from .descriptor import (
    DescriptorBuilder,
    DescriptorList,
    HostDescriptor,
    ListBuilder,
    ValueType,
)
from .typeids import CHAR_CODE_LENGTH, KNOWN_NAMES, charid, key_label, stringid


DESCRIPTOR_TAGS = {"ActionDescriptor", "Descriptor"}
BOOLEAN_TEXT = {"true": True, "false": False, "1": True, "0": False}


def _dump_key(text: str) -> int:
    if len(text) == CHAR_CODE_LENGTH and text not in KNOWN_NAMES:
        return charid(text)
    return stringid(text)


def _require_attr(elem: ET.Element, name: str) -> str:
    value = elem.get(name)
    if value is None:
        raise ValueError(f"<{elem.tag}> missing attribute {name!r}")
    return value


def _parse_int(text: str, *, where: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"{where}: invalid integer {text!r}") from None


def _parse_float(text: str, *, where: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"{where}: invalid number {text!r}") from None


def _parse_raw(elem: ET.Element) -> bytes:
    text = "".join((elem.text or "").split())
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise ValueError(f"<Raw> payload is not hex: {text[:32]!r}") from None


def _object_type(elem: ET.Element) -> int:
    return _dump_key(_require_attr(elem, "objectType"))


def _parse_descriptor_body(elem: ET.Element) -> HostDescriptor:
    builder = DescriptorBuilder()
    for child in elem:
        key = _dump_key(_require_attr(child, "sym"))
        _put_entry(builder, key, child)
    return builder.build()


def _put_entry(builder: DescriptorBuilder, key: int, elem: ET.Element) -> None:
    tag = elem.tag
    where = f"<{tag} sym={elem.get('sym')!r}>"
    if tag == "String":
        builder.put_string(key, _require_attr(elem, "string"))
    elif tag == "Integer":
        builder.put_integer(key, _parse_int(_require_attr(elem, "integer"), where=where))
    elif tag == "Double":
        builder.put_double(key, _parse_float(_require_attr(elem, "double"), where=where))
    elif tag == "UnitDouble":
        builder.put_unit_double(
            key, _parse_float(_require_attr(elem, "unitDoubleValue"), where=where)
        )
    elif tag == "Boolean":
        raw = _require_attr(elem, "boolean").lower()
        if raw not in BOOLEAN_TEXT:
            raise ValueError(f"{where}: invalid boolean {raw!r}")
        builder.put_boolean(key, BOOLEAN_TEXT[raw])
    elif tag == "Enumerated":
        builder.put_enumerated(key, _dump_key(_require_attr(elem, "enumeratedValue")))
    elif tag == "List":
        builder.put_list(key, _parse_list(elem))
    elif tag == "Object":
        builder.put_object(key, _object_type(elem), _parse_descriptor_body(elem))
    elif tag == "Raw":
        builder.put_data(key, _parse_raw(elem))
    else:
        raise ValueError(f"unsupported descriptor element <{tag}>")


def _parse_list(elem: ET.Element) -> DescriptorList:
    builder = ListBuilder()
    for child in elem:
        tag = child.tag
        where = f"<List> item <{tag}>"
        if tag == "String":
            builder.put_string(_require_attr(child, "string"))
        elif tag == "Integer":
            builder.put_integer(_parse_int(_require_attr(child, "integer"), where=where))
        elif tag == "Double":
            builder.put_double(_parse_float(_require_attr(child, "double"), where=where))
        elif tag == "UnitDouble":
            builder.put_unit_double(
                _parse_float(_require_attr(child, "unitDoubleValue"), where=where)
            )
        elif tag == "Boolean":
            raw = _require_attr(child, "boolean").lower()
            if raw not in BOOLEAN_TEXT:
                raise ValueError(f"{where}: invalid boolean {raw!r}")
            builder.put_boolean(BOOLEAN_TEXT[raw])
        elif tag == "Enumerated":
            builder.put_enumerated(_dump_key(_require_attr(child, "enumeratedValue")))
        elif tag == "List":
            builder.put_list(_parse_list(child))
        elif tag == "Object":
            builder.put_object(_object_type(child), _parse_descriptor_body(child))
        elif tag == "Raw":
            builder.put_data(_parse_raw(child))
        else:
            raise ValueError(f"unsupported list element <{tag}>")
    return builder.build()


def load_descriptor_xml(text: Union[str, bytes]) -> HostDescriptor:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ValueError(f"descriptor dump is not valid XML: {exc}") from exc
    if root.tag not in DESCRIPTOR_TAGS:
        raise ValueError(f"expected <ActionDescriptor> root, found <{root.tag}>")
    return _parse_descriptor_body(root)


def load_descriptor_file(path: Path) -> HostDescriptor:
    return load_descriptor_xml(Path(path).read_bytes())


def describe(descriptor: HostDescriptor, *, indent: int = 0) -> List[str]:
    """List ``key: TYPE`` lines, recursing into objects and lists."""

    lines: List[str] = []
    pad = "  " * indent
    for key in descriptor:
        value = descriptor.get(key)
        label = key_label(key)
        if value.type is ValueType.OBJECT:
            lines.append(f"{pad}{label}: OBJECT<{key_label(value.object_type)}>")  # type: ignore[arg-type]
            lines.extend(describe(value.value, indent=indent + 1))  # type: ignore[arg-type]
        elif value.type is ValueType.LIST:
            lines.append(f"{pad}{label}: LIST[{value.value.count}]")  # type: ignore[attr-defined]
            lines.extend(_describe_list(value.value, indent=indent + 1))  # type: ignore[arg-type]
        elif value.type is ValueType.RAW:
            lines.append(f"{pad}{label}: RAW({len(value.value)} bytes)")  # type: ignore[arg-type]
        else:
            lines.append(f"{pad}{label}: {value.type.name}")
    return lines


def _describe_list(items: DescriptorList, *, indent: int) -> List[str]:
    lines: List[str] = []
    pad = "  " * indent
    for index, value in enumerate(items):
        if value.type is ValueType.OBJECT:
            lines.append(f"{pad}[{index}]: OBJECT<{key_label(value.object_type)}>")  # type: ignore[arg-type]
            lines.extend(describe(value.value, indent=indent + 1))  # type: ignore[arg-type]
        elif value.type is ValueType.LIST:
            lines.append(f"{pad}[{index}]: LIST[{value.value.count}]")  # type: ignore[attr-defined]
            lines.extend(_describe_list(value.value, indent=indent + 1))  # type: ignore[arg-type]
        else:
            lines.append(f"{pad}[{index}]: {value.type.name}")
    return lines
