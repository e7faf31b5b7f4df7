"""Descriptor dump loading, checked against recorded host dumps."""

from pathlib import Path
import sys

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from psadj.config import ExtractionConfig  # noqa: E402
from psadj.descriptor import ValueType  # noqa: E402
from psadj.dump import describe, load_descriptor_file, load_descriptor_xml  # noqa: E402
from psadj.extract import AdjustmentReader  # noqa: E402
from psadj.host import SnapshotHost  # noqa: E402
from psadj.records import AdjustmentRecord  # noqa: E402
from psadj.typeids import charid, stringid  # noqa: E402

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def _load(name: str):
    return load_descriptor_file(FIXTURES / name)


def test_legacy_threshold_dump_structure() -> None:
    desc = _load("legacy_threshold.xml")
    assert desc.get_string(charid("Nm  ")) == "Threshold 1"
    assert desc.get_boolean("visible") is True
    adjustments = desc.get_list(charid("Adjs"))
    assert adjustments.count == 1
    assert adjustments.get_object_type(0) == charid("Thrs")
    assert adjustments.get_object_value(0).get_data("legacyContentData") == b"\x00\xa0\x00\x00"


def test_legacy_vibrance_dump_raw_spans_lines() -> None:
    desc = _load("legacy_vibrance.xml")
    entry = desc.get_list("adjustment").get_object_value(0)
    assert len(entry.get_data("legacyContentData")) == 58
    assert desc.get_integer("layerID") == 4


def test_modern_dump_types() -> None:
    desc = _load("modern_threshold.xml")
    assert desc.get_type("opacity") is ValueType.UNIT_DOUBLE
    assert desc.get_unit_double("opacity") == 100.0
    entry = desc.get_list("adjustment").get_object_value(0)
    assert entry.get_integer("level") == 128


@pytest.mark.parametrize(
    "fixture,version,config,expected",
    [
        ("legacy_threshold.xml", "24.5.0", ExtractionConfig(), AdjustmentRecord(threshold=160)),
        ("legacy_vibrance.xml", "24.5.0", ExtractionConfig(), None),
        (
            "legacy_vibrance.xml",
            "24.5.0",
            ExtractionConfig(pad_partial_words=True),
            AdjustmentRecord(vibrance=50, saturation=50),
        ),
        ("modern_threshold.xml", "24.6.0", ExtractionConfig(), AdjustmentRecord(threshold=128)),
        ("modern_threshold.xml", "24.5.0", ExtractionConfig(), None),
        (
            "smart_vibrance.xml",
            "23.0.0",
            ExtractionConfig(),
            AdjustmentRecord(threshold=90, vibrance=-35, saturation=12),
        ),
    ],
)
def test_dump_extraction(fixture: str, version: str, config: ExtractionConfig, expected) -> None:
    host = SnapshotHost({"layer": _load(fixture)}, version=version)
    assert AdjustmentReader(host, config).get_adjustments("layer") == expected


def test_describe_lists_nested_types() -> None:
    lines = describe(_load("smart_vibrance.xml"))
    assert lines[0] == "name: STRING"
    assert "smartObject: OBJECT<smartObject>" in lines
    assert "  filterFX: LIST[2]" in lines
    assert "      filter: OBJECT<vibrance>" in lines
    assert "        saturation: INTEGER" in lines


def test_describe_raw_payload_size() -> None:
    lines = describe(_load("legacy_threshold.xml"))
    assert "    legacyContentData: RAW(4 bytes)" in lines


@pytest.mark.parametrize(
    "text,message",
    [
        ("<Layers/>", "expected <ActionDescriptor> root"),
        ("<ActionDescriptor><Integer sym='level' integer='x'/></ActionDescriptor>", "invalid integer"),
        ("<ActionDescriptor><Integer integer='1'/></ActionDescriptor>", "missing attribute 'sym'"),
        ("<ActionDescriptor><Raw sym='data'>0G</Raw></ActionDescriptor>", "not hex"),
        ("<ActionDescriptor><Path sym='file'/></ActionDescriptor>", "unsupported descriptor element"),
        ("<ActionDescriptor><Boolean sym='flag' boolean='maybe'/></ActionDescriptor>", "invalid boolean"),
        ("<ActionDescriptor>", "not valid XML"),
    ],
)
def test_malformed_dumps(text: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        load_descriptor_xml(text)


def test_list_items_of_every_scalar_type() -> None:
    desc = load_descriptor_xml(
        "<ActionDescriptor>"
        "<List sym='items'>"
        "<String string='a'/><Integer integer='2'/><Double double='1.5'/>"
        "<UnitDouble unitDoubleValue='3'/><Boolean boolean='false'/>"
        "<Enumerated enumeratedValue='Nrml'/><Raw>00ff</Raw>"
        "<List><Integer integer='9'/></List>"
        "</List>"
        "</ActionDescriptor>"
    )
    items = desc.get_list("items")
    assert [items.get_type(i) for i in range(items.count)] == [
        ValueType.STRING,
        ValueType.INTEGER,
        ValueType.DOUBLE,
        ValueType.UNIT_DOUBLE,
        ValueType.BOOLEAN,
        ValueType.ENUMERATED,
        ValueType.RAW,
        ValueType.LIST,
    ]
    assert items.get(5).value == charid("Nrml")
    assert items.get_data(6) == b"\x00\xff"
    assert items.get_list(7).get_integer(0) == 9
    assert stringid("items") in desc


def test_four_letter_alias_names_stay_symbolic() -> None:
    desc = load_descriptor_xml(
        "<ActionDescriptor>"
        "<String sym='name' string='Layer 1'/>"
        "<Integer sym='Lvl ' integer='3'/>"
        "<Integer sym='Opct' integer='50'/>"
        "</ActionDescriptor>"
    )
    assert desc.get_string(stringid("name")) == "Layer 1"
    assert desc.get_string(charid("Nm  ")) == "Layer 1"
    assert desc.get_integer("level") == 3
    assert desc.get_integer(charid("Opct")) == 50
