"""Tests for the modern reader, legacy scanner and smart-filter walker."""

from pathlib import Path
import sys

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from psadj.descriptor import DescriptorBuilder, ListBuilder  # noqa: E402
from psadj.errors import DescriptorTypeError, IndexOutOfRange, KeyNotFound, MalformedBlob  # noqa: E402
from psadj.legacy import scan_layer_adjustments  # noqa: E402
from psadj.modern import read_modern_property, read_modern_record  # noqa: E402
from psadj.records import AdjustmentRecord  # noqa: E402
from psadj.smart_filters import scan_smart_filter_adjustments  # noqa: E402
from psadj.typeids import charid  # noqa: E402
from layer_factory import (  # noqa: E402
    blob,
    legacy_entry,
    legacy_layer,
    modern_layer,
    smart_layer,
    threshold_blob,
    threshold_filter,
    vibrance_blob,
    vibrance_filter,
)


# --- modern reader ---------------------------------------------------------


def test_modern_threshold_reads_level_key() -> None:
    desc = modern_layer(level=128)
    assert read_modern_property(desc, "threshold").value == 128


@pytest.mark.parametrize("name", ["vibrance", "saturation", "brightness", "contrast"])
def test_modern_reads_named_property(name: str) -> None:
    desc = modern_layer(**{name: 42})
    result = read_modern_property(desc, name)
    assert result.found
    assert result.value == 42


def test_modern_missing_list_or_key_is_absent() -> None:
    no_list = DescriptorBuilder().put_string("name", "plain").build()
    result = read_modern_property(no_list, "vibrance")
    assert not result.found
    assert isinstance(result.errors[0], KeyNotFound)

    result = read_modern_property(modern_layer(level=3), "vibrance")
    assert not result.found
    assert isinstance(result.errors[0], KeyNotFound)


def test_modern_empty_list_is_absent() -> None:
    desc = DescriptorBuilder().put_list("adjustment", ListBuilder().build()).build()
    assert read_modern_property(desc, "threshold").value is None


def test_modern_non_integer_value_is_absent() -> None:
    inner = DescriptorBuilder().put_double("level", 128.0).build()
    items = ListBuilder().put_object("thresholdClassEvent", inner).build()
    desc = DescriptorBuilder().put_list("adjustment", items).build()
    result = read_modern_property(desc, "threshold")
    assert not result.found
    assert isinstance(result.errors[0], DescriptorTypeError)


def test_modern_first_entry_not_object_is_absent() -> None:
    desc = DescriptorBuilder().put_list("adjustment", ListBuilder().put_integer(5).build()).build()
    result = read_modern_property(desc, "threshold")
    assert not result.found
    assert isinstance(result.errors[0], DescriptorTypeError)


def test_modern_unknown_property() -> None:
    with pytest.raises(ValueError):
        read_modern_property(modern_layer(level=1), "hue")


def test_modern_record() -> None:
    desc = modern_layer(vibrance=10, saturation=-5)
    assert read_modern_record(desc).value == AdjustmentRecord(vibrance=10, saturation=-5)
    assert read_modern_record(modern_layer(contrast=4)).value is None


# --- legacy scanner --------------------------------------------------------


def test_legacy_vibrance_blob() -> None:
    desc = legacy_layer(legacy_entry("vibrance", blob({10: 0x00640000, 14: 0x001E0000}, 15)))
    assert scan_layer_adjustments(desc).value == AdjustmentRecord(vibrance=100, saturation=30)


def test_legacy_threshold_blob() -> None:
    desc = legacy_layer(legacy_entry(charid("Thrs"), blob({0: 0x00800000}, 1)))
    assert scan_layer_adjustments(desc).value == AdjustmentRecord(threshold=128)


def test_legacy_scans_every_entry() -> None:
    desc = legacy_layer(
        legacy_entry("vibrance", vibrance_blob(20, 15)),
        legacy_entry("hueSaturation", threshold_blob(99)),
        legacy_entry(charid("Thrs"), threshold_blob(64)),
    )
    assert scan_layer_adjustments(desc).value == AdjustmentRecord(
        threshold=64, vibrance=20, saturation=15
    )


def test_legacy_last_match_wins() -> None:
    desc = legacy_layer(
        legacy_entry(charid("Thrs"), threshold_blob(10)),
        legacy_entry(charid("Thrs"), threshold_blob(200)),
    )
    assert scan_layer_adjustments(desc).value.threshold == 200


def test_legacy_layout_not_applied_to_other_tags() -> None:
    desc = legacy_layer(legacy_entry("curves", vibrance_blob(50, 50)))
    assert scan_layer_adjustments(desc).value is None


def test_legacy_entry_without_blob_is_skipped() -> None:
    desc = legacy_layer(legacy_entry("vibrance", None))
    result = scan_layer_adjustments(desc)
    assert result.value is None
    assert result.errors == ()


def test_legacy_no_adjustments_key() -> None:
    desc = DescriptorBuilder().put_string("name", "Background").build()
    assert scan_layer_adjustments(desc).value is None


def test_legacy_non_object_entries_are_skipped() -> None:
    desc = legacy_layer(
        legacy_entry(charid("Thrs"), threshold_blob(77)),
        extra=ListBuilder().put_string("noise"),
    )
    assert scan_layer_adjustments(desc).value == AdjustmentRecord(threshold=77)


def test_legacy_malformed_blob_only_costs_its_entry() -> None:
    desc = legacy_layer(
        legacy_entry("vibrance", b"\x00" * 58),
        legacy_entry(charid("Thrs"), threshold_blob(128)),
    )
    result = scan_layer_adjustments(desc)
    assert result.value == AdjustmentRecord(threshold=128)
    assert len(result.errors) == 1
    assert isinstance(result.errors[0], MalformedBlob)


def test_legacy_short_blob_keeps_decodable_fields() -> None:
    desc = legacy_layer(legacy_entry("vibrance", blob({10: 0x00640000}, 12)))
    result = scan_layer_adjustments(desc)
    assert result.value == AdjustmentRecord(vibrance=100)
    assert len(result.errors) == 1
    assert isinstance(result.errors[0], IndexOutOfRange)
    assert "saturation" in str(result.errors[0])


def test_legacy_pad_partial_accepts_captured_length() -> None:
    data = vibrance_blob(50, 50)[:58]
    desc = legacy_layer(legacy_entry("vibrance", data))
    assert scan_layer_adjustments(desc).value is None
    padded = scan_layer_adjustments(desc, pad_partial=True)
    assert padded.value == AdjustmentRecord(vibrance=50, saturation=50)


# --- smart filters ---------------------------------------------------------


def test_smart_filter_vibrance_and_threshold() -> None:
    desc = smart_layer(vibrance_filter(-35, 12), threshold_filter(90))
    assert scan_smart_filter_adjustments(desc).value == AdjustmentRecord(
        threshold=90, vibrance=-35, saturation=12
    )


def test_smart_filter_threshold_requires_level_marker() -> None:
    desc = smart_layer(threshold_filter(None))
    assert scan_smart_filter_adjustments(desc).value is None


def test_smart_filter_absent_without_smart_object() -> None:
    assert scan_smart_filter_adjustments(modern_layer(level=5)).value is None


def test_smart_object_without_filter_fx() -> None:
    smart = DescriptorBuilder().put_string("fileReference", "x.psb").build()
    desc = DescriptorBuilder().put_object("smartObject", "smartObject", smart).build()
    assert scan_smart_filter_adjustments(desc).value is None


def test_smart_filter_skips_non_object_entries_and_wrappers_without_filter() -> None:
    effects = (
        ListBuilder()
        .put_integer(3)
        .put_object("filterFX", DescriptorBuilder().put_string("name", "blur").build())
        .put_object(
            "filterFX",
            DescriptorBuilder()
            .put_object(charid("Fltr"), charid("Thrs"), DescriptorBuilder().put_integer(charid("Lvl "), 40).build())
            .build(),
        )
        .build()
    )
    smart = DescriptorBuilder().put_list("filterFX", effects).build()
    desc = DescriptorBuilder().put_object("smartObject", "smartObject", smart).build()
    assert scan_smart_filter_adjustments(desc).value == AdjustmentRecord(threshold=40)


def test_smart_filter_incomplete_vibrance_keeps_other_field() -> None:
    broken = ("vibrance", DescriptorBuilder().put_integer("vibrance", 5).build())
    desc = smart_layer(broken, threshold_filter(12))
    result = scan_smart_filter_adjustments(desc)
    assert result.value == AdjustmentRecord(threshold=12, vibrance=5)
    assert len(result.errors) == 1
    assert isinstance(result.errors[0], KeyNotFound)


def test_smart_filter_wrong_type_field_keeps_sibling() -> None:
    obj = (
        DescriptorBuilder()
        .put_double("vibrance", 5.0)
        .put_integer(charid("Strt"), -20)
        .build()
    )
    result = scan_smart_filter_adjustments(smart_layer(("vibrance", obj)))
    assert result.value == AdjustmentRecord(saturation=-20)
    assert isinstance(result.errors[0], DescriptorTypeError)
