"""Legacy content blob decoding.

Hosts older than 24.6 only expose adjustment parameters inside the raw
``legacyContentData`` payload of each adjustment object.  The payload is
read as big-endian 32-bit words; a parameter lives in the high 16 bits
of one word (the low 16 bits are host-internal fractional state).

Word offsets per adjustment type were recovered from host captures:

  vibrance object   vibrance = HIWORD(word 10), saturation = HIWORD(word 14)
  threshold object  threshold = HIWORD(word 0)

These offsets are tied to their object-type tag.  Do not apply a layout
to a blob from a different adjustment type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import IndexOutOfRange, MalformedBlob


WORD_SIZE = 4


@dataclass(frozen=True)
class WordField:
    index: int
    signed: bool = False


# Vibrance/saturation span -100..100 and are stored as int16.
VIBRANCE_LAYOUT: Mapping[str, WordField] = {
    "vibrance": WordField(10, signed=True),
    "saturation": WordField(14, signed=True),
}
THRESHOLD_LAYOUT: Mapping[str, WordField] = {
    "threshold": WordField(0),
}


def decode_words(data: bytes, *, pad_partial: bool = False) -> Tuple[int, ...]:
    """Split `data` into big-endian u32 words.

    A length that is not a multiple of 4 raises MalformedBlob unless
    `pad_partial` is set, in which case the trailing bytes are treated
    as the high bytes of a zero-padded final word.
    """
    remainder = len(data) % WORD_SIZE
    if remainder:
        if not pad_partial:
            raise MalformedBlob(
                f"blob length {len(data)} is not a multiple of {WORD_SIZE}"
            )
        data = bytes(data) + b"\x00" * (WORD_SIZE - remainder)
    return tuple(
        int.from_bytes(data[off : off + WORD_SIZE], "big")
        for off in range(0, len(data), WORD_SIZE)
    )


def extract_high_word(words: Sequence[int], index: int) -> int:
    """Return the high 16 bits of ``words[index]`` as an unsigned value."""
    if not 0 <= index < len(words):
        raise IndexOutOfRange(
            f"word index {index} out of range for {len(words)} words"
        )
    return (words[index] >> 16) & 0xFFFF


def extract_signed_high_word(words: Sequence[int], index: int) -> int:
    value = extract_high_word(words, index)
    return value - 0x10000 if value & 0x8000 else value


def decode_layout(
    words: Sequence[int],
    layout: Mapping[str, WordField],
    errors: Optional[List[Exception]] = None,
) -> Dict[str, int]:
    """Decode every field of `layout` from `words`.

    A field whose word is past the end raises IndexOutOfRange.  When an
    `errors` list is given the failure is appended there instead and the
    remaining fields are still decoded.
    """
    out: Dict[str, int] = {}
    for name, field in layout.items():
        try:
            if field.signed:
                out[name] = extract_signed_high_word(words, field.index)
            else:
                out[name] = extract_high_word(words, field.index)
        except IndexOutOfRange as exc:
            if errors is None:
                raise
            errors.append(IndexOutOfRange(f"{name}: {exc}"))
    return out


def decode_vibrance_blob(
    data: bytes, *, pad_partial: bool = False, errors: Optional[List[Exception]] = None
) -> Dict[str, int]:
    """Return {"vibrance", "saturation"} from a vibrance object's blob."""
    return decode_layout(decode_words(data, pad_partial=pad_partial), VIBRANCE_LAYOUT, errors)


def decode_threshold_blob(
    data: bytes, *, pad_partial: bool = False, errors: Optional[List[Exception]] = None
) -> Dict[str, int]:
    """Return {"threshold"} from a threshold object's blob."""
    return decode_layout(decode_words(data, pad_partial=pad_partial), THRESHOLD_LAYOUT, errors)
