"""Read image-adjustment values (threshold, vibrance, saturation, ...) from host layers."""

from .descriptor import (  # noqa: F401
    Bounds,
    DescriptorBuilder,
    DescriptorList,
    DescriptorValue,
    HostDescriptor,
    ListBuilder,
    ValueType,
)
from .errors import (  # noqa: F401
    AdjustmentError,
    DescriptorTypeError,
    HostUnavailable,
    IndexOutOfRange,
    KeyNotFound,
    MalformedBlob,
    VersionParseError,
)
from .extract import (  # noqa: F401
    AdjustmentReader,
    get_adjustments,
    get_brightness,
    get_contrast,
    get_saturation,
    get_threshold,
    get_vibrance,
)
from .host import (  # noqa: F401
    Host,
    SnapshotHost,
    active_layer,
    for_current_document,
    for_layer_by_name,
)
from .legacy_blob import (  # noqa: F401
    THRESHOLD_LAYOUT,
    VIBRANCE_LAYOUT,
    decode_threshold_blob,
    decode_vibrance_blob,
    decode_words,
    extract_high_word,
)
from .records import AdjustmentRecord, Extraction  # noqa: F401
from .reference import (  # noqa: F401
    HostReference,
    current_document_reference,
    layer_by_name_reference,
    target_layer_reference,
)
from .typeids import charid, resolve_key, stringid  # noqa: F401
from .version import (  # noqa: F401
    MODERN_SCHEMA_VERSION,
    ExtractionPath,
    HostVersion,
    parse_host_version,
    resolve_path,
)
