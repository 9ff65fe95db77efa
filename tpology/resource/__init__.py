"""Resource model and manifest decoding.

Submodules:
    model -- Resource dataclass, reserved fields, wire-shape encode/decode.
    io    -- YAML/JSON document streams and manifest files.
"""

from tpology.resource.io import dump_json, dump_yaml, iter_load, load, load_file
from tpology.resource.model import RESERVED_FIELDS, Resource, Value, kind_is_reserved

__all__ = [
    "RESERVED_FIELDS",
    "Resource",
    "Value",
    "dump_json",
    "dump_yaml",
    "iter_load",
    "iter_load",
    "kind_is_reserved",
    "load",
    "load_file",
]
