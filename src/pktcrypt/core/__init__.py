"""
Core components: keystream engine, flow resynchronization and capture rewrite
"""

from .flow import FlowCipher, decode_marker, marker_offset
from .key_material import derive_key, invert_key, parse_port_spec, validate_port
from .keystream import Keystream

__all__ = [
    "Keystream",
    "FlowCipher",
    "decode_marker",
    "marker_offset",
    "derive_key",
    "invert_key",
    "parse_port_spec",
    "validate_port",
]
