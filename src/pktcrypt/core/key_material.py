#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Key material helpers

Derives the fixed-length secret used by both directional engines and
parses the target port argument, including the ``int:<port>`` form that
selects the inverted (bit-complemented) key.
"""

from typing import Tuple, Union

from ..common.constants import CipherConstants, NetworkConstants
from ..common.exceptions import ConfigurationError
from ..infrastructure.logging import get_logger

logger = get_logger("key_material")


def invert_key(key: bytes) -> bytes:
    """Complement every byte of ``key``"""
    return bytes(~b & 0xFF for b in key)


def derive_key(
    secret: Union[str, bytes],
    invert: bool = False,
    key_length: int = CipherConstants.KEY_LENGTH,
) -> bytes:
    """Build key material from a secret.

    Text secrets are UTF-8 encoded. Only the first ``key_length`` bytes are
    used; a shorter secret is a configuration error.

    Args:
        secret: Shared secret as text or bytes
        invert: Complement every key byte (inverted mode)
        key_length: Number of key bytes to use

    Returns:
        Key bytes of exactly ``key_length`` length

    Raises:
        ConfigurationError: If the secret is shorter than ``key_length``
    """
    raw = secret.encode("utf-8") if isinstance(secret, str) else bytes(secret)

    if len(raw) < key_length:
        raise ConfigurationError(
            f"Secret must be at least {key_length} bytes (got {len(raw)})",
            config_key="secret",
        )
    if len(raw) > key_length:
        logger.warning(f"Secret is {len(raw)} bytes, using the first {key_length}")

    key = raw[:key_length]
    if invert:
        key = invert_key(key)
    return key


def validate_port(port: int) -> int:
    """Return ``port`` if it is a usable UDP port, otherwise raise"""
    if not NetworkConstants.MIN_PORT <= port <= NetworkConstants.MAX_PORT:
        raise ConfigurationError(
            f"Target port must be between {NetworkConstants.MIN_PORT} and "
            f"{NetworkConstants.MAX_PORT} (got {port})",
            config_key="port",
        )
    return port


def parse_port_spec(spec: Union[str, int]) -> Tuple[int, bool]:
    """Parse a target port argument.

    ``"5000"`` selects port 5000 with the plain key, ``"int:5000"`` selects
    port 5000 with the inverted key.

    Returns:
        tuple: (port, invert)
    """
    if isinstance(spec, int):
        return validate_port(spec), False

    text = spec.strip()
    invert = text.startswith(CipherConstants.INVERTED_PORT_PREFIX)
    if invert:
        text = text[len(CipherConstants.INVERTED_PORT_PREFIX):]

    try:
        port = int(text)
    except ValueError as e:
        raise ConfigurationError(f"Failed to parse target port: {spec!r}", config_key="port") from e

    return validate_port(port), invert
