#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Flow resynchronization and payload rewrite

Keeps one keystream engine per direction of the flow selected by the
target port. Every payload starts with a 2-byte big-endian position marker
counting keystream bytes in units of 4. The engine is fast-forwarded when
the marker is ahead of it and the rest of the payload is transformed.

Positions are compared modulo 256 against ``index_a``. A marker that
wrapped around relative to the engine's true position looks like "already
past" and triggers no adjustment; the stream then silently desynchronizes.
"""

from typing import Optional, Sequence

from ..common.constants import CipherConstants
from ..common.enums import Direction
from ..common.exceptions import MalformedPayloadError
from ..infrastructure.logging import get_logger
from .keystream import Keystream
from .key_material import validate_port


def decode_marker(payload: Sequence[int]) -> int:
    """Return the big-endian 16-bit marker value at the start of ``payload``"""
    return (payload[0] << 8) | payload[1]


def marker_offset(marker_value: int, unit: int = CipherConstants.MARKER_UNIT) -> int:
    """Keystream offset encoded by a marker, truncated to a byte"""
    return (marker_value * unit) & 0xFF


class FlowCipher:
    """Directional engine pair for a single UDP flow

    Both engines are scheduled from the same key and evolve independently
    from the first record on. Records must be fed in capture order.
    """

    def __init__(
        self,
        key: bytes,
        target_port: int,
        schedule_rounds: int = CipherConstants.DEFAULT_SCHEDULE_ROUNDS,
        marker_unit: int = CipherConstants.MARKER_UNIT,
    ):
        self._logger = get_logger("flow")
        self.target_port = validate_port(target_port)
        self.marker_unit = marker_unit
        self.outbound = Keystream.initialize(key, schedule_rounds)
        self.inbound = Keystream.initialize(key, schedule_rounds)

        self.resync_steps = 0
        self.bytes_transformed = 0

    def classify(self, src_port: int, dst_port: int) -> Optional[Direction]:
        """Direction of a record, or None if it does not belong to the flow"""
        if dst_port == self.target_port:
            return Direction.OUTBOUND
        if src_port == self.target_port:
            return Direction.INBOUND
        return None

    def engine_for(self, direction: Direction) -> Keystream:
        return self.outbound if direction is Direction.OUTBOUND else self.inbound

    def synchronize(self, engine: Keystream, target_offset: int) -> int:
        """Fast-forward ``engine`` to ``target_offset`` if it is ahead.

        Returns:
            Number of steps skipped (0 when the engine is at or past the target)
        """
        if target_offset <= engine.index_a:
            return 0
        steps = target_offset - engine.index_a
        engine.fast_forward(steps)
        return steps

    def process_payload(self, direction: Direction, raw_payload: bytes) -> bytearray:
        """Resynchronize and transform one payload.

        Args:
            direction: Which engine to use
            raw_payload: Marker followed by the enciphered bytes

        Returns:
            The transformed bytes following the marker. The marker itself is
            left as is and is not part of the returned buffer.

        Raises:
            MalformedPayloadError: If the payload is shorter than the marker
        """
        if len(raw_payload) < CipherConstants.MARKER_SIZE:
            raise MalformedPayloadError(
                f"Payload of {len(raw_payload)} bytes cannot carry a position marker",
                payload_length=len(raw_payload),
            )

        engine = self.engine_for(direction)
        marker_value = decode_marker(raw_payload)
        target_offset = marker_offset(marker_value, self.marker_unit)

        steps = self.synchronize(engine, target_offset)
        if steps:
            self.resync_steps += steps
            self._logger.debug(
                f"{direction.value}: marker {marker_value} -> offset {target_offset}, skipped {steps} steps"
            )

        body = bytearray(raw_payload[CipherConstants.MARKER_SIZE:])
        engine.transform(body)
        self.bytes_transformed += len(body)
        return body

    def rewrite_payload(self, direction: Direction, raw_payload: bytes) -> bytes:
        """Full payload with the marker kept in clear and the body transformed"""
        body = self.process_payload(direction, raw_payload)
        return bytes(raw_payload[: CipherConstants.MARKER_SIZE]) + bytes(body)
