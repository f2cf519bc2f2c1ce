from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class CryptStats(BaseModel):
    """Statistics of one capture rewrite. Plain numeric fields so the model
    serializes straight to JSON for CLI display."""

    records_read: int = Field(0, ge=0, description="Records read from the input capture")
    records_written: int = Field(0, ge=0, description="Records written to the output capture")
    outbound_payloads: int = Field(0, ge=0, description="Payloads transformed with the outbound engine")
    inbound_payloads: int = Field(0, ge=0, description="Payloads transformed with the inbound engine")
    passed_through: int = Field(0, ge=0, description="Records written unchanged")
    dropped: int = Field(0, ge=0, description="Unmatched records left out of the output")
    short_payloads: int = Field(0, ge=0, description="Matched payloads too short for a position marker")
    resync_steps: int = Field(0, ge=0, description="Keystream steps skipped by resynchronization")
    bytes_transformed: int = Field(0, ge=0, description="Payload bytes XORed with the keystream")
    duration_ms: float = Field(0.0, ge=0.0, description="Processing time in milliseconds")

    class Config:
        frozen = True

    @property
    def payloads_transformed(self) -> int:
        return self.outbound_payloads + self.inbound_payloads


class ProcessResult(BaseModel):
    """Result of a capture rewrite, returned to the CLI."""

    success: bool = Field(..., description="Whether the rewrite completed")
    input_file: str = Field(..., description="Input capture path")
    output_file: Optional[str] = Field(None, description="Output capture path (None on failure)")
    stats: CryptStats = Field(default_factory=CryptStats, description="Rewrite statistics")
    errors: List[str] = Field(default_factory=list, description="Errors captured during processing")

    class Config:
        frozen = True

    @property
    def duration_ms(self) -> float:
        return self.stats.duration_ms
