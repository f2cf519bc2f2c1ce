"""
UDP payload crypter

Streams a pcap/pcapng capture, decrypts (or re-encrypts) the UDP payloads
of the flow selected by the target port and writes every record to a new
capture in arrival order.
"""
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from scapy.all import UDP, Padding, PcapNgReader, PcapReader, PcapWriter, Raw
from scapy.error import Scapy_Exception
from scapy.utils import PcapNgWriter

from ...common.constants import CipherConstants, NetworkConstants, ProcessingConstants
from ...common.enums import Direction
from ...common.exceptions import (
    ConfigurationError,
    FileError,
    ValidationError,
    create_error_from_exception,
    format_error_for_user,
)
from ...infrastructure.logging import get_logger, log_exception, log_performance
from ..flow import FlowCipher
from ..models import CryptStats, ProcessResult
from .base_processor import BaseProcessor, ProcessorConfig


@dataclass
class CrypterConfig(ProcessorConfig):
    """Payload crypter configuration"""
    key: bytes = b""
    inverted_key: bool = False
    target_port: int = 0
    schedule_rounds: int = CipherConstants.DEFAULT_SCHEDULE_ROUNDS
    marker_unit: int = CipherConstants.MARKER_UNIT
    pass_through_unmatched: bool = True
    output_format: str = "pcapng"
    progress_interval: int = ProcessingConstants.DEFAULT_PROGRESS_INTERVAL
    trace_records: bool = False


class PayloadCrypter(BaseProcessor):
    """Capture rewrite processor

    One ``FlowCipher`` is created per processed file, so each capture starts
    from freshly scheduled engines.
    """

    def __init__(self, config: CrypterConfig):
        super().__init__(config)
        self.config: CrypterConfig = config
        self._logger = get_logger('payload_crypter')
        self._flow: Optional[FlowCipher] = None

    def _initialize_impl(self):
        if not self.config.key:
            raise ConfigurationError("No key material configured", config_key="key")
        self._flow = self._create_flow()
        self._logger.info(
            f"Payload crypter initialized: port={self.config.target_port}, "
            f"rounds={self.config.schedule_rounds}, inverted_key={self.config.inverted_key}"
        )

    def _create_flow(self) -> FlowCipher:
        return FlowCipher(
            self.config.key,
            self.config.target_port,
            schedule_rounds=self.config.schedule_rounds,
            marker_unit=self.config.marker_unit,
        )

    @property
    def flow(self) -> Optional[FlowCipher]:
        return self._flow

    def process_file(self, input_path: Union[str, Path], output_path: Union[str, Path]) -> ProcessResult:
        """Rewrite one capture file"""
        if not self._is_initialized:
            if not self.initialize():
                return ProcessResult(
                    success=False,
                    input_file=str(input_path),
                    errors=[f"Processor not properly initialized: {self._init_error}"],
                )

        input_path = Path(input_path)
        output_path = Path(output_path)

        try:
            self.validate_inputs(input_path, output_path)
            self.reset_stats()
            self._reset_counters()
            self._flow = self._create_flow()

            self._logger.info(f"Starting payload rewrite: {input_path} -> {output_path}")
            start_time = time.time()

            self._rewrite_stream(input_path, output_path)

            processing_time = time.time() - start_time
            log_performance("payload_rewrite", processing_time, records=self.stats['records_read'])

            self.stats.update({
                'resync_steps': self._flow.resync_steps,
                'bytes_transformed': self._flow.bytes_transformed,
                'duration_ms': processing_time * 1000,
            })
            crypt_stats = CryptStats(**self.stats)

            self._logger.info(
                f"Payload rewrite completed: {crypt_stats.payloads_transformed} payloads transformed, "
                f"{crypt_stats.passed_through} passed through, {crypt_stats.dropped} dropped"
            )
            return ProcessResult(
                success=True,
                input_file=str(input_path),
                output_file=str(output_path),
                stats=crypt_stats,
            )

        except FileNotFoundError as e:
            error_msg = f"File not found: {e}"
            self._logger.error(error_msg)
            return ProcessResult(success=False, input_file=str(input_path), errors=[error_msg])

        except (ValidationError, ConfigurationError) as e:
            self._logger.error(str(e))
            return ProcessResult(success=False, input_file=str(input_path), errors=[e.message])

        except Exception as e:
            context = {"input_file": str(input_path), "output_file": str(output_path)}
            log_exception(e, "payload_crypter", context)
            error = create_error_from_exception(e, context)
            return ProcessResult(success=False, input_file=str(input_path), errors=[format_error_for_user(error)])

    def _reset_counters(self):
        self.stats.update({
            'records_read': 0,
            'records_written': 0,
            'outbound_payloads': 0,
            'inbound_payloads': 0,
            'passed_through': 0,
            'dropped': 0,
            'short_payloads': 0,
        })

    def _rewrite_stream(self, input_path: Path, output_path: Path):
        """Read, rewrite and write records one at a time"""
        reader_class = PcapNgReader if input_path.suffix.lower() == ProcessingConstants.PCAPNG_EXTENSION else PcapReader

        try:
            reader = reader_class(str(input_path))
        except (Scapy_Exception, EOFError) as e:
            raise FileError(f"Cannot read capture: {e}", file_path=str(input_path), operation="read") from e

        with reader:
            with self._open_writer(output_path) as writer:
                for packet in reader:
                    self.stats['records_read'] += 1

                    if self.rewrite_packet(packet):
                        writer.write(packet)
                        self.stats['records_written'] += 1
                    elif self.config.pass_through_unmatched:
                        writer.write(packet)
                        self.stats['records_written'] += 1
                        self.stats['passed_through'] += 1
                    else:
                        self.stats['dropped'] += 1

                    if self.stats['records_read'] % self.config.progress_interval == 0:
                        self._logger.debug(
                            f"Processed {self.stats['records_read']} records, "
                            f"{self.stats['outbound_payloads'] + self.stats['inbound_payloads']} transformed"
                        )

        if self.stats['records_written'] == 0:
            # Writers only create the file on the first packet
            output_path.touch()
            self._logger.warning("No records written, created empty output file")

    def _open_writer(self, output_path: Path):
        suffix = output_path.suffix.lower()
        if suffix == ".pcap":
            use_pcapng = False
        elif suffix == ProcessingConstants.PCAPNG_EXTENSION:
            use_pcapng = True
        else:
            use_pcapng = self.config.output_format == "pcapng"

        if use_pcapng:
            return PcapNgWriter(str(output_path))
        return PcapWriter(str(output_path), sync=True)

    def rewrite_packet(self, packet) -> bool:
        """Transform the UDP payload of ``packet`` in place if it belongs to the flow.

        Returns:
            True if the payload was rewritten, False if the packet is left untouched
        """
        if not packet.haslayer(UDP):
            return False

        udp = packet[UDP]
        direction = self._flow.classify(udp.sport, udp.dport)
        if direction is None:
            return False

        payload = bytes(udp.payload)
        trailer = b""
        if udp.len is not None and udp.len >= NetworkConstants.UDP_HEADER_LENGTH:
            # Link-layer padding follows the datagram and is never transformed
            payload_length = udp.len - NetworkConstants.UDP_HEADER_LENGTH
            payload, trailer = payload[:payload_length], payload[payload_length:]

        if len(payload) < CipherConstants.MARKER_SIZE:
            self.stats['short_payloads'] = self.stats.get('short_payloads', 0) + 1
            self._logger.warning(
                f"udp {udp.sport} -> {udp.dport}: {len(payload)}-byte payload has no position marker, left unchanged"
            )
            return False

        if self.config.trace_records:
            self._logger.debug(f"udp {udp.sport} -> {udp.dport}")

        new_payload = self._flow.rewrite_payload(direction, payload)

        udp.remove_payload()
        udp.add_payload(Raw(load=new_payload))
        if trailer:
            udp.add_payload(Padding(load=trailer))
        del udp.len
        del udp.chksum

        key = 'outbound_payloads' if direction is Direction.OUTBOUND else 'inbound_payloads'
        self.stats[key] = self.stats.get(key, 0) + 1
        return True

    def get_display_name(self) -> str:
        return "Decrypt UDP Payloads"

    def get_description(self) -> str:
        return "Decrypt or re-encrypt the RC4-protected UDP payloads of one flow"
