"""
Capture processors

File-to-file processors built on the BaseProcessor pattern.
"""

from .base_processor import BaseProcessor, ProcessorConfig
from .payload_crypter import CrypterConfig, PayloadCrypter

__all__ = [
    "BaseProcessor",
    "ProcessorConfig",
    "CrypterConfig",
    "PayloadCrypter",
]
