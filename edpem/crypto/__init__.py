"""
Cryptography layer - Keys, Errors, Hashing
"""

from .errors import (
    EdPemError,
    KeyGenerationError,
    InvalidPEMEncoding,
    InvalidKeyEncoding,
    UnsupportedKeyAlgorithm,
    InvalidKeyLength,
    BufferWriteError,
    KeyEncodingError,
    MissingBufferPool,
)
from .hashing import Hasher
from .keys import KeyPair, parse_public_key_pem, verify_signature

__all__ = [
    'KeyPair', 'parse_public_key_pem', 'verify_signature', 'Hasher',
    'EdPemError', 'KeyGenerationError', 'InvalidPEMEncoding', 'InvalidKeyEncoding',
    'UnsupportedKeyAlgorithm', 'InvalidKeyLength', 'BufferWriteError',
    'KeyEncodingError', 'MissingBufferPool',
]
