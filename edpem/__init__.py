"""
edpem - Ed25519 key pairs <-> PEM (PKIX / PKCS8) with pooled buffers
"""

from .crypto import KeyPair, parse_public_key_pem, verify_signature
from .utils import BufferPool

__all__ = ['KeyPair', 'parse_public_key_pem', 'verify_signature', 'BufferPool']
