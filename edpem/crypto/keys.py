import base64
import binascii
import re

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from edpem.crypto.errors import (
    InvalidKeyEncoding,
    InvalidKeyLength,
    InvalidPEMEncoding,
    KeyEncodingError,
    KeyGenerationError,
    MissingBufferPool,
    UnsupportedKeyAlgorithm,
)
from edpem.crypto.hashing import Hasher
from edpem.utils.logger import Logger

PUBLIC_KEY_SIZE = 32
SEED_SIZE = 32
PRIVATE_KEY_SIZE = 64  # seed + public key
SIGNATURE_SIZE = 64

PEM_BLOCK = re.compile(
    rb"-----BEGIN ([^\r\n-]+)-----[ \t]*\r?\n(.*?)-----END \1-----", re.DOTALL
)

logger = Logger("edpem.keys")


def _raw_public_bytes(public_key):
    return public_key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw
    )


def _raw_private_bytes(private_key):
    """Trả về 64 bytes: seed + public key"""
    seed = private_key.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption()
    )
    return seed + _raw_public_bytes(private_key.public_key())


def _read_pem_block(buff, text, kind):
    """Ghi text vào buffer và lấy DER bytes của PEM block đầu tiên"""
    buff.write_string(text)

    match = PEM_BLOCK.search(buff.get_bytes())
    if match is None:
        raise InvalidPEMEncoding(f"{kind} key PEM data not valid: no PEM block found")

    body = b"".join(match.group(2).split())
    try:
        return base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise InvalidPEMEncoding(f"{kind} key PEM data not valid: {e}") from e


def _decode_public_der(der):
    try:
        key = serialization.load_der_public_key(der)
    except UnsupportedAlgorithm as e:
        raise UnsupportedKeyAlgorithm(str(e)) from e
    except ValueError as e:
        raise InvalidKeyEncoding(f"cannot decode PKIX public key: {e}") from e

    if isinstance(key, ed25519.Ed25519PublicKey):
        return _raw_public_bytes(key)
    raise UnsupportedKeyAlgorithm(type(key).__name__)


def _decode_private_der(der):
    try:
        key = serialization.load_der_private_key(der, password=None)
    except UnsupportedAlgorithm as e:
        raise UnsupportedKeyAlgorithm(str(e)) from e
    except (ValueError, TypeError) as e:
        raise InvalidKeyEncoding(f"cannot decode PKCS8 private key: {e}") from e

    if isinstance(key, ed25519.Ed25519PrivateKey):
        return _raw_private_bytes(key)
    raise UnsupportedKeyAlgorithm(type(key).__name__)


def parse_public_key_pem(public_pem, buffer_pool):
    """Parse PEM public key của peer thành 32 bytes raw"""
    if buffer_pool is None:
        raise MissingBufferPool()

    # DER bytes là bản copy độc lập nên trả buffer ngay sau khi decode PEM
    with buffer_pool.borrow() as buff:
        der = _read_pem_block(buff, public_pem, "public")

    public_key = _decode_public_der(der)
    if len(public_key) != PUBLIC_KEY_SIZE:
        raise InvalidKeyLength(f"public key length not valid: {len(public_key)}")
    return public_key


def verify_signature(public_key, message, signature):
    """Verify chữ ký Ed25519 với public key dạng raw bytes"""
    if len(public_key) != PUBLIC_KEY_SIZE:
        raise InvalidKeyLength(f"public key length not valid: {len(public_key)}")

    if len(signature) != SIGNATURE_SIZE:
        return False

    try:
        verifier = ed25519.Ed25519PublicKey.from_public_bytes(bytes(public_key))
    except ValueError as e:
        raise InvalidKeyEncoding(f"public key not valid: {e}") from e

    try:
        verifier.verify(bytes(signature), message)
        return True
    except InvalidSignature:
        return False


class KeyPair:
    """Quản lý cặp khóa Ed25519 và chuyển đổi sang PEM"""

    def __init__(self, buffer_pool=None):
        try:
            signing_key = ed25519.Ed25519PrivateKey.generate()
        except Exception as e:
            raise KeyGenerationError(f"Ed25519 key generation failed: {e}") from e

        self._signing_key = signing_key
        self._private_key = _raw_private_bytes(signing_key)
        self._public_key = self._private_key[SEED_SIZE:]
        self.buffer_pool = buffer_pool
        logger.log(f"Generated key pair {self.fingerprint()}", level="debug")

    @property
    def public_key(self):
        return self._public_key

    @property
    def private_key(self):
        return self._private_key

    @staticmethod
    def _build(public_key, private_key, buffer_pool):
        kp = KeyPair.__new__(KeyPair)
        kp._public_key = public_key
        kp._private_key = private_key
        kp._signing_key = ed25519.Ed25519PrivateKey.from_private_bytes(
            private_key[:SEED_SIZE]
        )
        kp.buffer_pool = buffer_pool
        return kp

    @staticmethod
    def from_bytes(private_bytes, buffer_pool=None):
        """Load key từ seed 32 bytes hoặc seed + public 64 bytes"""
        if len(private_bytes) not in (SEED_SIZE, PRIVATE_KEY_SIZE):
            raise InvalidKeyLength(f"private key length not valid: {len(private_bytes)}")

        signing_key = ed25519.Ed25519PrivateKey.from_private_bytes(
            bytes(private_bytes[:SEED_SIZE])
        )
        private_key = _raw_private_bytes(signing_key)
        if len(private_bytes) == PRIVATE_KEY_SIZE and bytes(private_bytes) != private_key:
            raise InvalidKeyEncoding("public half does not match the seed")

        return KeyPair._build(private_key[SEED_SIZE:], private_key, buffer_pool)

    @staticmethod
    def from_pem(public_pem, private_pem, buffer_pool):
        """Tạo KeyPair từ hai PEM string (public PKIX, private PKCS8)"""
        if buffer_pool is None:
            raise MissingBufferPool()

        with buffer_pool.borrow() as buff:
            der = _read_pem_block(buff, public_pem, "public")
            public_key = _decode_public_der(der)

        with buffer_pool.borrow() as buff:
            der = _read_pem_block(buff, private_pem, "private")
            private_key = _decode_private_der(der)

        if len(public_key) != PUBLIC_KEY_SIZE:
            raise InvalidKeyLength(f"public key length not valid: {len(public_key)}")
        if len(private_key) != PRIVATE_KEY_SIZE:
            raise InvalidKeyLength(f"private key length not valid: {len(private_key)}")

        kp = KeyPair._build(public_key, private_key, buffer_pool)
        if private_key[SEED_SIZE:] != public_key:
            logger.log(
                f"Public key {kp.fingerprint()} does not match the private key",
                level="warning"
            )
        return kp

    def sign(self, message):
        """Ký message, trả về chữ ký 64 bytes"""
        return self._signing_key.sign(message)

    def verify(self, message, signature):
        """Verify chữ ký bằng public key của cặp khóa"""
        return verify_signature(self._public_key, message, signature)

    def fingerprint(self):
        return Hasher.fingerprint(self._public_key)

    def _public_pem(self):
        try:
            public_key = ed25519.Ed25519PublicKey.from_public_bytes(self._public_key)
            return public_key.public_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PublicFormat.SubjectPublicKeyInfo
            )
        except ValueError as e:
            raise KeyEncodingError(f"cannot encode public key: {e}") from e

    def _private_pem(self):
        if len(self._private_key) != PRIVATE_KEY_SIZE:
            raise KeyEncodingError(
                f"cannot encode private key of length {len(self._private_key)}"
            )
        try:
            private_key = ed25519.Ed25519PrivateKey.from_private_bytes(
                self._private_key[:SEED_SIZE]
            )
            return private_key.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption()
            )
        except ValueError as e:
            raise KeyEncodingError(f"cannot encode private key: {e}") from e

    def to_pem_strings(self):
        """Trả về (public PEM, private PEM)"""
        if self.buffer_pool is None:
            raise MissingBufferPool()

        public_pem = self._public_pem()

        with self.buffer_pool.borrow() as buff:
            buff.write_bytes(public_pem)
            public_str = buff.get_string()
            buff.reset()

            buff.write_bytes(self._private_pem())
            private_str = buff.get_string()

        logger.log(f"Serialized key pair {self.fingerprint()}", level="debug")
        return public_str, private_str

    def __repr__(self):
        return f"KeyPair({self.fingerprint()})"
