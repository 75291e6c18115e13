class EdPemError(Exception):
    """Lỗi gốc của edpem"""


class KeyGenerationError(EdPemError):
    """Không sinh được cặp khóa"""


class InvalidPEMEncoding(EdPemError):
    """Không tìm thấy PEM block hợp lệ"""


class InvalidKeyEncoding(EdPemError):
    """DER payload không decode được thành key"""


class UnsupportedKeyAlgorithm(InvalidKeyEncoding):
    """Key decode được nhưng không phải Ed25519"""

    def __init__(self, key_type):
        self.key_type = key_type
        super().__init__(f"unsupported key algorithm: {key_type}")


class InvalidKeyLength(EdPemError):
    """Độ dài key sai"""


class BufferWriteError(EdPemError):
    """Ghi vào buffer thất bại"""


class KeyEncodingError(EdPemError):
    """Không encode được key sang PKIX/PKCS8"""


class MissingBufferPool(EdPemError):
    """Chưa cấu hình buffer pool"""

    def __init__(self, message="buffer pool is not set"):
        super().__init__(message)
