import hashlib


class Hasher:
    """Hash key bytes để nhận diện key mà không lộ key"""

    @staticmethod
    def hash_bytes(data_bytes):
        """SHA-256 hex của raw bytes"""
        return hashlib.sha256(data_bytes).hexdigest()

    @staticmethod
    def fingerprint(public_key_bytes, length=16):
        """Fingerprint ngắn dạng aa:bb:cc:... cho log và hiển thị"""
        digest = Hasher.hash_bytes(public_key_bytes)[:length * 2]
        return ":".join(digest[i:i + 2] for i in range(0, len(digest), 2))
