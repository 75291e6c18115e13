"""
Buffer pool - reusable byte buffers for PEM encode/decode
"""
import threading
from contextlib import contextmanager

from edpem.crypto.errors import BufferWriteError
from edpem.utils.logger import Logger


class Buffer:
    """Byte buffer có thể reset và tái sử dụng"""

    def __init__(self, max_size=None):
        self.max_size = max_size
        self._data = bytearray()

    def write_bytes(self, data):
        """Ghi bytes, trả về số bytes đã ghi"""
        if self.max_size is not None and len(self._data) + len(data) > self.max_size:
            raise BufferWriteError(
                f"write of {len(data)} bytes exceeds buffer limit of {self.max_size}"
            )
        self._data.extend(data)
        return len(data)

    def write_string(self, text, encoding="utf-8"):
        """Encode string rồi ghi vào buffer"""
        try:
            data = text.encode(encoding)
        except (UnicodeEncodeError, AttributeError) as e:
            raise BufferWriteError(f"cannot encode text: {e}") from e
        return self.write_bytes(data)

    def reset(self):
        self._data.clear()

    def get_bytes(self):
        return bytes(self._data)

    def get_string(self, encoding="utf-8"):
        return self._data.decode(encoding)

    def __len__(self):
        return len(self._data)

    def __repr__(self):
        return f"Buffer({len(self._data)} bytes)"


class BufferPool:
    """Pool các Buffer dùng chung, an toàn khi gọi từ nhiều thread"""

    def __init__(self, config=None):
        config = config or {}
        self.max_buffer_size = config.get("max_buffer_size")  # None: không giới hạn
        self.max_idle_buffers = config.get("max_idle_buffers", 16)

        self._lock = threading.Lock()
        self._idle = []
        self._checked_out = {}  # id(buffer) -> buffer
        self._created = 0
        self._reused = 0
        self.logger = Logger("edpem.buffer_pool")

    def acquire(self):
        """Lấy một buffer rỗng khỏi pool"""
        with self._lock:
            if self._idle:
                buff = self._idle.pop()
                self._reused += 1
            else:
                buff = Buffer(self.max_buffer_size)
                self._created += 1
            self._checked_out[id(buff)] = buff
        return buff

    def release(self, buff):
        """Trả buffer về pool"""
        with self._lock:
            if self._checked_out.pop(id(buff), None) is not buff:
                raise ValueError(f"{buff!r} is not checked out from this pool")
            buff.reset()
            if len(self._idle) < self.max_idle_buffers:
                self._idle.append(buff)
            else:
                self.logger.log("Idle limit reached, dropping buffer", level="debug")

    @contextmanager
    def borrow(self):
        """acquire() + release() trên mọi nhánh thoát"""
        buff = self.acquire()
        try:
            yield buff
        finally:
            self.release(buff)

    @property
    def in_use(self):
        with self._lock:
            return len(self._checked_out)

    def stats(self):
        with self._lock:
            return {
                "created": self._created,
                "reused": self._reused,
                "idle": len(self._idle),
                "in_use": len(self._checked_out),
            }

    def __repr__(self):
        s = self.stats()
        return f"BufferPool(idle={s['idle']}, in_use={s['in_use']})"
