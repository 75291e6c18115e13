"""
Utilities - Buffer pool, Logging
"""

from .buffer_pool import Buffer, BufferPool
from .logger import Logger

__all__ = ['Buffer', 'BufferPool', 'Logger']
