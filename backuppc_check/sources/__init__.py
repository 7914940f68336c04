"""状态来源模块"""

from .base import BaseStatusSource
from .factory import StatusSourceFactory, status_source_factory, register_source
from .file_source import FileStatusSource
from .http_source import HttpStatusSource

__all__ = ['BaseStatusSource', 'StatusSourceFactory', 'status_source_factory',
           'register_source', 'HttpStatusSource', 'FileStatusSource']
