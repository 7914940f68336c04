"""工具模块"""

from .exceptions import ErrorCode, BackupCheckError, ConfigurationError, AcquisitionError
from .log_manager import LogManager, LogLevel, get_logger, log_manager

__all__ = [
    'ErrorCode', 'BackupCheckError', 'ConfigurationError', 'AcquisitionError',
    'LogManager', 'LogLevel', 'get_logger', 'log_manager'
]
