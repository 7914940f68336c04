"""自定义异常类和错误代码"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """错误代码枚举"""
    # 通用错误 (1000-1999)
    UNKNOWN_ERROR = 1000
    VALIDATION_ERROR = 1002

    # 配置错误 (2000-2999)
    CONFIG_FILE_NOT_FOUND = 2000
    CONFIG_PARSE_ERROR = 2001
    CONFIG_VALIDATION_ERROR = 2002
    THRESHOLD_ORDER_ERROR = 2003
    CONFLICTING_FLAGS = 2004
    UNKNOWN_HOST = 2005

    # 状态获取错误 (3000-3999)
    SOURCE_INITIALIZATION_ERROR = 3000
    CONNECTION_ERROR = 3001
    TIMEOUT_ERROR = 3002
    AUTHENTICATION_ERROR = 3003
    SOURCE_NOT_FOUND = 3004
    SERVICE_UNAVAILABLE = 3005
    INVALID_RESPONSE = 3006


class BackupCheckError(Exception):
    """备份检查基础异常类"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

    def format_error(self) -> str:
        """格式化错误信息（用于日志）"""
        error_msg = f"[{self.error_code.name}] {self.message}"
        if self.details:
            details_str = ", ".join([f"{k}={v}" for k, v in self.details.items()])
            error_msg += f" (详情: {details_str})"
        if self.cause:
            error_msg += f" (原因: {str(self.cause)})"
        return error_msg


class ConfigurationError(BackupCheckError):
    """阈值、命令行参数、配置文件或过滤主机相关异常"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_VALIDATION_ERROR,
        config_path: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop('details', {})
        if config_path:
            details['config_path'] = config_path
        super().__init__(message, error_code, details, **kwargs)


class AcquisitionError(BackupCheckError):
    """状态快照获取相关异常"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONNECTION_ERROR,
        source_name: Optional[str] = None,
        source_type: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop('details', {})
        if source_name:
            details['source_name'] = source_name
        if source_type:
            details['source_type'] = source_type
        super().__init__(message, error_code, details, **kwargs)
