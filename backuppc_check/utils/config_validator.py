"""配置验证工具"""

from typing import Dict, Any

from .exceptions import ConfigurationError, ErrorCode
from ..models.host_status import ThresholdConfig, ScopeMode, MatchMode

SUPPORTED_SOURCE_TYPES = ['http', 'file']
THRESHOLD_KEYS = ['warning', 'critical', 'warning_old', 'critical_old']


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """配置验证器"""

    @staticmethod
    def validate_thresholds(thresholds: ThresholdConfig) -> None:
        """
        验证阈值的先后关系

        Args:
            thresholds: 阈值配置

        Raises:
            ConfigurationError: 警告阈值大于严重阈值
        """
        if thresholds.warn_fail_count > thresholds.crit_fail_count:
            raise ConfigurationError(
                f"Warning failure count ({thresholds.warn_fail_count}) is greater than "
                f"critical failure count ({thresholds.crit_fail_count})",
                ErrorCode.THRESHOLD_ORDER_ERROR
            )
        if thresholds.warn_age_hours > thresholds.crit_age_hours:
            raise ConfigurationError(
                f"Warning age ({thresholds.warn_age_hours}h) is greater than "
                f"critical age ({thresholds.crit_age_hours}h)",
                ErrorCode.THRESHOLD_ORDER_ERROR
            )

    @staticmethod
    def resolve_scope_mode(archive_only: bool, backup_only: bool) -> ScopeMode:
        """
        由两个互斥开关得到过滤范围

        Raises:
            ConfigurationError: 两个开关同时打开
        """
        if archive_only and backup_only:
            raise ConfigurationError(
                "Options --archive-only and --backup-only are mutually exclusive",
                ErrorCode.CONFLICTING_FLAGS
            )
        if archive_only:
            return ScopeMode.ARCHIVE_ONLY
        if backup_only:
            return ScopeMode.BACKUP_ONLY
        return ScopeMode.ALL

    @staticmethod
    def validate_global_config(global_config: Dict[str, Any]) -> None:
        """
        验证全局配置

        Raises:
            ConfigurationError: 配置验证失败
        """
        if not isinstance(global_config, dict):
            raise ConfigurationError("global section must be a mapping")

        log_level = global_config.get('log_level')
        if log_level is not None:
            valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
            if log_level not in valid_levels:
                raise ConfigurationError(f"log_level must be one of {valid_levels}")

        log_file = global_config.get('log_file')
        if log_file is not None and not isinstance(log_file, str):
            raise ConfigurationError("log_file must be a string")

    @staticmethod
    def validate_source_config(source_config: Dict[str, Any]) -> None:
        """
        验证状态来源配置

        Raises:
            ConfigurationError: 配置验证失败
        """
        if not isinstance(source_config, dict):
            raise ConfigurationError("source section must be a mapping")

        if 'type' not in source_config:
            raise ConfigurationError("source section is missing required key: type")

        source_type = source_config.get('type')
        if source_type not in SUPPORTED_SOURCE_TYPES:
            raise ConfigurationError(
                f"Unsupported source type '{source_type}', expected one of {SUPPORTED_SOURCE_TYPES}")

        timeout = source_config.get('timeout')
        if timeout is not None and (not _is_number(timeout) or timeout <= 0):
            raise ConfigurationError("source timeout must be a positive number")

    @staticmethod
    def validate_thresholds_config(thresholds_config: Dict[str, Any]) -> None:
        """
        验证配置文件中的阈值段（只检查类型，先后关系在合并命令行参数后检查）

        Raises:
            ConfigurationError: 配置验证失败
        """
        if not isinstance(thresholds_config, dict):
            raise ConfigurationError("thresholds section must be a mapping")

        for key, value in thresholds_config.items():
            if key not in THRESHOLD_KEYS:
                raise ConfigurationError(f"Unknown threshold '{key}', expected one of {THRESHOLD_KEYS}")
            if not _is_number(value):
                raise ConfigurationError(f"Threshold '{key}' must be a number")

    @staticmethod
    def validate_filter_config(filter_config: Dict[str, Any]) -> None:
        """
        验证配置文件中的过滤段

        Raises:
            ConfigurationError: 配置验证失败
        """
        if not isinstance(filter_config, dict):
            raise ConfigurationError("filter section must be a mapping")

        for key in ('hosts', 'exclude'):
            names = filter_config.get(key, [])
            if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
                raise ConfigurationError(f"filter.{key} must be a list of host names")

        scope = filter_config.get('scope')
        if scope is not None and scope not in [m.value for m in ScopeMode]:
            raise ConfigurationError(
                f"filter.scope must be one of {[m.value for m in ScopeMode]}")

        match = filter_config.get('match')
        if match is not None and match not in [m.value for m in MatchMode]:
            raise ConfigurationError(
                f"filter.match must be one of {[m.value for m in MatchMode]}")
