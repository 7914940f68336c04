"""测试配置验证器"""

import pytest
from backuppc_check.models.host_status import ThresholdConfig, ScopeMode
from backuppc_check.utils.config_validator import ConfigValidator
from backuppc_check.utils.exceptions import ConfigurationError, ErrorCode


class TestThresholdValidation:
    """测试阈值验证"""

    def test_defaults_valid(self):
        """测试默认阈值有效"""
        ConfigValidator.validate_thresholds(ThresholdConfig())

    def test_equal_thresholds_valid(self):
        """测试警告阈值等于严重阈值"""
        ConfigValidator.validate_thresholds(
            ThresholdConfig(warn_fail_count=2, crit_fail_count=2,
                            warn_age_hours=30, crit_age_hours=30))

    def test_fail_count_order(self):
        """测试错误主机数阈值顺序"""
        with pytest.raises(ConfigurationError, match="failure count") as exc_info:
            ConfigValidator.validate_thresholds(
                ThresholdConfig(warn_fail_count=3, crit_fail_count=2))

        assert exc_info.value.error_code == ErrorCode.THRESHOLD_ORDER_ERROR

    def test_age_order(self):
        """测试备份时长阈值顺序"""
        with pytest.raises(ConfigurationError, match="age"):
            ConfigValidator.validate_thresholds(
                ThresholdConfig(warn_age_hours=50, crit_age_hours=49))


class TestScopeMode:
    """测试主机类型范围"""

    def test_resolve(self):
        """测试开关组合"""
        assert ConfigValidator.resolve_scope_mode(False, False) is ScopeMode.ALL
        assert ConfigValidator.resolve_scope_mode(True, False) is ScopeMode.ARCHIVE_ONLY
        assert ConfigValidator.resolve_scope_mode(False, True) is ScopeMode.BACKUP_ONLY

    def test_conflicting_flags(self):
        """测试互斥开关"""
        with pytest.raises(ConfigurationError, match="mutually exclusive") as exc_info:
            ConfigValidator.resolve_scope_mode(True, True)

        assert exc_info.value.error_code == ErrorCode.CONFLICTING_FLAGS


class TestConfigSections:
    """测试配置文件各段验证"""

    def test_validate_global_config_valid(self):
        """测试有效的全局配置"""
        ConfigValidator.validate_global_config({'log_level': 'INFO', 'log_file': '/tmp/check.log'})

    def test_validate_global_config_invalid_log_level(self):
        """测试无效的日志级别"""
        with pytest.raises(ConfigurationError, match="log_level"):
            ConfigValidator.validate_global_config({'log_level': 'LOUD'})

    def test_validate_source_config_valid(self):
        """测试有效的来源配置"""
        ConfigValidator.validate_source_config({'type': 'http', 'url': 'http://x/status', 'timeout': 5})

    def test_validate_source_config_missing_type(self):
        """测试缺少type的来源配置"""
        with pytest.raises(ConfigurationError, match="missing required key: type"):
            ConfigValidator.validate_source_config({'url': 'http://x/status'})

    def test_validate_source_config_unsupported_type(self):
        """测试不支持的来源类型"""
        with pytest.raises(ConfigurationError, match="Unsupported source type"):
            ConfigValidator.validate_source_config({'type': 'ssh'})

    def test_validate_source_config_bad_timeout(self):
        """测试无效超时"""
        with pytest.raises(ConfigurationError, match="timeout"):
            ConfigValidator.validate_source_config({'type': 'file', 'timeout': 0})

    def test_validate_thresholds_config(self):
        """测试阈值段"""
        ConfigValidator.validate_thresholds_config({'warning': 1, 'critical_old': 72.5})

        with pytest.raises(ConfigurationError, match="must be a number"):
            ConfigValidator.validate_thresholds_config({'warning': 'one'})

        with pytest.raises(ConfigurationError, match="Unknown threshold"):
            ConfigValidator.validate_thresholds_config({'warn': 1})

    def test_validate_filter_config(self):
        """测试过滤段"""
        ConfigValidator.validate_filter_config(
            {'hosts': ['alpha'], 'exclude': [], 'scope': 'backup_only', 'match': 'substring'})

        with pytest.raises(ConfigurationError, match="list of host names"):
            ConfigValidator.validate_filter_config({'hosts': 'alpha'})

        with pytest.raises(ConfigurationError, match="filter.scope"):
            ConfigValidator.validate_filter_config({'scope': 'everything'})

        with pytest.raises(ConfigurationError, match="filter.match"):
            ConfigValidator.validate_filter_config({'match': 'regex'})
