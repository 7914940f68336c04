"""配置管理器"""

import yaml
from typing import Dict, Any, Optional
from ..utils.exceptions import ConfigurationError, ErrorCode
from ..utils.config_validator import ConfigValidator
from ..utils.log_manager import get_logger


class ConfigManager:
    """配置管理器，负责可选YAML配置文件的加载、解析和验证"""

    def __init__(self, config_path: Optional[str] = None):
        """
        初始化配置管理器

        Args:
            config_path: 配置文件路径，为空时使用内置默认值
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self.logger = get_logger('config_manager')

    def load_config(self) -> Dict[str, Any]:
        """
        加载YAML配置文件

        Returns:
            Dict[str, Any]: 配置字典，未指定配置文件时为空字典

        Raises:
            ConfigurationError: 配置加载或验证失败
        """
        if not self.config_path:
            self.logger.debug("未指定配置文件，使用默认配置")
            self.config = {}
            return self.config

        self.logger.info(f"开始加载配置文件: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as file:
                config = yaml.safe_load(file)
        except yaml.YAMLError as e:
            self.logger.error(f"YAML格式错误: {e}")
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}",
                                     ErrorCode.CONFIG_PARSE_ERROR,
                                     config_path=self.config_path)
        except FileNotFoundError:
            self.logger.error(f"配置文件不存在: {self.config_path}")
            raise ConfigurationError(f"Config file not found: {self.config_path}",
                                     ErrorCode.CONFIG_FILE_NOT_FOUND,
                                     config_path=self.config_path)
        except PermissionError:
            self.logger.error(f"没有权限读取配置文件: {self.config_path}")
            raise ConfigurationError(f"Permission denied reading config file: {self.config_path}",
                                     ErrorCode.CONFIG_FILE_NOT_FOUND,
                                     config_path=self.config_path)

        if config is None:
            self.logger.error("配置文件为空")
            raise ConfigurationError(f"Config file is empty: {self.config_path}",
                                     config_path=self.config_path)

        self.logger.debug("开始验证配置文件内容")
        self._validate_config(config)

        self.config = config
        self.logger.info(f"配置验证成功: {', '.join(sorted(config.keys())) or '无配置段'}")
        return self.config

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """
        验证配置文件内容

        Raises:
            ConfigurationError: 配置验证失败
        """
        if not isinstance(config, dict):
            raise ConfigurationError("Config root must be a mapping", config_path=self.config_path)

        if 'global' in config:
            ConfigValidator.validate_global_config(config['global'])

        if 'source' in config:
            ConfigValidator.validate_source_config(config['source'])

        if 'thresholds' in config:
            ConfigValidator.validate_thresholds_config(config['thresholds'])

        if 'filter' in config:
            ConfigValidator.validate_filter_config(config['filter'])

    def get_global_config(self) -> Dict[str, Any]:
        """获取全局配置"""
        return self.config.get('global', {})

    def get_source_config(self) -> Dict[str, Any]:
        """获取状态来源配置"""
        return self.config.get('source', {})

    def get_thresholds_config(self) -> Dict[str, Any]:
        """获取阈值配置"""
        return self.config.get('thresholds', {})

    def get_filter_config(self) -> Dict[str, Any]:
        """获取主机过滤配置"""
        return self.config.get('filter', {})
