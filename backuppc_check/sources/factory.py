"""状态来源工厂"""

from typing import Dict, Type, Any
from .base import BaseStatusSource
from ..utils.exceptions import ConfigurationError, ErrorCode


class StatusSourceFactory:
    """状态来源工厂类，负责创建和管理不同类型的状态来源"""

    def __init__(self):
        """初始化工厂"""
        self._sources: Dict[str, Type[BaseStatusSource]] = {}

    def register_source(self, source_type: str, source_class: Type[BaseStatusSource]):
        """
        注册状态来源类

        Args:
            source_type: 来源类型名称
            source_class: 状态来源类

        Raises:
            ConfigurationError: 注册失败
        """
        if not issubclass(source_class, BaseStatusSource):
            raise ConfigurationError(
                f"Source class {source_class.__name__} must inherit from BaseStatusSource")

        if source_type in self._sources:
            raise ConfigurationError(f"Source type '{source_type}' is already registered")

        self._sources[source_type] = source_class

    def create_source(self, source_name: str, source_config: Dict[str, Any]) -> BaseStatusSource:
        """
        创建状态来源实例

        Args:
            source_name: 来源名称
            source_config: 来源配置

        Returns:
            BaseStatusSource: 状态来源实例

        Raises:
            ConfigurationError: 创建失败
        """
        source_type = source_config.get('type')
        if not source_type:
            raise ConfigurationError(f"Source '{source_name}' is missing 'type'")

        if source_type not in self._sources:
            raise ConfigurationError(f"Unsupported source type: '{source_type}'")

        source = self._sources[source_type](source_name, source_config)
        if not source.validate_config():
            raise ConfigurationError(
                f"Invalid configuration for {source_type} source '{source_name}'",
                ErrorCode.CONFIG_VALIDATION_ERROR
            )

        return source


# 全局工厂实例
status_source_factory = StatusSourceFactory()


def register_source(source_type: str):
    """
    装饰器：注册状态来源类

    Args:
        source_type: 来源类型名称

    Returns:
        装饰器函数
    """
    def decorator(source_class: Type[BaseStatusSource]):
        status_source_factory.register_source(source_type, source_class)
        return source_class

    return decorator
