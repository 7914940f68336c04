"""状态来源基类"""

from abc import ABC, abstractmethod
from typing import Dict, Any
from ..models.host_status import StatusSnapshot
from ..utils.log_manager import get_logger


class BaseStatusSource(ABC):
    """状态来源抽象基类，一次调用只获取一次完整快照"""

    def __init__(self, name: str, config: Dict[str, Any]):
        """
        初始化状态来源

        Args:
            name: 来源名称
            config: 来源配置参数
        """
        self.name = name
        self.config = config
        self.source_type = self.__class__.__name__.replace('StatusSource', '').lower()
        self.logger = get_logger(f'source.{self.source_type}.{self.name}')

    @abstractmethod
    async def fetch_snapshot(self) -> StatusSnapshot:
        """
        获取完整的状态快照

        Returns:
            StatusSnapshot: 状态快照

        Raises:
            AcquisitionError: 来源不可用或返回内容不合法
        """
        pass

    @abstractmethod
    def validate_config(self) -> bool:
        """
        验证配置参数是否有效

        Returns:
            bool: 配置是否有效
        """
        pass

    def get_timeout(self) -> float:
        """
        获取超时时间配置

        Returns:
            float: 超时时间（秒）
        """
        return self.config.get('timeout', 10)
