"""评估服务模块"""

from .aggregator import OutcomeAggregator
from .classifier import HostClassifier
from .config_manager import ConfigManager
from .evaluator import BackupStatusEvaluator
from .host_filter import HostFilter

__all__ = ['OutcomeAggregator', 'HostClassifier', 'ConfigManager',
           'BackupStatusEvaluator', 'HostFilter']
