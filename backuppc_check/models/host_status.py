"""备份状态相关的数据模型"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional, Tuple

STATUS_LABEL = 'BACKUPPC'


class HostType(Enum):
    """主机类型：普通备份客户端或归档主机"""
    BACKUP = 'backup'
    ARCHIVE = 'archive'

    @classmethod
    def from_raw(cls, raw_type: Optional[str]) -> 'HostType':
        """BackupPC 的 type 字段只有 'archive' 表示归档主机，其余均为备份客户端"""
        return cls.ARCHIVE if raw_type == 'archive' else cls.BACKUP


class ScopeMode(Enum):
    """主机类型过滤范围"""
    ALL = 'all'
    BACKUP_ONLY = 'backup_only'
    ARCHIVE_ONLY = 'archive_only'


class MatchMode(Enum):
    """包含/排除列表的主机名匹配方式"""
    EXACT = 'exact'
    SUBSTRING = 'substring'


class StalenessBand(Enum):
    """最近一次成功备份的陈旧程度"""
    FRESH = 'fresh'
    STALE = 'stale'
    VERY_STALE = 'very_stale'


class Severity(Enum):
    """检查结果级别，值即进程退出码"""
    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    def raise_to(self, other: 'Severity') -> 'Severity':
        """只升不降"""
        return other if other.value > self.value else self


@dataclass
class HostStatus:
    """单个主机的备份状态"""
    name: str
    host_type: HostType = HostType.BACKUP
    last_good_backup_time: Optional[float] = None
    error_text: Optional[str] = None

    @property
    def is_reserved(self) -> bool:
        # 以空格开头的是服务器内部条目，如 " admin"
        return self.name.startswith(' ')

    @property
    def has_live_error(self) -> bool:
        return bool(self.error_text)


@dataclass
class StatusSnapshot:
    """状态快照：主机名到主机状态的映射，以及未使用的任务和服务器信息"""
    hosts: Dict[str, HostStatus] = field(default_factory=dict)
    jobs: Dict[str, Any] = field(default_factory=dict)
    info: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ThresholdConfig:
    """分类阈值，每次调用构造一次"""
    warn_fail_count: float = 1
    crit_fail_count: float = 2
    warn_age_hours: float = 25.0
    crit_age_hours: float = 49.0


@dataclass(frozen=True)
class FilterCriteria:
    """主机过滤条件"""
    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()
    scope_mode: ScopeMode = ScopeMode.ALL
    match_mode: MatchMode = MatchMode.EXACT


@dataclass(frozen=True)
class HostClassification:
    """单个主机的分类结果"""
    name: str
    has_live_error: bool
    age_hours: float
    staleness_band: StalenessBand
    error_text: Optional[str] = None

    @property
    def is_good(self) -> bool:
        return not self.has_live_error and self.staleness_band is StalenessBand.FRESH

    @property
    def display_age(self) -> str:
        """保留一位小数，仅用于展示"""
        return f"{self.age_hours:.1f}"


@dataclass
class EvaluationOutcome:
    """一次评估的完整结果"""
    total_evaluated: int
    good: Tuple[str, ...]
    erroring: Tuple[str, ...]
    stale: Tuple[str, ...]
    very_stale: Tuple[str, ...]
    severity: Severity
    message: str
    classifications: Tuple[HostClassification, ...] = ()

    @property
    def status_line(self) -> str:
        return format_status_line(self.severity, self.message)


def format_status_line(severity: Severity, message: str) -> str:
    """
    生成监控系统期望的单行输出

    Args:
        severity: 结果级别
        message: 诊断信息

    Returns:
        str: 形如 "BACKUPPC WARNING - ..." 的结果行
    """
    return f"{STATUS_LABEL} {severity.name} - {message}"
