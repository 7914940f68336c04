"""主机过滤器"""

from typing import Dict, Iterable, List

from ..models.host_status import FilterCriteria, HostStatus, HostType, MatchMode, ScopeMode
from ..utils.exceptions import ConfigurationError, ErrorCode
from ..utils.log_manager import get_logger


class HostFilter:
    """根据包含/排除列表和主机类型选出参与评估的主机"""

    def __init__(self, criteria: FilterCriteria):
        """
        初始化主机过滤器

        Args:
            criteria: 过滤条件
        """
        self.criteria = criteria
        self.logger = get_logger('host_filter')

    def _matches(self, pattern: str, host_name: str) -> bool:
        if self.criteria.match_mode is MatchMode.SUBSTRING:
            return pattern in host_name
        return pattern == host_name

    def _matches_any(self, patterns: Iterable[str], host_name: str) -> bool:
        return any(self._matches(pattern, host_name) for pattern in patterns)

    def check_known_hosts(self, hosts: Dict[str, HostStatus]) -> None:
        """
        检查包含/排除列表中的每一项都能在快照中找到

        Raises:
            ConfigurationError: 列表中存在未知主机
        """
        for pattern in list(self.criteria.include) + list(self.criteria.exclude):
            if not any(self._matches(pattern, name) for name in hosts):
                self.logger.error(f"过滤列表中的主机不存在: {pattern}")
                raise ConfigurationError(
                    f"Unknown host ({pattern})",
                    ErrorCode.UNKNOWN_HOST,
                    details={'host': pattern}
                )

    def select(self, hosts: Dict[str, HostStatus]) -> List[HostStatus]:
        """
        选出参与评估的主机，按主机名升序排列

        Args:
            hosts: 快照中的全部主机

        Returns:
            List[HostStatus]: 参与评估的主机

        Raises:
            ConfigurationError: 包含/排除列表中存在未知主机
        """
        self.check_known_hosts(hosts)

        selected = []
        for name in sorted(hosts):
            host = hosts[name]
            if host.is_reserved:
                continue
            if self.criteria.include and not self._matches_any(self.criteria.include, name):
                continue
            if self._matches_any(self.criteria.exclude, name):
                continue
            if (self.criteria.scope_mode is ScopeMode.BACKUP_ONLY
                    and host.host_type is HostType.ARCHIVE):
                continue
            if (self.criteria.scope_mode is ScopeMode.ARCHIVE_ONLY
                    and host.host_type is not HostType.ARCHIVE):
                continue
            selected.append(host)

        self.logger.debug(f"快照共 {len(hosts)} 个条目，参与评估 {len(selected)} 个主机")
        return selected
