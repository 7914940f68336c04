"""测试主机过滤器"""

import pytest
from backuppc_check.models.host_status import (
    FilterCriteria, HostStatus, HostType, MatchMode, ScopeMode
)
from backuppc_check.services.host_filter import HostFilter
from backuppc_check.utils.exceptions import ConfigurationError, ErrorCode


@pytest.fixture
def hosts():
    """包含内部条目和归档主机的快照"""
    return {
        'beta': HostStatus('beta'),
        ' admin': HostStatus(' admin'),
        'alphabet': HostStatus('alphabet'),
        'vault': HostStatus('vault', host_type=HostType.ARCHIVE),
        'alpha': HostStatus('alpha'),
    }


def names(selected):
    return [host.name for host in selected]


class TestHostFilter:
    """测试HostFilter类"""

    def test_default_selects_all_sorted(self, hosts):
        """测试默认选择全部主机并按名称排序，跳过内部条目"""
        selected = HostFilter(FilterCriteria()).select(hosts)
        assert names(selected) == ['alpha', 'alphabet', 'beta', 'vault']

    def test_include_exact(self, hosts):
        """测试精确匹配包含列表"""
        selected = HostFilter(FilterCriteria(include=('alpha', 'beta'))).select(hosts)
        assert names(selected) == ['alpha', 'beta']

    def test_include_substring_opt_in(self, hosts):
        """测试显式开启子串匹配"""
        criteria = FilterCriteria(include=('alpha',), match_mode=MatchMode.SUBSTRING)
        selected = HostFilter(criteria).select(hosts)
        assert names(selected) == ['alpha', 'alphabet']

    def test_exclude(self, hosts):
        """测试排除列表"""
        selected = HostFilter(FilterCriteria(exclude=('beta',))).select(hosts)
        assert names(selected) == ['alpha', 'alphabet', 'vault']

    def test_exclude_wins_over_include(self, hosts):
        """测试同时出现在包含和排除列表中的主机被排除"""
        criteria = FilterCriteria(include=('alpha', 'beta'), exclude=('alpha',))
        selected = HostFilter(criteria).select(hosts)
        assert names(selected) == ['beta']

    def test_backup_only(self, hosts):
        """测试只检查备份主机"""
        selected = HostFilter(FilterCriteria(scope_mode=ScopeMode.BACKUP_ONLY)).select(hosts)
        assert names(selected) == ['alpha', 'alphabet', 'beta']

    def test_archive_only(self, hosts):
        """测试只检查归档主机"""
        selected = HostFilter(FilterCriteria(scope_mode=ScopeMode.ARCHIVE_ONLY)).select(hosts)
        assert names(selected) == ['vault']

    def test_unknown_include_host(self, hosts):
        """测试包含列表中的未知主机"""
        with pytest.raises(ConfigurationError, match=r"Unknown host \(ghost\)") as exc_info:
            HostFilter(FilterCriteria(include=('ghost',))).select(hosts)

        assert exc_info.value.error_code == ErrorCode.UNKNOWN_HOST

    def test_unknown_exclude_host(self, hosts):
        """测试排除列表中的未知主机"""
        with pytest.raises(ConfigurationError, match=r"Unknown host \(ghost\)"):
            HostFilter(FilterCriteria(exclude=('ghost',))).select(hosts)

    def test_exact_mode_rejects_partial_name(self, hosts):
        """测试精确模式下部分主机名视为未知"""
        with pytest.raises(ConfigurationError, match=r"Unknown host \(alph\)"):
            HostFilter(FilterCriteria(include=('alph',))).select(hosts)

    def test_substring_mode_accepts_partial_name(self, hosts):
        """测试子串模式下部分主机名可用"""
        criteria = FilterCriteria(include=('alph',), match_mode=MatchMode.SUBSTRING)
        assert names(HostFilter(criteria).select(hosts)) == ['alpha', 'alphabet']

    def test_empty_snapshot(self):
        """测试空快照"""
        assert HostFilter(FilterCriteria()).select({}) == []
