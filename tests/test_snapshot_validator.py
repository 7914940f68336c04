"""测试状态快照解析"""

import pytest
from backuppc_check.models.host_status import HostType
from backuppc_check.utils.exceptions import AcquisitionError, ErrorCode
from backuppc_check.utils.snapshot_validator import SnapshotValidator


class TestSnapshotValidator:
    """测试SnapshotValidator类"""

    def test_parse_valid_snapshot(self):
        """测试解析有效快照"""
        payload = {
            'hosts': {
                'alpha': {'type': 'full', 'lastGoodBackupTime': 1700000000, 'error': ''},
                'vault': {'type': 'archive', 'lastGoodBackupTime': 1699990000.5},
                ' admin': {'state': 'Status_idle'},
            },
            'jobs': {'alpha': {'pid': 1234}},
            'info': {'Version': '4.4.0'}
        }

        snapshot = SnapshotValidator.parse_snapshot(payload)

        assert set(snapshot.hosts) == {'alpha', 'vault', ' admin'}
        assert snapshot.hosts['alpha'].host_type is HostType.BACKUP
        assert snapshot.hosts['alpha'].last_good_backup_time == 1700000000.0
        assert snapshot.hosts['alpha'].error_text is None
        assert snapshot.hosts['vault'].host_type is HostType.ARCHIVE
        assert snapshot.hosts[' admin'].is_reserved is True
        assert snapshot.jobs == {'alpha': {'pid': 1234}}
        assert snapshot.info == {'Version': '4.4.0'}

    def test_zero_timestamp_means_never(self):
        """测试时间戳为0表示从未备份"""
        host = SnapshotValidator.parse_host('alpha', {'lastGoodBackupTime': 0})
        assert host.last_good_backup_time is None

    def test_error_text_kept(self):
        """测试保留错误信息"""
        host = SnapshotValidator.parse_host('alpha', {'error': 'no ping response'})
        assert host.error_text == 'no ping response'
        assert host.has_live_error is True

    def test_optional_blocks(self):
        """测试jobs和info可缺省"""
        snapshot = SnapshotValidator.parse_snapshot({'hosts': {}})

        assert snapshot.hosts == {}
        assert snapshot.jobs == {}
        assert snapshot.info == {}

    @pytest.mark.parametrize("payload", [
        None,
        [],
        "hosts",
        {},
        {'hosts': []},
        {'hosts': {}, 'jobs': []},
        {'hosts': {'alpha': 'ok'}},
        {'hosts': {'alpha': {'type': 5}}},
        {'hosts': {'alpha': {'lastGoodBackupTime': 'yesterday'}}},
        {'hosts': {'alpha': {'lastGoodBackupTime': True}}},
        {'hosts': {'alpha': {'error': ['x']}}},
        {'hosts': {'': {}}},
        {'hosts': {'alpha': {'lastGoodBackupTime': float('nan')}}},
        {'hosts': {'alpha': {'lastGoodBackupTime': float('inf')}}},
        {'hosts': {'alpha': {'lastGoodBackupTime': float('-inf')}}},
        {'hosts': {'alpha': {'lastGoodBackupTime': 10 ** 400}}},
        {'hosts': {True: {}}},
    ])
    def test_malformed_payload(self, payload):
        """测试结构不符的快照"""
        with pytest.raises(AcquisitionError, match="Malformed status") as exc_info:
            SnapshotValidator.parse_snapshot(payload)

        assert exc_info.value.error_code == ErrorCode.INVALID_RESPONSE

    def test_numeric_host_name_coerced(self):
        """测试数字主机名转换为字符串"""
        snapshot = SnapshotValidator.parse_snapshot({'hosts': {123: {'lastGoodBackupTime': 1700000000}}})

        assert set(snapshot.hosts) == {'123'}
        assert snapshot.hosts['123'].name == '123'

    def test_host_summary(self):
        """测试快照概要"""
        snapshot = SnapshotValidator.parse_snapshot({
            'hosts': {
                'alpha': {},
                'vault': {'type': 'archive'},
                ' admin': {},
                ' trashClean': {},
            }
        })

        assert SnapshotValidator.host_summary(snapshot) == {
            'hosts': 2, 'archive_hosts': 1, 'reserved_entries': 2
        }
