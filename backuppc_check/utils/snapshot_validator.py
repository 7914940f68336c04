"""状态快照解析与结构验证

服务器返回的内容只作为数据解析，结构不符即视为获取失败。
"""

import math
from typing import Dict, Any, Optional

from .exceptions import AcquisitionError, ErrorCode
from ..models.host_status import HostStatus, HostType, StatusSnapshot


def _invalid(message: str) -> AcquisitionError:
    return AcquisitionError(message, ErrorCode.INVALID_RESPONSE)


class SnapshotValidator:
    """状态快照验证器"""

    @staticmethod
    def parse_snapshot(payload: Any) -> StatusSnapshot:
        """
        将原始数据解析为状态快照

        期望结构::

            {
                "hosts": {"<name>": {"type": "full", "lastGoodBackupTime": 1700000000, "error": ""}},
                "jobs": {...},
                "info": {...}
            }

        Args:
            payload: 已反序列化的原始数据

        Returns:
            StatusSnapshot: 状态快照

        Raises:
            AcquisitionError: 结构不符合预期
        """
        if not isinstance(payload, dict):
            raise _invalid("Malformed status: top level is not a mapping")

        hosts = payload.get('hosts')
        if not isinstance(hosts, dict):
            raise _invalid("Malformed status: missing 'hosts' mapping")

        for block in ('jobs', 'info'):
            if payload.get(block) is not None and not isinstance(payload[block], dict):
                raise _invalid(f"Malformed status: '{block}' is not a mapping")

        parsed = {}
        for name, entry in hosts.items():
            # YAML 会把未加引号的数字主机名解析为数值
            if isinstance(name, (int, float)) and not isinstance(name, bool):
                name = str(name)
            parsed[name] = SnapshotValidator.parse_host(name, entry)

        return StatusSnapshot(
            hosts=parsed,
            jobs=payload.get('jobs') or {},
            info=payload.get('info') or {}
        )

    @staticmethod
    def parse_host(name: Any, entry: Any) -> HostStatus:
        """
        解析单个主机条目

        Raises:
            AcquisitionError: 条目结构不符合预期
        """
        if not isinstance(name, str) or not name:
            raise _invalid(f"Malformed status: invalid host name {name!r}")
        if not isinstance(entry, dict):
            raise _invalid(f"Malformed status for host ({name}): entry is not a mapping")

        raw_type = entry.get('type')
        if raw_type is not None and not isinstance(raw_type, str):
            raise _invalid(f"Malformed status for host ({name}): 'type' is not a string")

        last_good = SnapshotValidator._parse_timestamp(name, entry.get('lastGoodBackupTime'))

        error_text = entry.get('error')
        if error_text is not None and not isinstance(error_text, str):
            raise _invalid(f"Malformed status for host ({name}): 'error' is not a string")

        return HostStatus(
            name=name,
            host_type=HostType.from_raw(raw_type),
            last_good_backup_time=last_good,
            error_text=error_text or None
        )

    @staticmethod
    def _parse_timestamp(name: str, value: Any) -> Optional[float]:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _invalid(
                f"Malformed status for host ({name}): 'lastGoodBackupTime' is not a number")
        try:
            timestamp = float(value)
        except OverflowError:
            timestamp = math.inf
        if not math.isfinite(timestamp):
            raise _invalid(
                f"Malformed status for host ({name}): 'lastGoodBackupTime' is not finite")
        # 0 表示从未成功备份
        if timestamp == 0:
            return None
        return timestamp

    @staticmethod
    def host_summary(snapshot: StatusSnapshot) -> Dict[str, int]:
        """快照概要，用于日志"""
        reserved = sum(1 for h in snapshot.hosts.values() if h.is_reserved)
        archive = sum(1 for h in snapshot.hosts.values()
                      if not h.is_reserved and h.host_type is HostType.ARCHIVE)
        return {
            'hosts': len(snapshot.hosts) - reserved,
            'archive_hosts': archive,
            'reserved_entries': reserved
        }
