"""文件状态来源"""

import yaml

from .base import BaseStatusSource
from .factory import register_source
from ..models.host_status import StatusSnapshot
from ..utils.exceptions import AcquisitionError, ErrorCode
from ..utils.snapshot_validator import SnapshotValidator


@register_source('file')
class FileStatusSource(BaseStatusSource):
    """从本地JSON/YAML状态导出文件读取快照"""

    def validate_config(self) -> bool:
        path = self.config.get('path')
        return isinstance(path, str) and bool(path)

    async def fetch_snapshot(self) -> StatusSnapshot:
        """
        读取状态文件并解析为快照

        Raises:
            AcquisitionError: 文件不存在、不可读或内容不合法
        """
        path = self.config['path']
        self.logger.info(f"读取状态文件: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as file:
                # JSON 是 YAML 的子集，safe_load 不会执行任何内容
                payload = yaml.safe_load(file)
        except FileNotFoundError as e:
            raise AcquisitionError(
                f"Status file not found: {path}",
                ErrorCode.SOURCE_NOT_FOUND,
                source_name=self.name, source_type='file', cause=e
            )
        except PermissionError as e:
            raise AcquisitionError(
                f"Permission denied reading status file: {path}",
                ErrorCode.AUTHENTICATION_ERROR,
                source_name=self.name, source_type='file', cause=e
            )
        except UnicodeDecodeError as e:
            raise AcquisitionError(
                f"Malformed status file {path}: not valid UTF-8 ({e})",
                ErrorCode.INVALID_RESPONSE,
                source_name=self.name, source_type='file', cause=e
            )
        except yaml.YAMLError as e:
            raise AcquisitionError(
                f"Malformed status file {path}: {e}",
                ErrorCode.INVALID_RESPONSE,
                source_name=self.name, source_type='file', cause=e
            )
        except OSError as e:
            raise AcquisitionError(
                f"Unable to read status file {path}: {e}",
                ErrorCode.CONNECTION_ERROR,
                source_name=self.name, source_type='file', cause=e
            )

        return SnapshotValidator.parse_snapshot(payload)
