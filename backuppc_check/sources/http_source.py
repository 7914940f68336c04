"""HTTP状态来源"""

import asyncio
import json
import time
from typing import Any

import aiohttp

from .base import BaseStatusSource
from .factory import register_source
from ..models.host_status import StatusSnapshot
from ..utils.exceptions import AcquisitionError, ErrorCode
from ..utils.snapshot_validator import SnapshotValidator


@register_source('http')
class HttpStatusSource(BaseStatusSource):
    """通过一次HTTP请求获取BackupPC状态导出（JSON）"""

    def validate_config(self) -> bool:
        """
        验证HTTP配置

        Returns:
            bool: 配置是否有效
        """
        url = self.config.get('url')
        if not isinstance(url, str) or not url.startswith(('http://', 'https://')):
            return False

        method = self.config.get('method', 'GET')
        if method not in ['GET', 'POST']:
            return False

        headers = self.config.get('headers', {})
        if not isinstance(headers, dict):
            return False

        # 用户名和密码必须成对出现
        if ('auth_username' in self.config) != ('auth_password' in self.config):
            return False

        return True

    def _error(self, message: str, error_code: ErrorCode, cause: Exception = None) -> AcquisitionError:
        return AcquisitionError(
            message,
            error_code,
            source_name=self.name,
            source_type='http',
            cause=cause
        )

    def _decode_payload(self, content: str) -> Any:
        """
        解析响应内容

        Raises:
            AcquisitionError: 响应不是合法JSON
        """
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise self._error(f"Malformed status response: {e}", ErrorCode.INVALID_RESPONSE, e)

    async def fetch_snapshot(self) -> StatusSnapshot:
        """
        请求状态导出并解析为快照

        Returns:
            StatusSnapshot: 状态快照

        Raises:
            AcquisitionError: 请求失败或返回内容不合法
        """
        url = self.config['url']
        method = self.config.get('method', 'GET').upper()
        headers = self.config.get('headers', {})

        timeout = aiohttp.ClientTimeout(total=self.get_timeout())

        auth = None
        if 'auth_username' in self.config and 'auth_password' in self.config:
            auth = aiohttp.BasicAuth(
                self.config['auth_username'],
                self.config['auth_password']
            )

        self.logger.info(f"请求状态数据: {method} {url}")
        start_time = time.time()

        try:
            async with aiohttp.ClientSession(timeout=timeout, auth=auth) as session:
                async with session.request(method, url, headers=headers) as response:
                    if response.status in (401, 403):
                        raise self._error(
                            f"Authentication failed for {url} (HTTP {response.status})",
                            ErrorCode.AUTHENTICATION_ERROR
                        )
                    if not 200 <= response.status < 300:
                        raise self._error(
                            f"Status server returned HTTP {response.status}",
                            ErrorCode.SERVICE_UNAVAILABLE
                        )
                    try:
                        content = await response.text()
                    except UnicodeDecodeError as e:
                        raise self._error(
                            f"Malformed status response: cannot decode body ({e})",
                            ErrorCode.INVALID_RESPONSE, e
                        )

        except aiohttp.ClientError as e:
            self.logger.error(f"HTTP客户端错误: {e}")
            raise self._error(f"Unable to connect to status server: {e}", ErrorCode.CONNECTION_ERROR, e)
        except asyncio.TimeoutError as e:
            self.logger.error(f"HTTP请求超时: {url}")
            raise self._error(
                f"Timed out after {self.get_timeout()}s waiting for status server",
                ErrorCode.TIMEOUT_ERROR, e
            )

        self.logger.debug(f"状态数据获取完成，耗时 {time.time() - start_time:.3f}s，长度 {len(content)}")

        try:
            return SnapshotValidator.parse_snapshot(self._decode_payload(content))
        except AcquisitionError as e:
            e.details.setdefault('source_name', self.name)
            e.details.setdefault('source_type', 'http')
            raise
