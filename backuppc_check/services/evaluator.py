"""
备份状态评估流程

校验配置 -> 获取快照 -> 过滤主机 -> 逐个分类 -> 汇总结果。
整个流程单线程顺序执行，唯一的等待点是获取快照的那一次请求。
"""

import time
from typing import Optional

from .aggregator import OutcomeAggregator
from .classifier import HostClassifier
from .host_filter import HostFilter
from ..models.host_status import EvaluationOutcome, FilterCriteria, StatusSnapshot, ThresholdConfig
from ..sources.base import BaseStatusSource
from ..utils.config_validator import ConfigValidator
from ..utils.exceptions import ConfigurationError
from ..utils.log_manager import get_logger
from ..utils.snapshot_validator import SnapshotValidator


class BackupStatusEvaluator:
    """备份状态评估器"""

    def __init__(self, thresholds: ThresholdConfig, criteria: FilterCriteria,
                 source: Optional[BaseStatusSource] = None):
        """
        初始化评估器

        Args:
            thresholds: 阈值配置
            criteria: 主机过滤条件
            source: 状态来源，只调用 evaluate_snapshot 时可为空
        """
        self.thresholds = thresholds
        self.criteria = criteria
        self.source = source
        self.host_filter = HostFilter(criteria)
        self.aggregator = OutcomeAggregator(thresholds)
        self.logger = get_logger('evaluator')

    def validate(self) -> None:
        """
        校验阈值配置

        Raises:
            ConfigurationError: 阈值先后关系错误
        """
        ConfigValidator.validate_thresholds(self.thresholds)

    def evaluate_snapshot(self, snapshot: StatusSnapshot, now: float) -> EvaluationOutcome:
        """
        评估一个已获取的快照，给定 now 时结果是确定的

        Args:
            snapshot: 状态快照
            now: 本次运行统一使用的当前时间（epoch 秒）

        Returns:
            EvaluationOutcome: 评估结果

        Raises:
            ConfigurationError: 阈值错误或过滤列表中存在未知主机
        """
        self.validate()

        hosts = self.host_filter.select(snapshot.hosts)
        classifier = HostClassifier(self.thresholds, now)
        classifications = [classifier.classify(host) for host in hosts]

        for c in classifications:
            self.logger.debug(
                f"主机 {c.name}: 错误={c.has_live_error}, "
                f"备份时长={c.display_age}h, 状态={c.staleness_band.value}")

        outcome = self.aggregator.aggregate(classifications)
        self.logger.info(
            f"评估完成: 共 {outcome.total_evaluated} 个主机，正常 {len(outcome.good)}，"
            f"错误 {len(outcome.erroring)}，过旧 {len(outcome.stale)}，"
            f"严重过旧 {len(outcome.very_stale)}，级别 {outcome.severity.name}")
        return outcome

    async def run(self, now: Optional[float] = None) -> EvaluationOutcome:
        """
        执行一次完整检查

        Args:
            now: 当前时间（epoch 秒），为空时在获取快照后取一次

        Returns:
            EvaluationOutcome: 评估结果

        Raises:
            ConfigurationError: 配置错误
            AcquisitionError: 快照获取失败
        """
        # 获取快照之前先校验配置
        self.validate()

        if self.source is None:
            raise ConfigurationError("No status source configured")

        snapshot = await self.source.fetch_snapshot()
        self.logger.debug(f"快照概要: {SnapshotValidator.host_summary(snapshot)}")

        if now is None:
            now = time.time()

        return self.evaluate_snapshot(snapshot, now)
