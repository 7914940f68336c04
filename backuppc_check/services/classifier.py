"""单主机分类器"""

from ..models.host_status import HostClassification, HostStatus, StalenessBand, ThresholdConfig

SECONDS_PER_HOUR = 3600.0


class HostClassifier:
    """按错误和备份陈旧程度两个独立维度对单个主机分类"""

    def __init__(self, thresholds: ThresholdConfig, now: float):
        """
        Args:
            thresholds: 阈值配置
            now: 本次运行统一使用的当前时间（epoch 秒）
        """
        self.thresholds = thresholds
        self.now = now

    def age_hours(self, host: HostStatus) -> float:
        """距最近一次成功备份的小时数，从未备份时按 epoch 0 计算"""
        last_good = host.last_good_backup_time or 0.0
        return (self.now - last_good) / SECONDS_PER_HOUR

    def staleness_band(self, age_hours: float) -> StalenessBand:
        if age_hours > self.thresholds.crit_age_hours:
            return StalenessBand.VERY_STALE
        if age_hours > self.thresholds.warn_age_hours:
            return StalenessBand.STALE
        return StalenessBand.FRESH

    def classify(self, host: HostStatus) -> HostClassification:
        age = self.age_hours(host)
        return HostClassification(
            name=host.name,
            has_live_error=host.has_live_error,
            age_hours=age,
            staleness_band=self.staleness_band(age),
            error_text=host.error_text
        )
