"""结果汇总器"""

from typing import List, Sequence

from ..models.host_status import (
    EvaluationOutcome, HostClassification, Severity, StalenessBand, ThresholdConfig
)

SEPARATOR = ', '


class OutcomeAggregator:
    """
    将所有主机的分类结果汇总为整体级别和诊断信息

    规则按固定顺序执行，每条规则只能提高级别，并把自己的子句插到最前面：
    1. 存在 stale 主机：至少 WARNING
    2. 存在 very stale 主机：CRITICAL
    3. 错误主机数 >= 严重阈值：CRITICAL
    4. 否则错误主机数 >= 警告阈值：至少 WARNING
    每个主机的详细原因只收集一次，按主机名顺序追加在所有子句之后。
    """

    def __init__(self, thresholds: ThresholdConfig):
        self.thresholds = thresholds

    def aggregate(self, classifications: Sequence[HostClassification]) -> EvaluationOutcome:
        """
        汇总分类结果

        Args:
            classifications: 按主机名排序的分类结果

        Returns:
            EvaluationOutcome: 评估结果
        """
        total = len(classifications)
        good = tuple(c.name for c in classifications if c.is_good)
        erroring = tuple(c.name for c in classifications if c.has_live_error)
        stale = tuple(c.name for c in classifications
                      if c.staleness_band is StalenessBand.STALE)
        very_stale = tuple(c.name for c in classifications
                           if c.staleness_band is StalenessBand.VERY_STALE)

        def outcome(severity: Severity, message: str) -> EvaluationOutcome:
            return EvaluationOutcome(
                total_evaluated=total,
                good=good,
                erroring=erroring,
                stale=stale,
                very_stale=very_stale,
                severity=severity,
                message=message,
                classifications=tuple(classifications)
            )

        failures_summary = f"({len(erroring)}/{total}) failures"
        if len(good) == total:
            return outcome(Severity.OK, failures_summary)

        severity = Severity.OK
        clauses: List[str] = []

        if stale:
            clauses.insert(0, f"({len(stale)}/{total}) backups are too old")
            severity = severity.raise_to(Severity.WARNING)

        if very_stale:
            clauses.insert(0, f"({len(very_stale)}/{total}) backups are too much old")
            severity = Severity.CRITICAL

        error_rule_fired = False
        if len(erroring) >= self.thresholds.crit_fail_count:
            clauses.insert(0, f"({len(erroring)}/{total}) hosts have failures")
            severity = Severity.CRITICAL
            error_rule_fired = True
        elif len(erroring) >= self.thresholds.warn_fail_count:
            clauses.insert(0, f"({len(erroring)}/{total}) hosts have failures")
            severity = severity.raise_to(Severity.WARNING)
            error_rule_fired = True

        if not clauses:
            # 错误主机数低于警告阈值且没有陈旧备份
            return outcome(Severity.OK, failures_summary)

        fragments = self._host_fragments(classifications, error_rule_fired)
        return outcome(severity, SEPARATOR.join(clauses + fragments))

    @staticmethod
    def _host_fragments(classifications: Sequence[HostClassification],
                        include_errors: bool) -> List[str]:
        fragments = []
        for c in classifications:
            if include_errors and c.has_live_error:
                fragments.append(f"({c.name}) {c.error_text}")
            if c.staleness_band is not StalenessBand.FRESH:
                fragments.append(
                    f"({c.name}) Last Good Backup was done {c.display_age} hours ago")
        return fragments
