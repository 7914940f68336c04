"""数据模型模块"""

from .host_status import (
    STATUS_LABEL, HostType, ScopeMode, MatchMode, StalenessBand, Severity,
    HostStatus, StatusSnapshot, ThresholdConfig, FilterCriteria,
    HostClassification, EvaluationOutcome, format_status_line
)

__all__ = [
    'STATUS_LABEL', 'HostType', 'ScopeMode', 'MatchMode', 'StalenessBand', 'Severity',
    'HostStatus', 'StatusSnapshot', 'ThresholdConfig', 'FilterCriteria',
    'HostClassification', 'EvaluationOutcome', 'format_status_line'
]
