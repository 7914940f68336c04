#!/usr/bin/env python3
"""
BackupPC 备份状态检查探针入口

解析命令行参数，合并可选配置文件，获取一次状态快照并评估，
向标准输出打印一行 "BACKUPPC <LEVEL> - <message>" 并以对应退出码结束。
"""

import argparse
import asyncio
import sys
from typing import Optional, Dict, Any, List

from backuppc_check import __version__
from backuppc_check.models.host_status import (
    EvaluationOutcome, FilterCriteria, MatchMode, ScopeMode, Severity, ThresholdConfig,
    format_status_line
)
from backuppc_check.services.config_manager import ConfigManager
from backuppc_check.services.evaluator import BackupStatusEvaluator
from backuppc_check.sources import status_source_factory
from backuppc_check.utils.config_validator import ConfigValidator
from backuppc_check.utils.exceptions import BackupCheckError, ConfigurationError, ErrorCode
from backuppc_check.utils.log_manager import log_manager, get_logger

DEFAULT_WARNING = 1.0
DEFAULT_CRITICAL = 2.0
DEFAULT_WARNING_OLD = 25.0
DEFAULT_CRITICAL_OLD = 49.0
SOURCE_NAME = 'backuppc'


class ProbeArgumentParser(argparse.ArgumentParser):
    """参数错误时以 UNKNOWN 退出码结束"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(Severity.UNKNOWN.value, f"{self.prog}: error: {message}\n")


def create_argument_parser() -> argparse.ArgumentParser:
    """创建命令行参数解析器"""
    parser = ProbeArgumentParser(
        prog='check_backuppc',
        description='Check BackupPC backup status: live host errors and age of the last good backup',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -U http://backuppc.local/status.json
  %(prog)s -F /var/lib/backuppc/status.json -H alpha -H beta
  %(prog)s -f /etc/check_backuppc.yaml -b -W 30 -C 72

Exit codes: 0 OK, 1 WARNING, 2 CRITICAL, 3 UNKNOWN
        """
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--hostname', '-H',
        action='append', default=[],
        help='only check this host (repeatable)'
    )
    parser.add_argument(
        '--exclude', '-x',
        action='append', default=[],
        help='do not check this host (repeatable, wins over --hostname)'
    )
    parser.add_argument(
        '--archive-only', '-a',
        action='store_true',
        help='only check archive hosts'
    )
    parser.add_argument(
        '--backup-only', '-b',
        action='store_true',
        help='only check backup hosts'
    )
    parser.add_argument(
        '--status-only', '-s',
        action='store_true',
        help='reserved, accepted for compatibility'
    )
    parser.add_argument(
        '--warning', '-w',
        type=float,
        help=f'number of failed hosts for a warning (default {DEFAULT_WARNING:g})'
    )
    parser.add_argument(
        '--critical', '-c',
        type=float,
        help=f'number of failed hosts for a critical (default {DEFAULT_CRITICAL:g})'
    )
    parser.add_argument(
        '--warning-old', '-W',
        type=float,
        help=f'hours since last good backup for a warning (default {DEFAULT_WARNING_OLD:g})'
    )
    parser.add_argument(
        '--critical-old', '-C',
        type=float,
        help=f'hours since last good backup for a critical (default {DEFAULT_CRITICAL_OLD:g})'
    )
    parser.add_argument(
        '--reduce', '-r',
        type=int,
        help='reserved, accepted for compatibility'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='count', default=0,
        help='increase log verbosity on stderr (repeatable)'
    )

    parser.add_argument(
        '--config', '-f',
        help='YAML configuration file'
    )
    parser.add_argument(
        '--url', '-U',
        help='URL of the BackupPC status export (JSON)'
    )
    parser.add_argument(
        '--status-file', '-F',
        help='path of a BackupPC status export (JSON or YAML)'
    )
    parser.add_argument(
        '--timeout', '-t',
        type=float,
        help='timeout in seconds for fetching the status'
    )
    parser.add_argument(
        '--substring-match',
        action='store_true',
        help='match --hostname/--exclude entries as substrings of host names'
    )

    return parser


def configure_logging(args: argparse.Namespace, global_config: Dict[str, Any]) -> None:
    """
    配置日志系统，-v 优先于配置文件

    Args:
        args: 命令行参数
        global_config: 配置文件全局段
    """
    log_config: Dict[str, Any] = {'enable_console': True}

    if args.verbose >= 2:
        log_config['log_level'] = 'DEBUG'
    elif args.verbose == 1:
        log_config['log_level'] = 'INFO'
    else:
        log_config['log_level'] = global_config.get('log_level', 'WARNING')

    if global_config.get('log_file'):
        log_config['log_file'] = global_config['log_file']
        log_config['max_file_size'] = global_config.get('max_log_size', 10 * 1024 * 1024)
        log_config['backup_count'] = global_config.get('log_backup_count', 5)

    log_manager.configure(log_config)


def _pick(cli_value: Optional[float], config: Dict[str, Any], key: str, default: float) -> float:
    if cli_value is not None:
        return cli_value
    return config.get(key, default)


def build_thresholds(args: argparse.Namespace, thresholds_config: Dict[str, Any]) -> ThresholdConfig:
    """合并命令行和配置文件中的阈值"""
    return ThresholdConfig(
        warn_fail_count=_pick(args.warning, thresholds_config, 'warning', DEFAULT_WARNING),
        crit_fail_count=_pick(args.critical, thresholds_config, 'critical', DEFAULT_CRITICAL),
        warn_age_hours=_pick(args.warning_old, thresholds_config, 'warning_old', DEFAULT_WARNING_OLD),
        crit_age_hours=_pick(args.critical_old, thresholds_config, 'critical_old', DEFAULT_CRITICAL_OLD),
    )


def build_filter_criteria(args: argparse.Namespace, filter_config: Dict[str, Any]) -> FilterCriteria:
    """
    合并命令行和配置文件中的过滤条件

    Raises:
        ConfigurationError: --archive-only 与 --backup-only 同时指定
    """
    scope_mode = ConfigValidator.resolve_scope_mode(args.archive_only, args.backup_only)
    if scope_mode is ScopeMode.ALL and filter_config.get('scope'):
        scope_mode = ScopeMode(filter_config['scope'])

    match_mode = MatchMode(filter_config.get('match', MatchMode.EXACT.value))
    if args.substring_match:
        match_mode = MatchMode.SUBSTRING

    return FilterCriteria(
        include=tuple(args.hostname or filter_config.get('hosts', [])),
        exclude=tuple(args.exclude or filter_config.get('exclude', [])),
        scope_mode=scope_mode,
        match_mode=match_mode
    )


def build_source_config(args: argparse.Namespace, source_config: Dict[str, Any]) -> Dict[str, Any]:
    """
    合并命令行和配置文件中的状态来源

    Raises:
        ConfigurationError: 来源冲突或缺失
    """
    if args.url and args.status_file:
        raise ConfigurationError("Options --url and --status-file are mutually exclusive",
                                 ErrorCode.CONFLICTING_FLAGS)

    if args.url:
        config = {'type': 'http', 'url': args.url}
    elif args.status_file:
        config = {'type': 'file', 'path': args.status_file}
    elif source_config:
        config = dict(source_config)
    else:
        raise ConfigurationError("No status source configured, use --url, --status-file or --config")

    if args.timeout is not None:
        config['timeout'] = args.timeout
    return config


async def run_check(args: argparse.Namespace) -> EvaluationOutcome:
    """
    执行一次检查

    Args:
        args: 命令行参数

    Returns:
        EvaluationOutcome: 评估结果

    Raises:
        BackupCheckError: 配置错误或快照获取失败
    """
    config_manager = ConfigManager(args.config)
    config_manager.load_config()
    configure_logging(args, config_manager.get_global_config())
    logger = get_logger('main')

    if args.status_only or args.reduce is not None:
        logger.debug(f"保留参数不影响评估: status_only={args.status_only}, reduce={args.reduce}")

    thresholds = build_thresholds(args, config_manager.get_thresholds_config())
    ConfigValidator.validate_thresholds(thresholds)
    criteria = build_filter_criteria(args, config_manager.get_filter_config())

    source = status_source_factory.create_source(
        SOURCE_NAME, build_source_config(args, config_manager.get_source_config()))

    evaluator = BackupStatusEvaluator(thresholds, criteria, source)
    return await evaluator.run()


async def main(argv: Optional[List[str]] = None) -> int:
    """
    主函数

    Returns:
        int: 退出码
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    logger = get_logger('main')

    try:
        outcome = await run_check(args)
    except BackupCheckError as e:
        logger.error(f"检查无法完成: {e.format_error()}")
        print(format_status_line(Severity.UNKNOWN, e.message))
        return Severity.UNKNOWN.value
    except Exception as e:
        logger.error(f"未预期的错误: {e}", exc_info=True)
        print(format_status_line(Severity.UNKNOWN, f"Unexpected error: {e}"))
        return Severity.UNKNOWN.value
    finally:
        log_manager.cleanup()

    print(outcome.status_line)
    return outcome.severity.value


def run() -> None:
    """命令行入口"""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
