"""
命令行入口

使用方法:
  fastawrparse [-n | -H] [-p] [-s | -v] awrfile1.txt [awrfile2.txt ...]
  fastawrparse -H            # 只输出CSV表头
"""
import argparse
import sys
from typing import List, Optional

from loguru import logger

from .api import parse_awr_reports
from .awr.emitter import RecordEmitter
from .common.config import Config

CONFLICTS = (
    ("header_only", "no_header", "Header and NoHeader are conflicting options"),
    ("silent", "verbose", "Silent and Verbose are conflicting options"),
    ("silent", "print_info", "Silent and Print Report Info are conflicting options"),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=Config.PROGRAM_NAME,
        description='AWR文本报告解析工具 - 提取性能指标并输出CSV',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
CSV输出到标准输出，提示与错误信息输出到标准错误。

示例:
  fastawrparse awrrpt_*.txt > awr.csv
  fastawrparse -n -s new_report.txt >> awr.csv
  fastawrparse -H

退出码:
  0 全部成功  1 部分文件出错  2 没有文件被成功处理或参数错误
        """
    )
    parser.add_argument('-H', dest='header_only', action='store_true', help='只输出CSV表头然后退出')
    parser.add_argument('-n', dest='no_header', action='store_true', help='不输出CSV表头')
    parser.add_argument('-p', dest='print_info', action='store_true', help='将解析结果输出到标准错误')
    parser.add_argument('-s', dest='silent', action='store_true', help='静默模式，只输出错误')
    parser.add_argument('-v', dest='verbose', action='store_true', help='详细模式（同时启用 -p）')
    parser.add_argument('-X', dest='debug', action='store_true', help=argparse.SUPPRESS)
    parser.add_argument('--log-file', dest='log_file', type=str, help='同时将日志写入文件')
    parser.add_argument('--version', action='version', version=f'%(prog)s {Config.VERSION}')
    parser.add_argument('files', nargs='*', metavar='FILE', help='AWR文本报告文件')
    return parser


def setup_logging(level: str, log_file: Optional[str] = None) -> None:
    """配置日志：标准错误 + 可选的日志文件"""
    logger.remove()
    logger.add(
        sys.stderr,
        format=Config.LOG_FORMAT,
        level=level,
        colorize=sys.stderr.isatty()
    )
    if log_file:
        logger.add(
            log_file,
            format=Config.LOG_FORMAT,
            level=level,
            rotation=Config.LOG_ROTATION,
            retention=Config.LOG_RETENTION,
            encoding="utf-8"
        )


def resolve_log_level(args: argparse.Namespace) -> str:
    if args.debug:
        return Config.LOG_LEVEL_DEBUG
    if args.verbose:
        return Config.LOG_LEVEL_VERBOSE
    if args.silent:
        return Config.LOG_LEVEL_SILENT
    return Config.LOG_LEVEL


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    for first, second, message in CONFLICTS:
        if getattr(args, first) and getattr(args, second):
            parser.print_usage(sys.stderr)
            print(f"❌ 错误：{message}", file=sys.stderr)
            return Config.EXIT_FAILURE

    # -X 隐含 -v，并取消 -s
    if args.debug:
        args.verbose = True
        args.silent = False
    if args.verbose:
        args.print_info = True

    setup_logging(resolve_log_level(args), args.log_file)
    logger.trace(f"命令行参数: {argv if argv is not None else sys.argv[1:]}")

    if args.header_only:
        logger.info("只输出表头 (-H)")
        RecordEmitter(sys.stdout).write_header()
        return Config.EXIT_SUCCESS

    if not args.files:
        parser.print_usage(sys.stderr)
        print("❌ 错误：Filename(s) required", file=sys.stderr)
        return Config.EXIT_FAILURE

    try:
        summary = parse_awr_reports(
            args.files,
            header=not args.no_header,
            print_info=args.print_info,
        )
    except KeyboardInterrupt:
        print("\n❌ 操作被用户取消", file=sys.stderr)
        return Config.EXIT_FAILURE
    return summary.exit_code


if __name__ == "__main__":
    sys.exit(main())
