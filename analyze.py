"""
C/C++ 语法结构统计工具 - 直接输出结果（带日志）

用法: python analyze.py <文件名> [级别] [选项]
"""
import sys
import io
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from syntax_stats import SyntaxAnalyzer, AnalysisLevel, get_level_from_string
from syntax_stats.errors import ParseFailure, SyntaxStatsError, UsageError
from syntax_stats.settings import get_settings
import syntax_stats.logger as logger_module

USAGE = "Usage: analyze <filename> [level] [options ...]"

# 可识别的选项
TOKENS_OPTION = "--tokens"


def _configure_logging():
    """日志写入本次运行专属的文件，标准输出只保留分析结果"""
    log_dir = Path(get_settings().log_dir)
    log_filename = log_dir / f"analyze_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    lib_logger = logger_module.setup_logger(name="syntax_stats", log_file_path=str(log_filename))
    logger_module.set_default_logger(lib_logger)
    return lib_logger


def main(argv: Optional[List[str]] = None):
    if argv is None:
        argv = sys.argv[1:]

    logger = _configure_logging()

    try:
        # 文件名 + 级别 + 一个选项位
        if not 1 <= len(argv) <= 3:
            raise UsageError(USAGE)

        filename = argv[0]
        level = get_level_from_string(argv[1]) if len(argv) > 1 else AnalysisLevel.ULTIMATE

        show_tokens = False
        if len(argv) > 2:
            if argv[2] == TOKENS_OPTION:
                show_tokens = True
            else:
                logger.warning(f"Ignoring unknown option: {argv[2]}")

        logger.info(f"目标文件: {filename}")
        logger.info(f"分析级别: {level.name}")

        analyzer = SyntaxAnalyzer()
        result = analyzer.analyze_file(filename, level=level, show_tokens=show_tokens)

    except UsageError as e:
        logger.error(f"Bad arguments: {argv}")
        print(e)
        sys.exit(e.exit_code)
    except ParseFailure as e:
        logger.error(str(e))
        print("Unable to parse translation unit. Quitting.", file=sys.stderr)
        sys.exit(e.exit_code)
    except SyntaxStatsError as e:
        logger.error(f"分析失败: {e}")
        print(e)
        sys.exit(e.exit_code)

    for line in result.report_lines():
        print(line)
    logger.info("分析完成")


if __name__ == "__main__":
    # 设置标准输出为 UTF-8 编码
    if sys.platform == 'win32':
        sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
        sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')
    main()
