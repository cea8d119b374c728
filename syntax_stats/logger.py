"""
日志配置模块

统一管理项目的日志输出，将日志写入文件而不是控制台
（标准输出只用于分析结果）
"""
import logging
from pathlib import Path
from datetime import datetime

from .settings import get_settings


def setup_logger(name: str = "syntax_stats", log_dir: str = None,
                 log_file_path: str = None) -> logging.Logger:
    """
    配置并返回日志记录器

    Args:
        name: 日志记录器名称
        log_dir: 日志文件目录（为 None 时使用全局配置中的目录）
        log_file_path: 指定的日志文件路径（如果提供，则直接使用）

    Returns:
        配置好的 Logger 实例
    """
    if log_file_path:
        log_file = Path(log_file_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
    else:
        log_path = Path(log_dir or get_settings().log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        # 每次运行创建新文件
        log_file = log_path / f"{name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # 清除已有的 handlers，避免重复输出
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # 不向 root logger 传播，保持控制台干净
    logger.propagate = False

    return logger


# 全局默认 logger
_default_logger = None


def get_logger() -> logging.Logger:
    """
    获取默认的全局 logger

    Returns:
        Logger 实例
    """
    global _default_logger
    if _default_logger is None:
        _default_logger = setup_logger()
    return _default_logger


def set_default_logger(logger: logging.Logger):
    """替换全局默认 logger（CLI 指定日志文件时使用）"""
    global _default_logger
    _default_logger = logger
