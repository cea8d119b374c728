"""
运行环境配置

从环境变量读取日志目录和头文件搜索目录
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional

LOG_DIR_ENV = "SYNTAX_STATS_LOG_DIR"
INCLUDE_DIRS_ENV = "SYNTAX_STATS_INCLUDE_DIRS"


@dataclass
class AnalyzerSettings:
    """分析器配置"""

    # 日志文件目录
    log_dir: str = "logs"

    # 额外的头文件搜索目录（用于展开 #include "..."）
    include_dirs: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> "AnalyzerSettings":
        """从环境变量创建配置"""
        log_dir = os.environ.get(LOG_DIR_ENV) or "logs"
        raw_dirs = os.environ.get(INCLUDE_DIRS_ENV, "")
        include_dirs = [d for d in raw_dirs.split(os.pathsep) if d]
        return cls(log_dir=log_dir, include_dirs=include_dirs)


# 全局配置实例
_global_settings: Optional[AnalyzerSettings] = None


def get_settings() -> AnalyzerSettings:
    """
    获取全局配置

    Returns:
        AnalyzerSettings 实例
    """
    global _global_settings
    if _global_settings is None:
        # 首次调用时从环境变量创建
        _global_settings = AnalyzerSettings.from_env()
    return _global_settings


def set_settings(settings: Optional[AnalyzerSettings]):
    """
    设置全局配置（传入 None 时下次调用重新读取环境变量）

    Args:
        settings: 配置实例
    """
    global _global_settings
    _global_settings = settings
