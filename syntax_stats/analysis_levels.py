"""
分析级别定义和配置
"""
from enum import IntEnum
from dataclasses import dataclass
from typing import Optional


class AnalysisLevel(IntEnum):
    """分析级别枚举（级别越高，输出越多）"""

    # 基础：结构树 + 关键字计数
    BASIC = 1

    # 进阶：在基础上统计 switch 和每个 switch 的 case 数
    ADVANCED = 2

    # 提升：预留，目前与进阶相同
    UPLIFTING = 3

    # 终极：预留扩展点，未指定或非法级别时使用
    ULTIMATE = 4


@dataclass
class AnalysisLevelConfig:
    """分析级别配置"""
    level: AnalysisLevel

    # 是否统计关键字
    count_keywords: bool

    # 是否统计 switch / case
    count_switches: bool

    # 描述
    description: str


# 预定义的级别配置
LEVEL_CONFIGS = {
    AnalysisLevel.BASIC: AnalysisLevelConfig(
        level=AnalysisLevel.BASIC,
        count_keywords=True,
        count_switches=False,
        description="结构树 + 关键字数量"
    ),

    AnalysisLevel.ADVANCED: AnalysisLevelConfig(
        level=AnalysisLevel.ADVANCED,
        count_keywords=True,
        count_switches=True,
        description="结构树 + 关键字数量 + switch/case 统计"
    ),

    AnalysisLevel.UPLIFTING: AnalysisLevelConfig(
        level=AnalysisLevel.UPLIFTING,
        count_keywords=True,
        count_switches=True,
        description="同进阶（预留扩展）"
    ),

    AnalysisLevel.ULTIMATE: AnalysisLevelConfig(
        level=AnalysisLevel.ULTIMATE,
        count_keywords=True,
        count_switches=True,
        description="全部分析（预留扩展）"
    ),
}

# 命令行可以显式请求的级别范围
MIN_REQUESTED_LEVEL = AnalysisLevel.BASIC
MAX_REQUESTED_LEVEL = AnalysisLevel.UPLIFTING


def get_level_config(level: AnalysisLevel) -> AnalysisLevelConfig:
    """获取级别配置"""
    return LEVEL_CONFIGS[AnalysisLevel(level)]


def get_level_from_string(level_str: Optional[str]) -> AnalysisLevel:
    """
    从命令行字符串获取级别

    非数字或超出 [1, 3] 的值一律回退到 ULTIMATE，不报错
    """
    if level_str is None:
        return AnalysisLevel.ULTIMATE

    try:
        value = int(level_str.strip())
    except ValueError:
        return AnalysisLevel.ULTIMATE

    if MIN_REQUESTED_LEVEL <= value <= MAX_REQUESTED_LEVEL:
        return AnalysisLevel(value)
    return AnalysisLevel.ULTIMATE
