"""
样式脚本模块 - 解析与变量绑定

子模块：
- parser: 样式脚本 -> 命令序列
- variables: $name -> 履历数据字段
"""

from .parser import COMMAND_PARSERS, StyleParser, parse_length
from .variables import LIST_VARIABLES, SCALAR_VARIABLES, resolve_list, resolve_scalar

__all__ = [
    "StyleParser",
    "COMMAND_PARSERS",
    "parse_length",
    "SCALAR_VARIABLES",
    "LIST_VARIABLES",
    "resolve_scalar",
    "resolve_list",
]
