"""
变量解析 - 将 $name 映射到履历数据字段

两套封闭词表：
- 标量变量：用于文本类命令，解析为字符串
- 列表变量：用于履历表命令，解析为 Entry 列表

同一个变量只属于其中一套，用错词表视为错误。
"""

from __future__ import annotations

from ..interfaces import VariableResolutionError
from ..models import CVData, Entry

VARIABLE_SIGIL = "$"

# 变量名 -> CVData 字段名
SCALAR_VARIABLES: dict[str, str] = {
    "$date": "date",
    "$name_kana": "name_kana",
    "$name": "name",
    "$birth_day": "birth_day",
    "$gender": "gender",
    "$cell_phone": "cell_phone",
    "$email": "email",
    "$address_kana": "address_kana",
    "$address": "address",
    "$address_zip": "address_zip",
    "$tel": "tel",
    "$fax": "fax",
    "$address_kana2": "address_kana2",
    "$address2": "address2",
    "$address_zip2": "address_zip2",
    "$tel2": "tel2",
    "$fax2": "fax2",
    "$commuting_time": "commuting_time",
    "$dependents": "dependents",
    "$spouse": "spouse",
    "$supporting_spouse": "supporting_spouse",
    "$hobby": "hobby",
    "$motivation": "motivation",
    "$request": "request",
    "$degree": "degree",
    "$degree_year": "degree_year",
    "$degree_affiliation": "degree_affiliation",
    "$thesis_title": "thesis_title",
    "$teaching": "teaching",
    "$affiliated_society": "affiliated_society",
    "$notices": "notices",
}

LIST_VARIABLES: dict[str, str] = {
    "$education": "education",
    "$experience": "experience",
    "$licences": "licences",
    "$awards": "awards",
}


def is_variable(value: str) -> bool:
    return value.startswith(VARIABLE_SIGIL)


def resolve_scalar(value: str, record: CVData) -> str:
    """解析文本值：非$开头原样返回"""
    if not is_variable(value):
        return value
    if value in SCALAR_VARIABLES:
        return getattr(record, SCALAR_VARIABLES[value])
    if value in LIST_VARIABLES:
        raise VariableResolutionError(f"列表变量不能用作文本: {value}")
    raise VariableResolutionError(f"未知变量: {value}")


def resolve_list(value: str, record: CVData) -> list[Entry]:
    """解析履历表变量"""
    if value in LIST_VARIABLES:
        return getattr(record, LIST_VARIABLES[value])
    if value in SCALAR_VARIABLES:
        raise VariableResolutionError(f"文本变量不能用作履历表: {value}")
    raise VariableResolutionError(f"无法解析的履历表变量: {value}")
