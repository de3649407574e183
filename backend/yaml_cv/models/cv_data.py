"""
履历数据模型 - 对应输入的 data.yaml

渲染期间只读
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class Entry(BaseModel):
    """履历表中的一行"""
    year: str | None = None
    month: int | None = Field(None, ge=1, le=12)
    value: str

    model_config = {"frozen": True, "coerce_numbers_to_str": True}


class CVData(BaseModel):
    """数据文件中的全部字段"""
    date: str
    name_kana: str
    name: str
    birth_day: str
    gender: str
    cell_phone: str
    email: str
    photo: Path

    # 现住所
    address_kana: str
    address: str
    address_zip: str
    tel: str
    fax: str

    # 联系地址
    address_kana2: str
    address2: str
    address_zip2: str
    tel2: str
    fax2: str

    # 学位
    degree: str
    degree_year: str
    degree_affiliation: str
    thesis_title: str

    # 履历列表
    education: list[Entry]
    experience: list[Entry]
    licences: list[Entry]
    awards: list[Entry]

    # 自由文本
    teaching: str
    affiliated_society: str
    notices: str
    commuting_time: str
    dependents: str
    spouse: str
    supporting_spouse: str
    hobby: str
    motivation: str
    request: str

    model_config = {"frozen": True, "coerce_numbers_to_str": True}
