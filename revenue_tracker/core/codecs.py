"""
标识符与日期编解码模块

- Identifier: 128 位标识符（UUID 字符串）
- RevenueDate: 严格的 YYYY-MM-DD 日期，不接受完整时间戳

解析失败抛出的异常都继承自 ValueError，
这样在 Pydantic 模型中使用时会被转换为普通的字段验证错误。
"""
from __future__ import annotations

import re
import uuid
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

DATE_FORMAT = "%Y-%m-%d"
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class InvalidIdentifier(ValueError):
    pass


class InvalidDate(ValueError):
    pass


def parse_identifier(value: Any) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        raise InvalidIdentifier(f"Could not parse UUID: expected string, got {type(value).__name__}")
    try:
        return uuid.UUID(value)
    except ValueError as e:
        raise InvalidIdentifier(f"Could not parse UUID: {e}") from e


def format_identifier(value: uuid.UUID) -> str:
    return str(value)


def parse_date(value: Any) -> date:
    """
    解析 YYYY-MM-DD 日期

    只接受精确的 YYYY-MM-DD 格式（或已经是 date 的值），
    "05-01-2024"、"2024-5-1"、"2024-05-01T00:00:00Z" 都会被拒绝。

    Raises:
        InvalidDate: 格式不符或日期不存在（如 2024-02-30）
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        raise InvalidDate(f"invalid date {value!r}, expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidDate(f"invalid date {value!r}: {e}") from e


def format_date(value: date) -> str:
    # datetime 也是 date 的子类，格式化时丢弃时间部分
    return value.strftime(DATE_FORMAT)


Identifier = Annotated[
    uuid.UUID,
    BeforeValidator(parse_identifier),
    PlainSerializer(format_identifier, return_type=str),
]
RevenueDate = Annotated[
    date,
    BeforeValidator(parse_date),
    PlainSerializer(format_date, return_type=str),
]
