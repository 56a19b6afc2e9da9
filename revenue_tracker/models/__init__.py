"""
数据库模型定义模块

本模块使用 SQLModel 定义数据库表结构。

- revenue_event.py: 收入事件模型（每个产品行一条记录）
"""
from sqlmodel import SQLModel

from .revenue_event import RevenueEvent

__all__ = [
    "SQLModel",
    "RevenueEvent",
]
