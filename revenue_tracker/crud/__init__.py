"""CRUD 操作模块"""
from .revenue import (
    summarize_revenue,
    summarize_revenue_by_date,
    summarize_revenue_by_month,
)
from .revenue_event import record_purchase

__all__ = [
    "record_purchase",
    "summarize_revenue",
    "summarize_revenue_by_date",
    "summarize_revenue_by_month",
]
