"""
收入查询路由模块

按日或按自然月查询按货币汇总的确认收入。
分摊计算由数据库函数 calculate_event_revenue 完成，这里只负责校验、传参和整理结果。
"""
from __future__ import annotations

import logging

from fastapi import APIRouter

from revenue_tracker import crud
from revenue_tracker.api.deps import SessionDep
from revenue_tracker.api.schemas import RevenueQuery, RevenueSummaryResponse
from revenue_tracker.core.codecs import format_date

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/revenue", tags=["revenue"])


def _log_query(kind: str, body: RevenueQuery) -> None:
    # pov_timestamp 只记录日志，暂不影响查询
    if body.pov_timestamp is not None:
        logger.info(f"Revenue {kind} query: {format_date(body.revenue_date)} -> {body.pov_timestamp.isoformat()}")
    else:
        logger.info(f"Revenue {kind} query: {format_date(body.revenue_date)}")


@router.post("/by_date", response_model=RevenueSummaryResponse)
def revenue_by_date(session: SessionDep, body: RevenueQuery) -> RevenueSummaryResponse:
    """
    按日查询确认收入

    请求路径: POST /api/v1/revenue/by_date

    Returns:
        RevenueSummaryResponse: 按货币汇总的列表（可能为空）
    """
    _log_query("by_date", body)
    summaries = crud.summarize_revenue_by_date(session=session, revenue_date=body.revenue_date)
    return RevenueSummaryResponse(revenue_summary=summaries)


@router.post("/by_month", response_model=RevenueSummaryResponse)
def revenue_by_month(session: SessionDep, body: RevenueQuery) -> RevenueSummaryResponse:
    """按 revenue_date 所在的整个自然月查询确认收入"""
    _log_query("by_month", body)
    summaries = crud.summarize_revenue_by_month(session=session, revenue_date=body.revenue_date)
    return RevenueSummaryResponse(revenue_summary=summaries)
