"""
收入汇总查询

确认收入的分摊计算完全在数据库函数 calculate_event_revenue 中完成，
这里只负责传参和整理结果。

对每个收入事件 r，找到同一 service 下 valid_from_ts 等于 r.valid_to_ts 的事件 rf
（即下一条事件），把 rf 的开始时间作为 r 的确认截止边界传给函数，
再按货币汇总。
"""
import calendar
import logging
from datetime import date

from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from revenue_tracker.api.errors import QueryError
from revenue_tracker.api.schemas import RevenueSummary
from revenue_tracker.core.codecs import format_date
from revenue_tracker.core.config import settings

logger = logging.getLogger(__name__)


def revenue_summary_sql(schema: str) -> str:
    return f"""
select
    r.currency_code,
    count(distinct r.service_id) as service_subs,
    sum(rev.recognized_amount) as recognized_amount
from
    {schema}.revenue_event r
    left join {schema}.revenue_event rf on
            rf.service_id = r.service_id
        and rf.valid_from_ts = r.valid_to_ts
    cross join {schema}.calculate_event_revenue(
        event => r,
        next_event_start_dt => lower(rf.revenue_ts),
        revenue_query_range => daterange(cast(:range_start as date), cast(:range_end as date), '[]')
    ) as rev
group by 1
"""


def month_range(day: date) -> tuple[date, date]:
    """返回 day 所在自然月的第一天和最后一天"""
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def summarize_revenue(
    *, session: Session, range_start: date, range_end: date
) -> list[RevenueSummary]:
    """
    查询 [range_start, range_end] 区间（含两端）内按货币汇总的确认收入

    Raises:
        QueryError: 查询执行失败，或结果行无法解析
    """
    params = {"range_start": format_date(range_start), "range_end": format_date(range_end)}
    try:
        result = session.connection().execute(
            text(revenue_summary_sql(settings.DB_SCHEMA)), params
        )
        rows = result.mappings().all()
    except SQLAlchemyError as e:
        logger.error(f"Revenue query for {params} failed: {e}")
        raise QueryError(f"Unable to query revenue data: {e}") from e

    summaries = []
    for row in rows:
        try:
            summaries.append(RevenueSummary.model_validate(dict(row)))
        except ValidationError as e:
            # 不向调用方暴露列级细节
            logger.error(f"Unable to parse revenue row: {e}")
            raise QueryError("Unable to parse revenue data") from e
    return summaries


def summarize_revenue_by_date(*, session: Session, revenue_date: date) -> list[RevenueSummary]:
    return summarize_revenue(session=session, range_start=revenue_date, range_end=revenue_date)


def summarize_revenue_by_month(*, session: Session, revenue_date: date) -> list[RevenueSummary]:
    range_start, range_end = month_range(revenue_date)
    return summarize_revenue(session=session, range_start=range_start, range_end=range_end)
