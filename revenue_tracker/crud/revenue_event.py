"""收入事件 CRUD 操作"""
import logging
from typing import Any

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from revenue_tracker.api.errors import PersistenceError
from revenue_tracker.api.schemas import PurchaseEvent
from revenue_tracker.models import RevenueEvent

logger = logging.getLogger(__name__)

# 写入时只带这些列；valid_to_ts 由数据库侧维护，不出现在 INSERT 中
INSERT_COLUMNS = (
    "event_id",
    "service_id",
    "customer_id",
    "currency_code",
    "amount",
    "term_start_dt",
    "term_end_dt",
    "valid_from_ts",
    "created",
    "paid",
)


def build_rows(event: PurchaseEvent) -> list[dict[str, Any]]:
    """把购买事件展开为每个产品行一条记录，顺序与输入一致"""
    rows = []
    for product in event.products:
        term = product.term
        rows.append(
            {
                "event_id": event.event_id,
                "service_id": product.service_id,
                "customer_id": event.customer_id,
                "currency_code": event.currency_code,
                "amount": product.amount * product.quantity,
                "term_start_dt": term.start if term else None,
                "term_end_dt": term.end if term else None,
                "valid_from_ts": event.event_dt,
                "created": event.created,
                "paid": event.paid,
            }
        )
    return rows


def record_purchase(*, session: Session, event: PurchaseEvent) -> list[dict[str, Any]]:
    """
    在单个事务中写入购买事件的所有产品行

    任意一行插入失败（主键冲突、约束错误等）都会回滚整个事务，
    不会留下部分写入。
    """
    rows = build_rows(event)
    table = RevenueEvent.__table__
    try:
        connection = session.connection()
        for row in rows:
            # 逐行执行，保证按输入顺序插入并在第一处失败时停止
            connection.execute(insert(table).values({name: row[name] for name in INSERT_COLUMNS}))
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Purchase event {event.event_id} rolled back: {e}")
        raise PersistenceError(f"Unable to execute transaction: {e}") from e

    logger.info(f"Recorded purchase event {event.event_id} with {len(rows)} product line(s)")
    return rows
