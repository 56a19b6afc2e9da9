"""
购买事件路由模块

接收账单系统推送的购买/订阅事件，每个产品行写入一条收入事件记录。
所有产品行在同一个事务中写入：要么全部成功，要么全部回滚。
"""
from __future__ import annotations

from fastapi import APIRouter

from revenue_tracker import crud
from revenue_tracker.api.deps import SessionDep
from revenue_tracker.api.schemas import PurchaseEvent, PurchaseProcessed

router = APIRouter(prefix="/purchase", tags=["purchase"])


@router.post("/process", response_model=PurchaseProcessed)
def process_purchase(session: SessionDep, body: PurchaseEvent) -> PurchaseProcessed:
    """
    处理购买事件

    请求路径: POST /api/v1/purchase/process

    重复提交同一事件不会被覆盖：(event_id, service_id) 主键冲突会导致整个请求失败。

    Returns:
        PurchaseProcessed: {"status": "success", "event_id": "<uuid>"}

    Raises:
        PersistenceError: 任意一行插入失败（已回滚）
    """
    crud.record_purchase(session=session, event=body)
    return PurchaseProcessed(event_id=body.event_id)
