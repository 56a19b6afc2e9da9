"""
收入事件模型模块

定义 revenue_event 表的数据库模型。
表结构由数据库侧维护，这里的模型只用于写入和测试建表。
"""
import uuid
from datetime import datetime

from sqlalchemy import BigInteger, Column, DateTime, String, Uuid
from sqlmodel import Field, SQLModel

from revenue_tracker.core.config import settings


class RevenueEvent(SQLModel, table=True):
    """
    收入事件模型

    每个购买事件的每一行产品写入一条记录，写入后不再修改或删除。
    (event_id, service_id) 为主键，重复提交同一事件会在插入时失败。

    字段说明：
    - event_id: 购买事件 ID
    - service_id: 订阅 ID（无订阅期的一次性购买则为购买 ID）
    - customer_id: 客户 ID
    - currency_code: 货币代码（如 USD）
    - amount: 扩展金额 = 单价 x 数量，以最小货币单位计，入库时计算一次
    - term_start_dt / term_end_dt: 订阅期（一次性购买为空）
    - valid_from_ts: 事件生效时间（即 event_dt）
    - valid_to_ts: 事件失效时间，由数据库侧维护
    - created / paid: 账单创建与支付时间
    """
    __tablename__ = "revenue_event"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    event_id: uuid.UUID = Field(sa_column=Column(Uuid, primary_key=True))
    service_id: uuid.UUID = Field(sa_column=Column(Uuid, primary_key=True))
    customer_id: uuid.UUID = Field(sa_column=Column(Uuid, index=True, nullable=False))
    currency_code: str = Field(sa_column=Column(String(8), nullable=False))
    amount: int = Field(sa_column=Column(BigInteger, nullable=False))

    term_start_dt: datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    term_end_dt: datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    valid_from_ts: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    valid_to_ts: datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    created: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    paid: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
