"""
API 请求/响应数据模型（Schema）

定义所有 API 接口的请求和响应数据结构。
使用 Pydantic 进行数据验证和序列化。

关键概念：
- BaseModel: Pydantic 的模型基类，用于数据验证
- Field: 字段验证器，定义字段的约束（长度、范围等）
- 这些模型不是数据库表，只用于 API 数据交换

购买事件的字段名沿用上游账单系统的命名（id / customer / currency），
同时接受描述性别名（event_id / customer_id / currency_code）。
"""
from __future__ import annotations

from typing import Literal

from pydantic import (
    AliasChoices,
    AwareDatetime,  # 必须带时区偏移的 RFC3339 时间戳
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    field_validator,
)

from revenue_tracker.core.codecs import Identifier, RevenueDate

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# ============================================================
# 通用响应模型
# ============================================================


class StatusResponse(BaseModel):
    """
    最简单的状态响应

    示例：{"status": "ok"}
    """
    status: str


class ErrorResponse(BaseModel):
    """
    统一错误响应格式

    所有失败都使用同一个格式，区分"输入错误"与"基础设施错误"只靠 HTTP 状态码。

    示例响应：
        {"status": "error", "error": "Invalid request body: ..."}
    """
    status: Literal["error"] = "error"
    error: str


# ============================================================
# 购买事件
# ============================================================


class Term(BaseModel):
    """订阅期，start/end 均可为空；整个 term 缺省表示一次性购买"""
    start: AwareDatetime | None = None
    end: AwareDatetime | None = None


class ProductLine(BaseModel):
    """
    产品行

    amount 以最小货币单位计（如美分），必须是非零的 32 位整数（负数表示退款/抵扣）；
    quantity 为 1 到 INT32_MAX 之间的整数。
    两者都限定在 32 位范围内，扩展金额 amount x quantity 不会超出 BIGINT。
    product_id 只做校验，不入库。
    """
    service_id: Identifier
    product_id: Identifier
    amount: StrictInt = Field(ge=INT32_MIN, le=INT32_MAX)
    quantity: StrictInt = Field(ge=1, le=INT32_MAX)
    term: Term | None = None

    @field_validator("amount")
    @classmethod
    def _amount_not_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError("amount must not be zero")
        return v


class PurchaseEvent(BaseModel):
    """
    购买事件请求模型

    请求路径: POST /api/v1/purchase/process
    """
    model_config = ConfigDict(populate_by_name=True)

    event_id: Identifier = Field(validation_alias=AliasChoices("id", "event_id"))
    event_dt: AwareDatetime
    created: AwareDatetime
    paid: AwareDatetime
    customer_id: Identifier = Field(validation_alias=AliasChoices("customer", "customer_id"))
    currency_code: StrictStr = Field(
        min_length=1,
        max_length=8,
        validation_alias=AliasChoices("currency", "currency_code"),
    )
    products: list[ProductLine] = Field(min_length=1)


class PurchaseProcessed(BaseModel):
    status: Literal["success"] = "success"
    event_id: Identifier


# ============================================================
# 收入查询
# ============================================================


class RevenueQuery(BaseModel):
    """
    收入查询请求模型（按日 / 按月共用）

    pov_timestamp 目前只记录日志，不影响查询结果。
    """
    revenue_date: RevenueDate
    pov_timestamp: AwareDatetime | None = None


class RevenueSummary(BaseModel):
    """
    按货币汇总的收入

    - currency_code: 货币代码
    - service_subs: 参与汇总的不同 service 数量
    - recognized_amount: 数据库函数返回的确认收入之和
    """
    currency_code: StrictStr
    service_subs: int
    recognized_amount: float


class RevenueSummaryResponse(BaseModel):
    status: Literal["success"] = "success"
    revenue_summary: list[RevenueSummary] = []


# ============================================================
# 管理接口
# ============================================================


class AdminValueRequest(BaseModel):
    value: StrictStr
