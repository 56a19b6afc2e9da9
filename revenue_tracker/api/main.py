"""
API 路由聚合模块

将所有业务路由模块聚合到一个统一的 router 中。
这个 router 会被注册到主应用（main.py）上，统一添加 /api/v1 前缀。

路由模块说明：
- purchase: 购买事件写入
- revenue: 收入汇总查询（按日 / 按月）

admin 路由不在 /api/v1 下，直接注册在应用根路径。
"""
from fastapi import APIRouter

from revenue_tracker.api.routes import (
    purchase,  # 购买事件路由
    revenue,  # 收入查询路由
)

# 创建主 API 路由器
api_router = APIRouter()

api_router.include_router(purchase.router)  # /purchase/*
api_router.include_router(revenue.router)  # /revenue/*
