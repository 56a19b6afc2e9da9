"""
管理路由模块

受 Basic 认证保护，把请求中的 value 按已认证用户名保存在进程内存中。
与收入业务无关，重启后数据丢失。

示例（Zm9vOmJhcg== 是 base64("foo:bar")）：
    curl -X POST http://localhost:8000/admin \\
        -H 'authorization: Basic Zm9vOmJhcg==' \\
        -H 'content-type: application/json' \\
        -d '{"value":"bar"}'
"""
from fastapi import APIRouter

from revenue_tracker.api.deps import AdminStoreDep, AdminUser
from revenue_tracker.api.schemas import AdminValueRequest, StatusResponse

router = APIRouter(tags=["admin"])


@router.post("/admin", response_model=StatusResponse)
def set_admin_value(user: AdminUser, store: AdminStoreDep, body: AdminValueRequest) -> StatusResponse:
    store.set(user, body.value)
    return StatusResponse(status="ok")
