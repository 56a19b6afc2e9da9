"""
FastAPI 应用主入口

这是应用的启动文件，负责：
1. 创建 FastAPI 应用实例，并在 lifespan 中创建/释放数据库连接池
2. 配置全局中间件（CORS、Sentry）
3. 注册全局异常处理器（统一 {"status": "error", "error": ...} 格式）
4. 注册 API 路由

运行方式：
    uvicorn revenue_tracker.main:app --reload  # 开发模式
"""
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import sentry_sdk  # Sentry 错误监控
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError  # 请求验证错误
from fastapi.middleware.cors import CORSMiddleware  # CORS 中间件
from fastapi.responses import JSONResponse  # JSON 响应
from fastapi.routing import APIRoute  # 路由类型
from starlette.exceptions import HTTPException as StarletteHTTPException

from revenue_tracker.api.errors import AppError, InvalidRequest
from revenue_tracker.api.main import api_router
from revenue_tracker.api.routes import admin
from revenue_tracker.api.schemas import ErrorResponse
from revenue_tracker.core.config import settings
from revenue_tracker.core.db import create_db_engine
from revenue_tracker.services.admin_store import AdminStore

logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    """
    自定义 OpenAPI 操作 ID 生成函数

    格式：{tag}-{route_name}

    示例：
        "revenue-revenue_by_date"  # tag="revenue", name="revenue_by_date"
    """
    return f"{route.tags[0]}-{route.name}"


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers,
    )


def describe_validation_error(errors: list[dict]) -> str:
    """
    把 Pydantic 验证错误列表转换为一条消息，只保留第一处错误

    示例：
        [{"loc": ("body", "products", 0, "amount"), "msg": "Field required"}]
        -> "products.0.amount: Field required"
    """
    if not errors:
        return "malformed request"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    msg = str(first.get("msg", "invalid value"))
    return f"{loc}: {msg}" if loc else msg


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    应用生命周期

    启动时创建数据库连接池和管理键值存储，关闭时释放连接池。
    如果 app.state 上已经有 engine（如测试或嵌入场景），则沿用且不负责释放。
    """
    owns_engine = getattr(app.state, "engine", None) is None
    if owns_engine:
        app.state.engine = create_db_engine()
        logger.info("Database engine created")
    if getattr(app.state, "admin_store", None) is None:
        app.state.admin_store = AdminStore()
    try:
        yield
    finally:
        if owns_engine:
            app.state.engine.dispose()
            app.state.engine = None
            logger.info("Database engine disposed")


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    """
    应用自定义异常处理器

    捕获所有 AppError 异常（InvalidRequest / PersistenceError / QueryError），
    返回统一的错误响应格式。
    """
    return error_response(exc.status_code, exc.message)


async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    HTTP 异常处理器

    捕获 HTTPException（包括路由 404/405 和 Basic 认证 401），
    转换为统一的响应格式，保留 WWW-Authenticate 等响应头。
    """
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """
    请求验证错误处理器

    捕获 Pydantic 的验证错误（如字段类型错误、必填字段缺失、JSON 格式错误等），
    返回 400 和第一处错误。
    """
    err = InvalidRequest(describe_validation_error(list(exc.errors())))
    return error_response(err.status_code, err.message)


def create_app() -> FastAPI:
    """
    创建 FastAPI 应用实例

    Returns:
        FastAPI: 已注册中间件、异常处理器和路由的应用
    """
    application = FastAPI(
        title=settings.PROJECT_NAME,  # API 文档标题
        openapi_url=f"{settings.API_V1_STR}/openapi.json",  # OpenAPI 规范 URL
        generate_unique_id_function=custom_generate_unique_id,  # 自定义操作 ID
        lifespan=lifespan,
    )

    application.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    application.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    application.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]

    # 配置 CORS（跨域资源共享）中间件
    # allow_origins=["*"] 且 allow_credentials=True 时，Starlette 会回显请求的 Origin
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    # 所有业务路由都会添加 /api/v1 前缀
    application.include_router(api_router, prefix=settings.API_V1_STR)
    application.include_router(admin.router)
    return application


# 初始化 Sentry 错误监控（仅在非本地环境）
if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":  # pragma: no cover
    sentry_sdk.init(dsn=str(settings.SENTRY_DSN), enable_tracing=True)

app = create_app()
