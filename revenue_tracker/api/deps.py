"""
FastAPI 依赖注入模块

提供可复用的依赖项，用于路由处理函数中。
FastAPI 的依赖注入系统会自动处理这些依赖的创建和注入。

关键概念：
- Depends: FastAPI 的依赖注入装饰器
- Generator: 用于创建需要清理的资源（如数据库会话）
- HTTPBasic: 从 Authorization: Basic <base64> 请求头中提取用户名和密码
"""
from collections.abc import Generator  # 生成器类型，用于资源管理
from typing import Annotated  # 类型注解，用于依赖注入

from fastapi import Depends, Request  # FastAPI 核心功能
from fastapi.security import HTTPBasic, HTTPBasicCredentials  # Basic 认证方案
from sqlmodel import Session  # 数据库会话

from revenue_tracker.core import security
from revenue_tracker.core.config import settings
from revenue_tracker.services.admin_store import AdminStore

# Basic 认证配置
# 缺少凭证时自动返回 401 和 WWW-Authenticate 质询头
basic_auth = HTTPBasic(realm=settings.ADMIN_REALM)


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    获取数据库会话（依赖注入）

    引擎（连接池）在应用启动时创建并挂在 app.state.engine 上，
    这里每个请求从连接池借出一个会话，请求结束后自动关闭。

    Yields:
        Session: 数据库会话对象
    """
    with Session(request.app.state.engine) as session:
        yield session  # yield 确保会话在请求结束后自动关闭


def get_admin_store(request: Request) -> AdminStore:
    """获取进程内的管理键值存储（应用启动时创建）"""
    return request.app.state.admin_store


# 类型别名，简化依赖注入的写法
SessionDep = Annotated[Session, Depends(get_db)]  # 数据库会话依赖
AdminStoreDep = Annotated[AdminStore, Depends(get_admin_store)]
CredentialsDep = Annotated[HTTPBasicCredentials, Depends(basic_auth)]


def get_admin_user(credentials: CredentialsDep) -> str:
    """
    获取已认证的管理员用户名（依赖注入）

    Raises:
        HTTPException: 用户名或密码错误时返回 401 质询
    """
    username = security.authenticate(credentials, settings.ADMIN_ACCOUNTS)
    if username is None:
        raise security.basic_auth_challenge()
    return username


# 类型别名，简化需要认证的路由写法
AdminUser = Annotated[str, Depends(get_admin_user)]
