"""
Basic 认证

/admin 使用静态账号表（settings.ADMIN_ACCOUNTS）做 HTTP Basic 认证。
"""
import secrets

from fastapi import HTTPException, status
from fastapi.security import HTTPBasicCredentials

from revenue_tracker.core.config import settings


def authenticate(credentials: HTTPBasicCredentials, accounts: dict[str, str]) -> str | None:
    """
    校验用户名和密码，成功返回用户名

    使用 secrets.compare_digest 做常量时间比较。
    """
    expected = accounts.get(credentials.username)
    if expected is None:
        return None
    if not secrets.compare_digest(credentials.password.encode(), expected.encode()):
        return None
    return credentials.username


def basic_auth_challenge() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": f'Basic realm="{settings.ADMIN_REALM}"'},
    )
