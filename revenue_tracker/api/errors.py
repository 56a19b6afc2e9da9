"""
自定义异常模块

定义应用特定的异常类，用于统一的错误处理。
所有业务异常都继承自 AppError，在 main.py 中有统一的异常处理器，
统一返回 {"status": "error", "error": "<message>"}。

异常分类：
- InvalidRequest: 请求体格式错误（400），在任何写入之前中止
- PersistenceError: 事务写入失败（500），整个事务回滚
- QueryError: 查询或结果解析失败（500），不重试
"""
from __future__ import annotations


class AppError(Exception):
    """
    应用自定义异常类

    包含：
    - message: 错误消息（原样返回给调用方）
    - status_code: HTTP 状态码（400, 500 等）

    使用示例：
        raise AppError(message="Unable to start transaction", status_code=500)
    """

    def __init__(self, *, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidRequest(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(message=f"Invalid request body: {message}", status_code=400)


class PersistenceError(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(message=message, status_code=500)


class QueryError(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(message=message, status_code=500)
