"""
数据库连接模块

管理数据库引擎（连接池）的创建。

重要提示：
- 表结构与 calculate_event_revenue 函数由数据库侧维护，不要在这里创建表
- 引擎不是模块级全局变量：由应用 lifespan 调用 create_db_engine() 创建，
  挂在 app.state.engine 上，再通过 api.deps.get_db 注入到路由
"""
from sqlalchemy import Engine
from sqlmodel import create_engine  # SQLModel 的数据库工具

from revenue_tracker.core.config import Settings, settings as default_settings


def create_db_engine(config: Settings | None = None) -> Engine:
    """
    创建数据库引擎（连接池）

    create_engine 只建立连接池，不会立即连接数据库。

    Args:
        config: 配置实例，默认使用全局 settings

    Returns:
        Engine: SQLAlchemy 引擎
    """
    config = config or default_settings
    return create_engine(
        config.SQLALCHEMY_DATABASE_URI,
        pool_size=config.DB_POOL_SIZE,  # 常驻连接数
        max_overflow=config.DB_MAX_OVERFLOW,  # 高峰期额外连接数
        pool_pre_ping=config.DB_POOL_PRE_PING,  # 使用前探活
    )
