"""
应用启动前检查脚本

在应用启动前检查数据库连接是否可用。
主要用于 Docker Compose 环境，确保数据库服务已启动后再启动应用。

执行流程：
1. 脚本在 uvicorn 启动前被调用
2. 不断重试连接数据库，直到成功或超时
"""
import logging  # 日志记录

from sqlalchemy import Engine  # SQLAlchemy 引擎类型
from sqlmodel import Session, select  # SQLModel 会话和查询
from tenacity import (  # 重试库，用于实现重试机制
    after_log,  # 重试后的日志记录
    before_log,  # 重试前的日志记录
    retry,  # 重试装饰器
    stop_after_attempt,  # 停止条件：达到最大尝试次数
    wait_fixed,  # 等待策略：固定间隔
)

from revenue_tracker.core.db import create_db_engine

logger = logging.getLogger(__name__)

# 重试配置
max_tries = 60 * 5  # 最大尝试次数：300 次（5 分钟，每秒一次）
wait_seconds = 1  # 每次重试间隔：1 秒


@retry(
    stop=stop_after_attempt(max_tries),  # 最多尝试 300 次后停止
    wait=wait_fixed(wait_seconds),  # 每次重试前等待 1 秒
    before=before_log(logger, logging.INFO),  # 重试前记录 INFO 级别日志
    after=after_log(logger, logging.WARN),  # 重试后记录 WARN 级别日志
)
def init(db_engine: Engine) -> None:
    """
    检查数据库是否可用

    失败会触发 tenacity 重试，最多重试 5 分钟。

    Args:
        db_engine: 数据库引擎实例
    """
    try:
        with Session(db_engine) as session:
            session.exec(select(1))
    except Exception as e:
        logger.error(e)
        raise e


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger.info("Initializing service")
    db_engine = create_db_engine()
    try:
        init(db_engine)
    finally:
        db_engine.dispose()
    logger.info("Service finished initializing")


if __name__ == "__main__":  # pragma: no cover
    main()
