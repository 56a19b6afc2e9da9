"""
应用配置模块

使用 Pydantic Settings 管理所有环境变量和配置。
配置从项目根目录的 .env 文件读取，支持类型验证和默认值。

关键概念：
- BaseSettings: Pydantic 的配置基类，自动从环境变量读取
- computed_field: 计算字段，根据其他字段动态生成
- model_validator: 模型验证器，用于自定义验证逻辑
"""
import warnings  # 用于发出警告
from typing import Annotated, Any, Literal  # 类型注解工具

from pydantic import (
    BeforeValidator,  # 字段验证前的转换器
    HttpUrl,  # HTTP URL 类型验证
    PostgresDsn,  # PostgreSQL 连接字符串验证
    computed_field,  # 计算字段装饰器
    model_validator,  # 模型验证器装饰器
)
from pydantic_settings import BaseSettings, SettingsConfigDict  # 配置管理
from typing_extensions import Self  # 用于类型注解中引用自身类型


def parse_list(v: Any) -> list[str] | str:
    """
    解析列表型配置值

    支持两种格式：
    1. 逗号分隔的字符串："GET,POST,PUT"
    2. 列表格式：["GET", "POST", "PUT"]

    Args:
        v: 输入的配置值（字符串或列表）

    Returns:
        解析后的列表或字符串

    Raises:
        ValueError: 当输入格式不正确时
    """
    if isinstance(v, str) and not v.startswith("["):
        # 如果是字符串且不是列表格式，按逗号分割
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    """
    应用配置类

    继承自 BaseSettings，自动从环境变量和 .env 文件读取配置。

    配置来源优先级：
    1. 环境变量（最高优先级）
    2. .env 文件
    3. 代码中的默认值（最低优先级）
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,  # 忽略空的环境变量
        extra="ignore",  # 忽略未定义的额外字段
    )
    API_V1_STR: str = "/api/v1"  # API 版本前缀
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    PROJECT_NAME: str = "Revenue Tracker"
    SENTRY_DSN: HttpUrl | None = None

    # CORS：允许所有来源并携带凭证
    # 方法与请求头在默认集合基础上追加（OPTIONS/PATCH/DELETE 以及两个额外请求头）
    CORS_ALLOW_ORIGINS: Annotated[list[str] | str, BeforeValidator(parse_list)] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: Annotated[list[str] | str, BeforeValidator(parse_list)] = [
        "GET",
        "POST",
        "PUT",
        "PATCH",
        "DELETE",
        "HEAD",
        "OPTIONS",
    ]
    CORS_ALLOW_HEADERS: Annotated[list[str] | str, BeforeValidator(parse_list)] = [
        "Origin",
        "Content-Length",
        "Content-Type",
        "Access-Control-Allow-Headers",
        "credentials",
    ]

    # /admin 的 Basic 认证账号表（用户名 -> 密码）
    ADMIN_ACCOUNTS: dict[str, str] = {"foo": "bar", "manu": "123"}
    ADMIN_REALM: str = "Authorization Required"

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "revenue_tracker"
    # 完整连接串，设置后优先于 POSTGRES_* 各项
    DATABASE_URL: str | None = None

    # revenue_event 表与 calculate_event_revenue 函数所在的 schema
    DB_SCHEMA: str = "revenue_tracker"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_PRE_PING: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return str(
            PostgresDsn.build(
                scheme="postgresql+psycopg",
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    def _check_default_secret(self, var_name: str, value: str | None) -> None:
        """
        检查敏感配置是否使用了默认值

        如果配置项使用了默认值 "changethis"，在本地环境会发出警告，
        在生产环境会抛出错误，强制修改。

        Args:
            var_name: 配置项名称
            value: 配置项的值

        Raises:
            ValueError: 在生产环境使用默认值时
        """
        if value == "changethis":
            message = (
                f'The value of {var_name} is "changethis", '
                "for security, please change it, at least for deployments."
            )
            if self.ENVIRONMENT == "local":
                warnings.warn(message, stacklevel=1)
            else:
                raise ValueError(message)

    @model_validator(mode="after")
    def _enforce_non_default_secrets(self) -> Self:
        """
        模型验证器：确保敏感配置不使用默认值

        在配置加载完成后自动调用，检查数据库密码和所有管理员密码。

        Returns:
            self: 返回配置实例本身
        """
        self._check_default_secret("POSTGRES_PASSWORD", self.POSTGRES_PASSWORD)
        for username, password in self.ADMIN_ACCOUNTS.items():
            self._check_default_secret(f"ADMIN_ACCOUNTS[{username}]", password)

        return self


# 创建全局配置实例，整个应用共享
settings = Settings()  # type: ignore
