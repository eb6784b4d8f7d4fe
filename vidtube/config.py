"""配置管理"""

from functools import lru_cache
from urllib.parse import quote

from pydantic import (
    BaseModel,
    Field,
    SecretStr,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """数据库配置"""

    host: str = "localhost"
    port: int = Field(default=5432, ge=1, le=65535)
    name: str = "vidtube"
    user: str = "postgres"
    password: SecretStr = SecretStr("")

    # 完整连接串（设置后优先，例如测试用 sqlite+aiosqlite）
    dsn: str | None = None

    @computed_field
    @property
    def url(self) -> str:
        """构建数据库连接 URL"""
        if self.dsn:
            return self.dsn
        user = quote(self.user, safe="")
        password = quote(self.password.get_secret_value(), safe="")
        return f"postgresql+asyncpg://{user}:{password}@{self.host}:{self.port}/{self.name}"


class TokenConfig(BaseModel):
    """JWT 配置：access / refresh 使用不同密钥"""

    access_secret: SecretStr
    refresh_secret: SecretStr
    access_expire_minutes: int = Field(default=15, ge=1)
    refresh_expire_days: int = Field(default=10, ge=1)
    algorithm: str = "HS256"

    @model_validator(mode="after")
    def check_distinct_secrets(self) -> "TokenConfig":
        if self.access_secret.get_secret_value() == self.refresh_secret.get_secret_value():
            msg = "access_secret 与 refresh_secret 不能相同"
            raise ValueError(msg)
        return self


class S3Config(BaseModel):
    """对象存储配置"""

    bucket: str = ""
    region: str = "us-east-1"
    access_key_id: SecretStr | None = None
    secret_access_key: SecretStr | None = None
    # 公开访问前缀，为空时使用 https://{bucket}.s3.{region}.amazonaws.com
    public_url: str | None = None


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="_",
        env_nested_max_split=1,
        extra="ignore",
    )

    # 应用配置
    app_name: str = "VidTube API"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    # 嵌套配置
    db: DatabaseConfig = DatabaseConfig()
    token: TokenConfig
    s3: S3Config = S3Config()

    # CORS
    cors_origins: list[str] = []

    @computed_field
    @property
    def database_url(self) -> str:
        """数据库连接 URL（供 SQLAlchemy 使用）"""
        return self.db.url

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in allowed:
            msg = f"log_level 必须是 {allowed} 之一"
            raise ValueError(msg)
        return upper

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


@lru_cache
def get_settings() -> Settings:
    """全局单例"""
    return Settings()
