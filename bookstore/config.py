"""
应用配置
从环境变量（以及 .env 文件）读取
"""
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class Settings:
    # 服务设置
    host: str = field(default_factory=lambda: os.getenv("BOOKSTORE_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("BOOKSTORE_PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("BOOKSTORE_LOG_LEVEL", "INFO").upper())
    cors_origins: List[str] = field(default_factory=lambda: _env_list("BOOKSTORE_CORS_ORIGINS", "*"))

    # 业务设置
    seed_sample_data: bool = field(default_factory=lambda: _env_bool("BOOKSTORE_SEED_SAMPLE_DATA", "true"))
    low_stock_threshold: int = field(default_factory=lambda: int(os.getenv("BOOKSTORE_LOW_STOCK_THRESHOLD", "10")))

    @classmethod
    def from_env(cls) -> "Settings":
        """按当前环境变量重新构建配置"""
        return cls()


settings = Settings()
