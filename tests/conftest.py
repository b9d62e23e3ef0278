"""
pytest配置文件，定义全局fixtures和测试配置
"""
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from bookstore.config import Settings
from bookstore.main import create_app
from bookstore.repositories.book_repository import BookRepository
from bookstore.services.book_service import BookService
from tests.fixtures.sample_data import ORWELL_1984


@pytest.fixture
def test_settings() -> Settings:
    """测试配置：不写入示例数据"""
    return Settings(
        host="127.0.0.1",
        port=8000,
        log_level="DEBUG",
        cors_origins=["*"],
        seed_sample_data=False,
        low_stock_threshold=10,
    )


@pytest.fixture
def book_repository() -> BookRepository:
    """空的书籍仓库"""
    return BookRepository()


@pytest.fixture
def book_service(book_repository: BookRepository) -> BookService:
    """基于真实内存仓库的书籍服务"""
    return BookService(book_repository)


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """每个测试独立的应用实例"""
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """创建FastAPI测试客户端"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_book_data():
    """示例书籍数据"""
    return dict(ORWELL_1984)


def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line(
        "markers", "unit: 单元测试"
    )
    config.addinivalue_line(
        "markers", "integration: 集成测试"
    )
    config.addinivalue_line(
        "markers", "e2e: 端到端测试"
    )
    config.addinivalue_line(
        "markers", "slow: 慢速测试"
    )
