#!/usr/bin/env python3
"""
主应用入口
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, settings as default_settings
from .repositories.book_repository import BookRepository
from .routes.book_routes import book_router
from .services.book_service import BookService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """配置日志"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """创建FastAPI应用，每个应用实例拥有独立的书籍仓库"""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("应用启动中...")
        if settings.seed_sample_data:
            await app.state.book_service.seed_sample_books()
        logger.info(f"书籍仓库就绪，当前共 {await app.state.book_service.count()} 本书")
        yield
        logger.info("应用关闭中...")

    app = FastAPI(
        title="书店库存管理系统",
        description="书籍库存的增删改查与搜索接口",
        version="1.0.0",
        lifespan=lifespan
    )

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.book_repository = BookRepository()
    app.state.book_service = BookService(app.state.book_repository)

    # 注册路由
    app.include_router(book_router)

    @app.get("/health")
    async def health_check(request: Request):
        """健康检查接口"""
        return {"status": "healthy", "books": await request.app.state.book_service.count()}

    return app


configure_logging(default_settings.log_level)
app = create_app()


def run_server(host: Optional[str] = None, port: Optional[int] = None):
    """运行服务器"""
    uvicorn.run(
        app,
        host=host or default_settings.host,
        port=port or default_settings.port,
        log_level=default_settings.log_level.lower()
    )


if __name__ == "__main__":
    run_server()
