#!/usr/bin/env python3
"""
启动脚本 - 书店库存管理系统
使用方法: python run.py
"""
import logging

import uvicorn

from bookstore.config import settings

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
)

# 设置特定模块的日志级别
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

if __name__ == "__main__":
    logging.info("=" * 60)
    logging.info("启动书店库存管理系统")
    logging.info(f"监听地址: http://{settings.host}:{settings.port}")
    logging.info(f"API文档: http://{settings.host}:{settings.port}/docs")
    logging.info("=" * 60)

    uvicorn.run(
        "bookstore.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
