#!/usr/bin/env python3
"""
书籍管理路由
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from pydantic import BaseModel

from ..exceptions import ConflictError, ValidationError
from ..services.book_service import BookService

logger = logging.getLogger(__name__)

# 创建路由
book_router = APIRouter(prefix="/api/books", tags=["books"])


class BookRequest(BaseModel):
    """创建/更新书籍请求（必填项由服务层校验）"""
    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    publication_date: Optional[date] = None
    price: Optional[Decimal] = None
    stock_quantity: Optional[int] = None
    description: Optional[str] = None


def get_book_service(request: Request) -> BookService:
    """从应用状态中获取书籍服务"""
    return request.app.state.book_service


def _bad_request(e: Exception) -> HTTPException:
    logger.warning(f"请求被拒绝: {e}")
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _server_error(action: str, e: Exception) -> HTTPException:
    logger.error(f"{action}失败: {e}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@book_router.get("")
async def get_all_books(service: BookService = Depends(get_book_service)):
    """获取所有书籍"""
    try:
        return await service.find_all()
    except Exception as e:
        raise _server_error("获取书籍列表", e)


@book_router.get("/count")
async def get_book_count(service: BookService = Depends(get_book_service)) -> int:
    """获取书籍总数"""
    try:
        return await service.count()
    except Exception as e:
        raise _server_error("获取书籍总数", e)


@book_router.get("/low-stock")
async def get_low_stock_books(
    request: Request,
    threshold: Optional[int] = Query(None),
    service: BookService = Depends(get_book_service)
):
    """获取低库存书籍（库存小于阈值）"""
    if threshold is None:
        threshold = request.app.state.settings.low_stock_threshold
    try:
        return await service.find_books_with_low_stock(threshold)
    except ValidationError as e:
        raise _bad_request(e)
    except Exception as e:
        raise _server_error("获取低库存书籍", e)


@book_router.get("/search/title")
async def search_books_by_title(
    title: Optional[str] = Query(None),
    service: BookService = Depends(get_book_service)
):
    """根据标题搜索书籍（忽略大小写）"""
    try:
        return await service.find_by_title(title)
    except Exception as e:
        raise _server_error("按标题搜索书籍", e)


@book_router.get("/search/author")
async def search_books_by_author(
    author: Optional[str] = Query(None),
    service: BookService = Depends(get_book_service)
):
    """根据作者搜索书籍（忽略大小写）"""
    try:
        return await service.find_by_author(author)
    except Exception as e:
        raise _server_error("按作者搜索书籍", e)


@book_router.get("/isbn/{isbn}")
async def get_book_by_isbn(isbn: str, service: BookService = Depends(get_book_service)):
    """根据ISBN获取书籍"""
    try:
        book = await service.find_by_isbn(isbn)
    except Exception as e:
        raise _server_error("按ISBN获取书籍", e)
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="书籍不存在")
    return book


@book_router.get("/{book_id}")
async def get_book(book_id: int, service: BookService = Depends(get_book_service)):
    """获取单本书籍详情"""
    try:
        book = await service.find_by_id(book_id)
    except Exception as e:
        raise _server_error("获取书籍详情", e)
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="书籍不存在")
    return book


@book_router.post("", status_code=status.HTTP_201_CREATED)
async def create_book(request: BookRequest, service: BookService = Depends(get_book_service)):
    """创建新书籍"""
    try:
        return await service.create(request.model_dump())
    except (ValidationError, ConflictError) as e:
        raise _bad_request(e)
    except Exception as e:
        raise _server_error("创建书籍", e)


@book_router.put("/{book_id}")
async def update_book(
    book_id: int,
    request: BookRequest,
    service: BookService = Depends(get_book_service)
):
    """更新书籍信息（整体替换）"""
    try:
        book = await service.update(book_id, request.model_dump())
    except (ValidationError, ConflictError) as e:
        raise _bad_request(e)
    except Exception as e:
        raise _server_error("更新书籍", e)
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="书籍不存在")
    return book


@book_router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(book_id: int, service: BookService = Depends(get_book_service)):
    """删除书籍"""
    try:
        deleted = await service.delete(book_id)
    except Exception as e:
        raise _server_error("删除书籍", e)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="书籍不存在")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@book_router.patch("/{book_id}/stock")
async def update_book_stock(
    book_id: int,
    quantity: int = Query(...),
    service: BookService = Depends(get_book_service)
):
    """更新书籍库存数量"""
    try:
        book = await service.update_stock(book_id, quantity)
    except ValidationError as e:
        raise _bad_request(e)
    except Exception as e:
        raise _server_error("更新库存", e)
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="书籍不存在")
    return book
