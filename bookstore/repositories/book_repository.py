#!/usr/bin/env python3
"""
书籍数据访问层 - 内存存储
使用字典 + 可重入锁模拟数据库，保证多线程/多协程并发安全
"""
import logging
import threading
from typing import Dict, List, Optional

from bookstore.models.book import Book

logger = logging.getLogger(__name__)


class BookRepository:
    """书籍仓库类"""

    def __init__(self):
        self._books: Dict[int, Book] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    def find_all(self) -> List[Book]:
        """获取所有书籍（调用时刻的快照）"""
        with self._lock:
            return list(self._books.values())

    def find_by_id(self, book_id: Optional[int]) -> Optional[Book]:
        """根据ID获取书籍"""
        if book_id is None:
            return None
        with self._lock:
            return self._books.get(book_id)

    def find_by_title_containing(self, title: Optional[str]) -> List[Book]:
        """根据标题模糊搜索（忽略大小写）"""
        keyword = _normalize_keyword(title)
        if not keyword:
            return []
        return [book for book in self.find_all() if keyword in book.title.lower()]

    def find_by_author_containing(self, author: Optional[str]) -> List[Book]:
        """根据作者模糊搜索（忽略大小写）"""
        keyword = _normalize_keyword(author)
        if not keyword:
            return []
        return [book for book in self.find_all() if keyword in book.author.lower()]

    def find_by_isbn(self, isbn: Optional[str]) -> Optional[Book]:
        """根据ISBN精确查找"""
        if isbn is None or not isbn.strip():
            return None
        with self._lock:
            return self._find_by_isbn_locked(isbn.strip())

    def find_by_stock_below(self, threshold: Optional[int]) -> List[Book]:
        """获取库存低于阈值的书籍"""
        if threshold is None:
            return []
        return [book for book in self.find_all() if book.stock_quantity < threshold]

    def save(self, book: Book) -> Book:
        """保存书籍：无ID时分配新ID，有ID时覆盖该位置"""
        if book is None:
            raise ValueError("Book cannot be null")
        with self._lock:
            if book.id is None:
                book = book.with_id(self._allocate_id())
            else:
                self._reserve_id(book.id)
            self._books[book.id] = book
            return book

    def save_at(self, book_id: int, book: Book) -> Book:
        """以指定ID保存书籍（用于更新）"""
        if book_id is None:
            raise ValueError("ID cannot be null")
        if book is None:
            raise ValueError("Book cannot be null")
        stored = book.with_id(book_id)
        with self._lock:
            self._reserve_id(book_id)
            self._books[book_id] = stored
        return stored

    def save_unique(self, book: Book, book_id: Optional[int] = None) -> Optional[Book]:
        """
        原子地检查ISBN唯一性并保存

        其他ID已占用相同ISBN时返回None，不做任何写入。
        book_id为None时按新书分配ID，否则替换book_id位置的已有书籍；
        该位置不存在（例如已被删除）时抛出KeyError。
        """
        if book is None:
            raise ValueError("Book cannot be null")
        with self._lock:
            if book_id is not None and book_id not in self._books:
                raise KeyError(book_id)
            holder = self._find_by_isbn_locked(book.isbn.strip())
            if holder is not None and holder.id != book_id:
                logger.debug(f"ISBN {book.isbn} 已被书籍 {holder.id} 占用")
                return None
            if book_id is None:
                return self.save(book.with_id(None))
            return self.save_at(book_id, book)

    def update_stock(self, book_id: Optional[int], quantity: int) -> Optional[Book]:
        """原子地更新库存数量，书籍不存在时返回None"""
        if book_id is None:
            return None
        with self._lock:
            book = self._books.get(book_id)
            if book is None:
                return None
            updated = book.with_stock(quantity)
            self._books[book_id] = updated
            return updated

    def delete_by_id(self, book_id: Optional[int]) -> bool:
        """删除书籍，不存在时返回False"""
        if book_id is None:
            return False
        with self._lock:
            return self._books.pop(book_id, None) is not None

    def exists_by_id(self, book_id: Optional[int]) -> bool:
        if book_id is None:
            return False
        with self._lock:
            return book_id in self._books

    def exists_by_isbn(self, isbn: Optional[str]) -> bool:
        return self.find_by_isbn(isbn) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._books)

    def delete_all(self) -> None:
        """清空所有书籍并重置ID生成器（仅用于测试隔离）"""
        with self._lock:
            self._books.clear()
            self._next_id = 1

    def _allocate_id(self) -> int:
        book_id = self._next_id
        self._next_id += 1
        return book_id

    def _reserve_id(self, book_id: int) -> None:
        # 外部指定的ID之后，生成器不得再分配到它
        if book_id >= self._next_id:
            self._next_id = book_id + 1

    def _find_by_isbn_locked(self, isbn: str) -> Optional[Book]:
        for book in self._books.values():
            if book.isbn == isbn:
                return book
        return None


def _normalize_keyword(keyword: Optional[str]) -> str:
    if keyword is None:
        return ""
    return keyword.strip().lower()
