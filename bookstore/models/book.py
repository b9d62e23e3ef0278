"""
书籍模型
"""
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Book:
    """书籍模型（不可变，写入时整体替换）"""
    title: str
    author: str
    isbn: str
    publication_date: date
    price: Decimal
    stock_quantity: int
    description: Optional[str] = None
    id: Optional[int] = None  # 由仓库分配

    def with_id(self, book_id: Optional[int]) -> "Book":
        """返回带指定ID的副本"""
        return replace(self, id=book_id)

    def with_stock(self, quantity: int) -> "Book":
        """返回仅库存不同的副本"""
        return replace(self, stock_quantity=quantity)

    def __repr__(self):
        return f"Book(id={self.id}, isbn='{self.isbn}', title='{self.title}')"
