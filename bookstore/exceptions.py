"""
业务异常定义
"""
from typing import Any


class BookstoreException(Exception):
    """基础异常类"""
    pass


class ValidationError(BookstoreException):
    """字段校验失败异常"""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class ConflictError(BookstoreException):
    """唯一性冲突异常"""

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"A book with {field} {value} already exists")
