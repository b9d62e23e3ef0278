"""
书籍业务服务层
负责字段校验、ISBN唯一性约束，并委托仓库完成读写
"""
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from bookstore.exceptions import ConflictError, ValidationError
from bookstore.models.book import Book
from bookstore.repositories.book_repository import BookRepository

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 200
AUTHOR_MAX_LENGTH = 100
ISBN_MIN_LENGTH = 10
ISBN_MAX_LENGTH = 17
DESCRIPTION_MAX_LENGTH = 1000
PRICE_INTEGER_DIGITS = 6
PRICE_FRACTION_DIGITS = 2
DEFAULT_LOW_STOCK_THRESHOLD = 10

# 空库启动时写入的示例书籍
SAMPLE_BOOKS: List[Dict[str, Any]] = [
    {
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "isbn": "978-0-7432-7356-5",
        "publication_date": date(1925, 4, 10),
        "price": Decimal("15.99"),
        "stock_quantity": 50,
        "description": "A classic American novel about the Jazz Age",
    },
    {
        "title": "To Kill a Mockingbird",
        "author": "Harper Lee",
        "isbn": "978-0-06-112008-4",
        "publication_date": date(1960, 7, 11),
        "price": Decimal("14.99"),
        "stock_quantity": 30,
        "description": "A gripping tale of racial injustice and childhood innocence",
    },
    {
        "title": "1984",
        "author": "George Orwell",
        "isbn": "978-0-452-28423-4",
        "publication_date": date(1949, 6, 8),
        "price": Decimal("13.99"),
        "stock_quantity": 25,
        "description": "A dystopian social science fiction novel",
    },
]


class BookService:
    """书籍服务类"""

    def __init__(self, book_repository: BookRepository):
        self.book_repository = book_repository

    async def find_all(self) -> List[Book]:
        """获取所有书籍"""
        return self.book_repository.find_all()

    async def find_by_id(self, book_id: Optional[int]) -> Optional[Book]:
        """根据ID获取书籍"""
        if not _is_valid_id(book_id):
            return None
        return self.book_repository.find_by_id(book_id)

    async def find_by_title(self, title: Optional[str]) -> List[Book]:
        """根据标题搜索书籍"""
        return self.book_repository.find_by_title_containing(title)

    async def find_by_author(self, author: Optional[str]) -> List[Book]:
        """根据作者搜索书籍"""
        return self.book_repository.find_by_author_containing(author)

    async def find_by_isbn(self, isbn: Optional[str]) -> Optional[Book]:
        """根据ISBN获取书籍"""
        if isbn is None or not isbn.strip():
            return None
        return self.book_repository.find_by_isbn(isbn.strip())

    async def create(self, book_data: Dict[str, Any]) -> Book:
        """创建书籍"""
        book = self._validate_book_data(book_data)

        # 检查与写入在仓库锁内原子完成，调用方传入的id一律忽略
        saved = self.book_repository.save_unique(book)
        if saved is None:
            logger.warning(f"创建书籍被拒绝，ISBN已存在: {book.isbn}")
            raise ConflictError("isbn", book.isbn)

        logger.info(f"创建书籍成功: id={saved.id}, isbn={saved.isbn}")
        return saved

    async def update(self, book_id: Optional[int], book_data: Dict[str, Any]) -> Optional[Book]:
        """更新书籍（整体替换），书籍不存在时返回None"""
        if not _is_valid_id(book_id):
            return None

        existing = self.book_repository.find_by_id(book_id)
        if existing is None:
            return None

        book = self._validate_book_data(book_data)

        try:
            saved = self.book_repository.save_unique(book, book_id=book_id)
        except KeyError:
            # 校验期间书籍已被删除
            return None
        if saved is None:
            logger.warning(f"更新书籍 {book_id} 被拒绝，ISBN已被其他书籍占用: {book.isbn}")
            raise ConflictError("isbn", book.isbn)

        logger.info(f"更新书籍成功: id={book_id}")
        return saved

    async def delete(self, book_id: Optional[int]) -> bool:
        """删除书籍"""
        if not _is_valid_id(book_id):
            return False
        deleted = self.book_repository.delete_by_id(book_id)
        if deleted:
            logger.info(f"删除书籍成功: id={book_id}")
        return deleted

    async def count(self) -> int:
        """获取书籍总数"""
        return self.book_repository.count()

    async def exists(self, book_id: Optional[int]) -> bool:
        """检查书籍是否存在"""
        if not _is_valid_id(book_id):
            return False
        return self.book_repository.exists_by_id(book_id)

    async def update_stock(self, book_id: Optional[int], quantity: Optional[int]) -> Optional[Book]:
        """更新库存数量，只修改stock_quantity字段"""
        if not _is_int(quantity) or quantity < 0:
            raise ValidationError("stock_quantity", "Stock quantity cannot be null or negative")

        if not _is_valid_id(book_id):
            return None

        updated = self.book_repository.update_stock(book_id, quantity)
        if updated is None:
            return None

        logger.info(f"更新库存成功: id={book_id}, stock_quantity={quantity}")
        return updated

    async def find_books_with_low_stock(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> List[Book]:
        """获取低库存书籍（库存严格小于阈值）"""
        if not _is_int(threshold) or threshold < 0:
            raise ValidationError("threshold", "Threshold cannot be negative")
        return self.book_repository.find_by_stock_below(threshold)

    async def seed_sample_books(self) -> int:
        """空库时写入示例书籍，返回写入数量"""
        if self.book_repository.count() > 0:
            return 0

        created = 0
        for book_data in SAMPLE_BOOKS:
            try:
                await self.create(dict(book_data))
                created += 1
            except ConflictError:
                # 并发启动时可能已被写入
                continue
        logger.info(f"已写入 {created} 本示例书籍")
        return created

    def _validate_book_data(self, book_data: Dict[str, Any]) -> Book:
        """校验书籍字段，返回规范化后的Book（不含ID）"""
        if book_data is None:
            raise ValidationError("book", "Book cannot be null")

        title = _require_text(book_data, "title", "Book title is required")
        _check_length("title", title, 1, TITLE_MAX_LENGTH)

        author = _require_text(book_data, "author", "Book author is required")
        _check_length("author", author, 1, AUTHOR_MAX_LENGTH)

        isbn = _require_text(book_data, "isbn", "Book ISBN is required").strip()
        _check_length("isbn", isbn, ISBN_MIN_LENGTH, ISBN_MAX_LENGTH)

        price = _parse_price(book_data.get("price"))

        stock_quantity = book_data.get("stock_quantity")
        if not _is_int(stock_quantity) or stock_quantity < 0:
            raise ValidationError("stock_quantity", "Stock quantity cannot be negative")

        publication_date = _parse_date(book_data.get("publication_date"))

        description = book_data.get("description")
        if description is not None:
            if not isinstance(description, str):
                raise ValidationError("description", "Description must be text")
            _check_length("description", description, 0, DESCRIPTION_MAX_LENGTH)

        return Book(
            title=title,
            author=author,
            isbn=isbn,
            publication_date=publication_date,
            price=price,
            stock_quantity=stock_quantity,
            description=description,
        )


def _is_valid_id(book_id: Optional[int]) -> bool:
    return _is_int(book_id) and book_id > 0


def _is_int(value: Any) -> bool:
    # bool是int的子类，这里不接受
    return isinstance(value, int) and not isinstance(value, bool)


def _require_text(book_data: Dict[str, Any], field: str, message: str) -> str:
    value = book_data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, message)
    return value


def _check_length(field: str, value: str, min_length: int, max_length: int) -> None:
    if not min_length <= len(value) <= max_length:
        raise ValidationError(
            field, f"{field.capitalize()} must be between {min_length} and {max_length} characters"
        )


def _parse_price(value: Any) -> Decimal:
    """价格必须为正数，最多6位整数、2位小数"""
    if value is None or isinstance(value, bool):
        raise ValidationError("price", "Book price is required")
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError("price", f"Invalid price: {value}")

    if not price.is_finite() or price <= 0:
        raise ValidationError("price", "Book price must be greater than 0")

    _, digits, exponent = price.as_tuple()
    fraction_digits = max(0, -exponent)
    integer_digits = max(0, len(digits) + exponent)
    if integer_digits > PRICE_INTEGER_DIGITS or fraction_digits > PRICE_FRACTION_DIGITS:
        raise ValidationError(
            "price",
            f"Price must have at most {PRICE_INTEGER_DIGITS} integer digits "
            f"and {PRICE_FRACTION_DIGITS} decimal places",
        )
    return price


def _parse_date(value: Any) -> date:
    """出版日期必填，且不能晚于今天"""
    if value is None:
        raise ValidationError("publication_date", "Publication date is required")
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError("publication_date", f"Invalid publication date: {value}")
    elif isinstance(value, datetime):
        value = value.date()
    elif not isinstance(value, date):
        raise ValidationError("publication_date", f"Invalid publication date: {value}")

    if value > date.today():
        raise ValidationError("publication_date", "Publication date cannot be in the future")
    return value
