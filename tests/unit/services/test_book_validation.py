"""
书籍字段校验单元测试
"""
from datetime import date, datetime
from decimal import Decimal

import pytest

from bookstore.exceptions import ValidationError
from tests.fixtures.sample_data import INVALID_BOOKS


class TestBookValidation:
    """创建书籍时的字段校验"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overrides,field", INVALID_BOOKS)
    async def test_invalid_field_rejected(self, book_service, sample_book_data, overrides, field):
        with pytest.raises(ValidationError) as exc_info:
            await book_service.create({**sample_book_data, **overrides})

        assert exc_info.value.field == field
        assert await book_service.count() == 0

    @pytest.mark.asyncio
    async def test_missing_fields_report_first_violation(self, book_service):
        """测试多个字段缺失时报告第一个"""
        with pytest.raises(ValidationError) as exc_info:
            await book_service.create({"isbn": "bad"})

        assert exc_info.value.field == "title"

    @pytest.mark.asyncio
    async def test_none_input_rejected(self, book_service):
        with pytest.raises(ValidationError):
            await book_service.create(None)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", [Decimal("0.01"), Decimal("999999.99"), Decimal("12"), 7, "19.5"])
    async def test_price_bounds_accepted(self, book_service, sample_book_data, price):
        book = await book_service.create({**sample_book_data, "price": price})

        assert book.price == Decimal(str(price))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", ["abc", "NaN", "Infinity", True])
    async def test_price_must_be_finite_number(self, book_service, sample_book_data, price):
        with pytest.raises(ValidationError) as exc_info:
            await book_service.create({**sample_book_data, "price": price})

        assert exc_info.value.field == "price"

    @pytest.mark.asyncio
    async def test_boundary_lengths_accepted(self, book_service, sample_book_data):
        book = await book_service.create({
            **sample_book_data,
            "title": "t" * 200,
            "author": "a" * 100,
            "isbn": "0123456789",
            "description": "d" * 1000,
        })

        assert len(book.title) == 200
        assert book.isbn == "0123456789"

    @pytest.mark.asyncio
    async def test_publication_date_today_accepted(self, book_service, sample_book_data):
        book = await book_service.create({**sample_book_data, "publication_date": date.today()})

        assert book.publication_date == date.today()

    @pytest.mark.asyncio
    async def test_publication_datetime_normalized(self, book_service, sample_book_data):
        book = await book_service.create(
            {**sample_book_data, "publication_date": datetime(1949, 6, 8, 12, 30)}
        )

        assert book.publication_date == date(1949, 6, 8)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["not-a-date", 1949])
    async def test_publication_date_must_be_date(self, book_service, sample_book_data, value):
        with pytest.raises(ValidationError) as exc_info:
            await book_service.create({**sample_book_data, "publication_date": value})

        assert exc_info.value.field == "publication_date"

    @pytest.mark.asyncio
    async def test_stock_quantity_rejects_bool(self, book_service, sample_book_data):
        with pytest.raises(ValidationError) as exc_info:
            await book_service.create({**sample_book_data, "stock_quantity": False})

        assert exc_info.value.field == "stock_quantity"

    def test_error_message_names_field(self):
        error = ValidationError("price", "Book price must be greater than 0")

        assert str(error) == "price: Book price must be greater than 0"
        assert error.reason == "Book price must be greater than 0"
