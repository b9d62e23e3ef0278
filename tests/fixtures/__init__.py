"""
测试fixtures包
"""
from .sample_data import (
    ORWELL_1984,
    SAMPLE_BOOKS,
    INVALID_BOOKS,
    to_json_payload
)

__all__ = [
    "ORWELL_1984",
    "SAMPLE_BOOKS",
    "INVALID_BOOKS",
    "to_json_payload"
]
