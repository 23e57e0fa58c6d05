"""
Services module for the Failure Dispatch Service.

Available services:
- DataFetchService: Remote data fetching with taxonomy-mapped failures
- ValidationService: Input validation and business rules
"""

from .data_fetch_service import DataFetchService
from .validation_service import ValidationService

__all__ = [
    "DataFetchService",
    "ValidationService"
]
