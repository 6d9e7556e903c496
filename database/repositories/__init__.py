"""
Database Repositories Package
"""
from database.repositories.base_repository import BaseRepository
from database.repositories.credit_repository import CreditRepository
from database.repositories.validation_log_repository import ValidationLogRepository
from database.repositories.search_history_repository import SearchHistoryRepository

__all__ = [
    "BaseRepository",
    "CreditRepository",
    "ValidationLogRepository",
    "SearchHistoryRepository"
]
