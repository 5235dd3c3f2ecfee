"""
Base service class.
Services contain business logic, coordinate repositories and own the transaction.
"""

from abc import ABC

from sqlalchemy.ext.asyncio import AsyncSession


class BaseService(ABC):
    """Base service class for database-backed services."""

    def __init__(self, session: AsyncSession):
        self.session = session
