"""SQLAlchemy models for the relational store."""

from .transfer import TransferRow
from .user import UserRow

__all__ = ["TransferRow", "UserRow"]
