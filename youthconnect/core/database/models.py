"""
Declarative base for YouthConnect ORM models.

Platform tables live in core/models; the user table is defined alongside the
authentication setup in core/auth/models.py.
"""

from typing import Any

from sqlalchemy.orm import declarative_base

Base: Any = declarative_base()
