"""
Admin account document model.
Passwords are stored as bcrypt hashes, never in clear text.
"""
from datetime import datetime
from typing import Optional

import bcrypt
from pydantic import Field, field_validator

from .base import CamelModel, DocumentModel

ADMIN_ROLES = ["super-admin", "admin", "manager"]
EMAIL_PATTERN = r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=10)).decode("utf-8")


class CrudPermissions(CamelModel):
    create: bool = False
    read: bool = True
    update: bool = True
    delete: bool = False


class AdminPermissions(CamelModel):
    products: CrudPermissions = Field(default_factory=lambda: CrudPermissions(create=True, delete=True))
    orders: CrudPermissions = Field(default_factory=CrudPermissions)
    customers: CrudPermissions = Field(default_factory=CrudPermissions)


class AdminDocument(DocumentModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, description="bcrypt hash once stored")
    role: str = "admin"
    is_active: bool = True
    last_login: Optional[datetime] = None
    permissions: AdminPermissions = Field(default_factory=AdminPermissions)

    @field_validator('email', mode='before')
    @classmethod
    def lowercase_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator('role')
    @classmethod
    def check_role(cls, v):
        if v not in ADMIN_ROLES:
            raise ValueError(f'Invalid role. Must be one of: {ADMIN_ROLES}')
        return v
