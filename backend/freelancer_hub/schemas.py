"""
Pydantic records for creating, updating and returning entities.
Update schemas only carry the fields the caller actually set (see model_fields_set).
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, condecimal, constr


NonEmptyStr = constr(strip_whitespace=True, min_length=1, max_length=255)
Price = condecimal(max_digits=10, decimal_places=2, ge=0)


class UserCreate(BaseModel):
    email: EmailStr
    name: NonEmptyStr


class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    name: Optional[NonEmptyStr] = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    created_at: datetime
    updated_at: datetime


class CustomerCreate(BaseModel):
    name: NonEmptyStr
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    email: Optional[EmailStr] = None
    notes: Optional[str] = None


class CustomerUpdate(BaseModel):
    name: Optional[NonEmptyStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    email: Optional[EmailStr] = None
    notes: Optional[str] = None


class ProjectCreate(BaseModel):
    name: NonEmptyStr
    notes: Optional[str] = None
    todo_list: List[str] = Field(default_factory=list)
    price: Optional[Price] = None
    time_spent: Optional[int] = Field(None, ge=0)


class ProjectUpdate(BaseModel):
    name: Optional[NonEmptyStr] = None
    notes: Optional[str] = None
    todo_list: Optional[List[str]] = None
    price: Optional[Price] = None
    time_spent: Optional[int] = Field(None, ge=0)


class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    notes: Optional[str]
    todo_list: List[str]
    price: Optional[Decimal]
    time_spent: Optional[int]
    customer_id: int
    created_at: datetime
    updated_at: datetime


class CustomerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    phone: Optional[str]
    address: Optional[str]
    email: Optional[str]
    notes: Optional[str]
    user_id: int
    created_at: datetime
    updated_at: datetime


class CustomerWithProjectsOut(CustomerOut):
    projects: List[ProjectOut] = []
