"""
Request schemas

Every JSON body the API accepts is validated by one of these pydantic models
before it reaches a service. Field aliases carry the camelCase names used on
the wire; services work with the snake_case attribute names.

Dates must be ``YYYY-MM-DD`` strings and ids must be integers. pydantic's lax
mode would also take Unix timestamps for dates and ``true`` for ids, so the
``before`` validators below narrow the accepted input.
"""

import re
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from carrental.utils.constants import DEFAULT_TIMEZONE, MIN_CAR_YEAR, CarCategory
from carrental.utils.dates import parse_date, today_in

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")


def _iso_date(value):
    if value is None or (isinstance(value, date) and not isinstance(value, datetime)):
        return value
    if isinstance(value, str) and ISO_DATE_RE.match(value.strip()):
        return parse_date(value.strip())
    raise ValueError("Valid date is required (YYYY-MM-DD)")


def _int_id(value):
    if value is None or (isinstance(value, int) and not isinstance(value, bool)):
        return value
    if isinstance(value, str):
        return value
    raise ValueError("Valid integer ID is required")


def _check_year(value: Optional[int], info: ValidationInfo) -> Optional[int]:
    today = (info.context or {}).get("today") or today_in(DEFAULT_TIMEZONE)
    if value is not None and not (MIN_CAR_YEAR <= value <= today.year + 1):
        raise ValueError("Valid year is required")
    return value


# ---------- Auth ----------
class LoginPayload(RequestModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterPayload(RequestModel):
    username: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, alias="firstName")
    last_name: str = Field(..., min_length=1, alias="lastName")
    date_of_birth: date = Field(..., alias="dateOfBirth")

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def check_date(cls, value):
        return _iso_date(value)


# ---------- Customers ----------
class CustomerCreate(RegisterPayload):
    role_id: int = Field(..., alias="roleId")

    @field_validator("role_id", mode="before")
    @classmethod
    def check_id(cls, value):
        return _int_id(value)


class CustomerUpdate(RequestModel):
    username: Optional[str] = Field(None, min_length=3)
    password: Optional[str] = Field(None, min_length=6)
    first_name: Optional[str] = Field(None, min_length=1, alias="firstName")
    last_name: Optional[str] = Field(None, min_length=1, alias="lastName")
    date_of_birth: Optional[date] = Field(None, alias="dateOfBirth")
    role_id: Optional[int] = Field(None, alias="roleId")
    enabled: Optional[bool] = None

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def check_date(cls, value):
        return _iso_date(value)

    @field_validator("role_id", mode="before")
    @classmethod
    def check_id(cls, value):
        return _int_id(value)


# ---------- Cars ----------
class CarCreate(RequestModel):
    license_plate: str = Field(..., min_length=1, max_length=20, alias="licensePlate")
    brand: str = Field(..., min_length=1, max_length=50)
    model: str = Field(..., min_length=1, max_length=50)
    year: int
    category: CarCategory

    @field_validator("year")
    @classmethod
    def check_year(cls, value, info: ValidationInfo):
        return _check_year(value, info)


class CarUpdate(RequestModel):
    license_plate: Optional[str] = Field(None, min_length=1, max_length=20, alias="licensePlate")
    brand: Optional[str] = Field(None, min_length=1, max_length=50)
    model: Optional[str] = Field(None, min_length=1, max_length=50)
    year: Optional[int] = None
    category: Optional[CarCategory] = None

    @field_validator("year")
    @classmethod
    def check_year(cls, value, info: ValidationInfo):
        return _check_year(value, info)


# ---------- Rentals ----------
class RentalRequest(RequestModel):
    """A booking request: dates are calendar dates, ids are integers."""
    start_date: date = Field(..., alias="startDate")
    end_date: date = Field(..., alias="endDate")
    customer_id: int = Field(..., alias="customerId")
    car_id: int = Field(..., alias="carId")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def check_dates(cls, value):
        return _iso_date(value)

    @field_validator("customer_id", "car_id", mode="before")
    @classmethod
    def check_ids(cls, value):
        return _int_id(value)


class RentalUpdate(RequestModel):
    start_date: Optional[date] = Field(None, alias="startDate")
    end_date: Optional[date] = Field(None, alias="endDate")
    customer_id: Optional[int] = Field(None, alias="customerId")
    car_id: Optional[int] = Field(None, alias="carId")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def check_dates(cls, value):
        return _iso_date(value)

    @field_validator("customer_id", "car_id", mode="before")
    @classmethod
    def check_ids(cls, value):
        return _int_id(value)
