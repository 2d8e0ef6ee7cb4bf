# app/models.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator, model_validator
from typing import Annotated, List, Literal, Optional, Union

# 24-hour "HH:MM"
TIME_PATTERN = r"^([0-1][0-9]|2[0-3]):[0-5][0-9]$"
ClockTime = Annotated[str, StringConstraints(pattern=TIME_PATTERN)]
# Closed days may leave a store time blank ("") instead of null
OptionalClockTime = Optional[Union[Literal[""], ClockTime]]

DayOfWeek = Annotated[int, Field(ge=0, le=6)]
DayOfMonth = Annotated[int, Field(ge=1, le=31)]
Month = Annotated[int, Field(ge=1, le=12)]


def _reject_null(value):
    # Partial updates may omit a field, but may not blank it out
    if value is None:
        raise ValueError("may not be null")
    return value


# --- Store times (weekly recurring hours) ---

class StoreTime(BaseModel):
    id: str
    day_of_week: int
    is_open: bool
    start_time: Optional[str] = None
    end_time: Optional[str] = None

class StoreTimeCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    day_of_week: DayOfWeek
    is_open: bool
    start_time: OptionalClockTime
    end_time: OptionalClockTime

class StoreTimeUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    day_of_week: Optional[DayOfWeek] = None
    is_open: Optional[bool] = None
    start_time: OptionalClockTime = None
    end_time: OptionalClockTime = None

    @field_validator("day_of_week", "is_open")
    @classmethod
    def not_null(cls, value):
        return _reject_null(value)


# --- Store overwrites (date-specific exceptions, recurring yearly) ---

class StoreOverwrite(BaseModel):
    id: str
    day: int
    month: int
    is_open: bool
    start_time: Optional[str] = None
    end_time: Optional[str] = None

class StoreOverwriteCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    day: int
    month: int
    is_open: bool
    start_time: ClockTime
    end_time: ClockTime

    @model_validator(mode="after")
    def check_date_range(self):
        # Only the ranges are checked, so 31/2 is accepted
        if self.day < 1 or self.day > 31 or self.month < 1 or self.month > 12:
            raise ValueError("Invalid date: day must be 1-31 and month must be 1-12")
        return self

class StoreOverwriteUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    day: Optional[DayOfMonth] = None
    month: Optional[Month] = None
    is_open: Optional[bool] = None
    start_time: Optional[ClockTime] = None
    end_time: Optional[ClockTime] = None

    @field_validator("day", "month", "is_open")
    @classmethod
    def not_null(cls, value):
        return _reject_null(value)


# --- Auth ---

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)

class TokenResponse(BaseModel):
    token: str

class VerifyResponse(BaseModel):
    email: str
    name: Optional[str] = None
    role: Optional[str] = None
    permissions: List[str] = []


class MessageResponse(BaseModel):
    message: str
