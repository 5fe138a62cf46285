from datetime import date
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, model_validator


class AttendanceCheckIn(BaseModel):
    email: Optional[EmailStr] = None
    user_id: Optional[int] = Field(default=None, gt=0)
    seat_id: int = Field(gt=0)

    @model_validator(mode="after")
    def check_user_reference(self):
        if self.email is None and self.user_id is None:
            raise ValueError("either email or user_id is required")
        return self


class AttendanceResult(BaseModel):
    message: str
    recorded: bool
    user_id: int
    seat_id: int
    classroom_id: int
    course_name: str
    class_date: date
