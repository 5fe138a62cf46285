from datetime import date, datetime, time
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator
from app.utils.validation_helpers import validate_not_blank, validate_time_window


class ReservationCreate(BaseModel):
    classroom_id: int = Field(gt=0)
    seat_number: int = Field(gt=0)
    name: str
    email: EmailStr
    reservation_date: date
    start_time: time
    end_time: time
    course_name: str

    @field_validator("name", "course_name")
    @classmethod
    def check_not_blank(cls, value):
        return validate_not_blank(value)

    @field_validator("end_time")
    @classmethod
    def check_time_window(cls, value, info: ValidationInfo):
        return validate_time_window(info.data.get("start_time"), value)


class ReservationResponse(BaseModel):
    id: int
    seat_id: int
    classroom_id: int
    occupant_name: str
    occupant_email: str
    reservation_date: date
    start_time: time
    end_time: time
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReservationResult(BaseModel):
    message: str
    reservation: ReservationResponse
    attendance_recorded: bool = False


class SensorUpdate(BaseModel):
    classroom_id: int = Field(gt=0)
    seat_number: int = Field(gt=0)
    course_name: Optional[str] = None
    date_of_class: Optional[date] = None
    sensor_status: str

    @field_validator("sensor_status")
    @classmethod
    def check_sensor_status(cls, value):
        return validate_not_blank(value).lower()
