from datetime import time
from typing import Optional
from pydantic import BaseModel, ConfigDict


class ClassroomResponse(BaseModel):
    id: int
    name: str
    total_seats: int

    model_config = ConfigDict(from_attributes=True)


class SeatResponse(BaseModel):
    id: int
    classroom_id: int
    seat_number: int
    availability: str
    occupant_name: Optional[str] = None
    occupant_email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ScheduleResponse(BaseModel):
    id: int
    classroom_id: int
    course_name: str
    instructor: Optional[str] = None
    day_of_week: str
    start_time: time
    end_time: time

    model_config = ConfigDict(from_attributes=True)
