from datetime import datetime
from sqlalchemy import Column, Date, DateTime, Integer, String
from app.db import Base


class SeatSensorEvent(Base):
    """Raw occupancy reading as reported by a seat sensor."""

    __tablename__ = "seat_sensor_events"

    id = Column(Integer, primary_key=True, index=True)
    classroom_id = Column(Integer, nullable=False, index=True)
    seat_number = Column(Integer, nullable=False)
    course_name = Column(String(150), nullable=True)
    date_of_class = Column(Date, nullable=True)
    sensor_status = Column(String(20), nullable=False)
    recorded_at = Column(DateTime, nullable=False, default=datetime.now)
