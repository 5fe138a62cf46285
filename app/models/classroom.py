from sqlalchemy.orm import relationship
from sqlalchemy import Column, Integer, String
from app.db import Base


class Classroom(Base):
    __tablename__ = "classrooms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    total_seats = Column(Integer, nullable=False)

    seats = relationship(
        "Seat", back_populates="classroom", cascade="all, delete-orphan"
    )
    schedules = relationship(
        "ClassSchedule", back_populates="classroom", cascade="all, delete-orphan"
    )
