import enum
from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db import Base


class SeatAvailability(str, enum.Enum):
    AVAILABLE = "available"
    TAKEN = "taken"


class Seat(Base):
    __tablename__ = "seats"
    __table_args__ = (
        UniqueConstraint("classroom_id", "seat_number", name="uq_seat_classroom_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    classroom_id = Column(
        Integer, ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    seat_number = Column(Integer, nullable=False)
    availability = Column(
        String(10), nullable=False, default=SeatAvailability.AVAILABLE.value
    )
    # Live-state cache of the current holder
    occupant_name = Column(String(100), nullable=True)
    occupant_email = Column(String(100), nullable=True, index=True)

    classroom = relationship("Classroom", back_populates="seats")
    reservations = relationship("Reservation", back_populates="seat")
