from datetime import datetime
from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from app.db import Base


class Reservation(Base):
    """A claimed seat. Rows only exist while the claim is active; a sweep deletes them."""

    __tablename__ = "reservations"
    __table_args__ = (
        UniqueConstraint("seat_id", "reservation_date", name="uq_reservation_seat_date"),
        UniqueConstraint("occupant_email", name="uq_reservation_occupant_email"),
    )

    id = Column(Integer, primary_key=True, index=True)
    seat_id = Column(
        Integer, ForeignKey("seats.id", ondelete="CASCADE"), nullable=False, index=True
    )
    classroom_id = Column(
        Integer, ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    occupant_name = Column(String(100), nullable=False)
    occupant_email = Column(String(100), nullable=False)
    reservation_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    seat = relationship("Seat", back_populates="reservations")
