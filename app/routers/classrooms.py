from datetime import date
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy import and_
from sqlalchemy.orm import Session
from app.db import get_db
from app.models.classroom import Classroom
from app.models.reservation import Reservation
from app.models.schedule import ClassSchedule
from app.models.seat import Seat, SeatAvailability
from app.schemas.classroom import ClassroomResponse, ScheduleResponse, SeatResponse
from app.utils.exceptions import ClassroomNotFound
from app.utils.scheduler import weekday_order
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/classrooms",
    tags=["classrooms"],
)


def get_classroom_or_404(db: Session, classroom_id: int) -> Classroom:
    classroom = db.query(Classroom).filter(Classroom.id == classroom_id).first()
    if not classroom:
        logger.error(f"Classroom not found: {classroom_id}")
        raise ClassroomNotFound(classroom_id)
    return classroom


@router.get("", response_model=List[ClassroomResponse], summary="List classrooms")
def get_classrooms(db: Session = Depends(get_db)):
    """
    Retrieve all classrooms ordered by name.
    """
    return db.query(Classroom).order_by(Classroom.name).all()


@router.get(
    "/{classroom_id}/seats",
    response_model=List[SeatResponse],
    summary="List seats with live availability",
)
def get_seats(classroom_id: int, db: Session = Depends(get_db)):
    """
    Retrieve every seat of a classroom ordered by seat number, with the
    availability flag and occupant as currently cached on the seat.
    """
    get_classroom_or_404(db, classroom_id)
    seats = (
        db.query(Seat)
        .filter(Seat.classroom_id == classroom_id)
        .order_by(Seat.seat_number)
        .all()
    )
    logger.debug(f"Retrieved {len(seats)} seats for classroom {classroom_id}")
    return seats


@router.get(
    "/{classroom_id}/seats/{reservation_date}",
    response_model=List[SeatResponse],
    summary="List seats for a date",
)
def get_seats_for_date(
    classroom_id: int,
    reservation_date: date,
    db: Session = Depends(get_db),
):
    """
    Retrieve every seat of a classroom with availability computed from the
    reservations made for `reservation_date`: a seat is taken iff it has a
    reservation on that date.

    - **reservation_date**: Date to check (e.g., 2026-10-19).
    """
    get_classroom_or_404(db, classroom_id)
    rows = (
        db.query(Seat, Reservation)
        .outerjoin(
            Reservation,
            and_(
                Reservation.seat_id == Seat.id,
                Reservation.reservation_date == reservation_date,
            ),
        )
        .filter(Seat.classroom_id == classroom_id)
        .order_by(Seat.seat_number)
        .all()
    )
    seats = []
    for seat, reservation in rows:
        seats.append(
            {
                "id": seat.id,
                "classroom_id": seat.classroom_id,
                "seat_number": seat.seat_number,
                "availability": (
                    SeatAvailability.TAKEN.value if reservation else SeatAvailability.AVAILABLE.value
                ),
                "occupant_name": reservation.occupant_name if reservation else None,
                "occupant_email": reservation.occupant_email if reservation else None,
            }
        )
    logger.debug(f"Retrieved {len(seats)} seats for classroom {classroom_id} on {reservation_date}")
    return seats


@router.get(
    "/{classroom_id}/schedule",
    response_model=List[ScheduleResponse],
    summary="List the class schedule",
)
def get_schedule(classroom_id: int, db: Session = Depends(get_db)):
    """
    Retrieve the classes held in a classroom, ordered by weekday (Monday
    first) and then by start time.
    """
    get_classroom_or_404(db, classroom_id)
    return (
        db.query(ClassSchedule)
        .filter(ClassSchedule.classroom_id == classroom_id)
        .order_by(weekday_order(), ClassSchedule.start_time)
        .all()
    )
