from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db import get_db
from app.schemas.classroom import SeatResponse
from app.schemas.reservation import ReservationCreate, ReservationResult, SensorUpdate
from app.services.reservations import ReservationEngine
from app.services.sensors import apply_sensor_update
from app.utils.clock import get_clock

router = APIRouter(tags=["seats"])


@router.post(
    "/seats/reserve",
    response_model=ReservationResult,
    summary="Reserve a seat",
    description="Reserve a seat for a scheduled class. One active seat per email.",
)
def reserve_seat(
    request: ReservationCreate,
    db: Session = Depends(get_db),
    clock=Depends(get_clock),
):
    """
    Reserve a seat for a class.

    - **classroom_id**, **seat_number**: Seat to claim.
    - **name**, **email**: Occupant.
    - **reservation_date**, **start_time**, **end_time**: Requested window, which
      must lie inside a scheduled class of **course_name** on that weekday.

    If the reservation is for today and the class is in session, attendance is
    recorded as well.
    """
    return ReservationEngine(db, clock).reserve(request)


@router.post(
    "/seat/update",
    response_model=SeatResponse,
    summary="Apply a seat sensor reading",
)
def update_seat_from_sensor(reading: SensorUpdate, db: Session = Depends(get_db)):
    """
    Record an occupancy sensor event and mirror it onto the seat:
    `occupied` marks the seat taken, any other status marks it available.
    """
    return apply_sensor_update(db, reading)
