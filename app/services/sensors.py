import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.seat import Seat, SeatAvailability
from app.models.sensor_event import SeatSensorEvent
from app.schemas.reservation import SensorUpdate
from app.utils.exceptions import PersistenceFailure, SeatNotFound


logger = logging.getLogger(__name__)

OCCUPIED = "occupied"


def apply_sensor_update(db: Session, reading: SensorUpdate) -> Seat:
    """
    Log a raw seat sensor reading and mirror it onto the seat's live flag.
    Sensors are trusted: no schedule or reservation rules apply here.
    """
    seat = (
        db.query(Seat)
        .filter(
            Seat.classroom_id == reading.classroom_id,
            Seat.seat_number == reading.seat_number,
        )
        .first()
    )
    if seat is None:
        logger.error(f"Sensor update for unknown seat {reading.seat_number} in classroom {reading.classroom_id}")
        raise SeatNotFound()

    availability = (
        SeatAvailability.TAKEN if reading.sensor_status == OCCUPIED else SeatAvailability.AVAILABLE
    )
    try:
        db.add(
            SeatSensorEvent(
                classroom_id=reading.classroom_id,
                seat_number=reading.seat_number,
                course_name=reading.course_name,
                date_of_class=reading.date_of_class,
                sensor_status=reading.sensor_status,
            )
        )
        seat.availability = availability.value
        if availability is SeatAvailability.AVAILABLE:
            seat.occupant_name = None
            seat.occupant_email = None
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceFailure() from exc
    db.refresh(seat)
    logger.debug(f"Seat {seat.id} marked {seat.availability} by sensor ({reading.sensor_status})")
    return seat
