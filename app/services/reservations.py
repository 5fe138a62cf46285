import logging
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.reservation import Reservation
from app.models.seat import Seat, SeatAvailability
from app.models.user import User
from app.schemas.reservation import ReservationCreate
from app.services.attendance import insert_attendance
from app.utils.exceptions import (
    DuplicateReservation,
    NoScheduledClass,
    PersistenceFailure,
    SeatNotFound,
    SeatTaken,
)
from app.utils.scheduler import day_of_week, find_active_class, find_covering_class


logger = logging.getLogger(__name__)


class ReservationEngine:
    """
    Claims seats for scheduled classes.

    Every rule is checked with plain reads before anything is written. The
    write itself is a conditional update that only flips a seat that is still
    available, so two requests racing for one seat cannot both succeed; the
    unique constraints on the reservations table back up the per-seat and
    per-occupant rules.
    """

    def __init__(self, db: Session, clock):
        self.db = db
        self.clock = clock

    def reserve(self, request: ReservationCreate) -> dict:
        weekday = day_of_week(request.reservation_date)
        logger.debug(
            f"Reserving seat {request.seat_number} in classroom {request.classroom_id} "
            f"for {request.email} on {weekday} {request.reservation_date}"
        )

        scheduled = find_covering_class(
            self.db,
            request.classroom_id,
            weekday,
            request.course_name,
            request.start_time,
            request.end_time,
        )
        if scheduled is None:
            logger.error(f"No {request.course_name} class on {weekday} covering {request.start_time}-{request.end_time}")
            raise NoScheduledClass(request.course_name, weekday)

        held = (
            self.db.query(Seat)
            .filter(
                Seat.availability == SeatAvailability.TAKEN.value,
                Seat.occupant_email == request.email,
            )
            .first()
        )
        if held is not None:
            logger.error(f"{request.email} already holds seat {held.seat_number} in classroom {held.classroom_id}")
            raise DuplicateReservation(request.email)

        seat = (
            self.db.query(Seat)
            .filter(
                Seat.classroom_id == request.classroom_id,
                Seat.seat_number == request.seat_number,
            )
            .first()
        )
        if seat is None:
            logger.error(f"Seat not found: classroom {request.classroom_id}, seat {request.seat_number}")
            raise SeatNotFound()
        if seat.availability == SeatAvailability.TAKEN.value:
            logger.error(f"Seat {request.seat_number} in classroom {request.classroom_id} already taken")
            raise SeatTaken(request.seat_number)

        reservation = self._claim(seat, request)
        attendance_recorded = self._record_attendance_if_in_session(seat, request)

        return {
            "message": (
                f"Seat {request.seat_number} reserved successfully for {request.course_name} "
                f"on {request.reservation_date} from {request.start_time:%H:%M} "
                f"to {request.end_time:%H:%M}."
            ),
            "reservation": reservation,
            "attendance_recorded": attendance_recorded,
        }

    def _claim(self, seat: Seat, request: ReservationCreate) -> Reservation:
        """Flip the seat to taken and write the ledger row in one transaction."""
        try:
            claimed = self.db.execute(
                update(Seat)
                .where(
                    Seat.id == seat.id,
                    Seat.availability == SeatAvailability.AVAILABLE.value,
                )
                .values(
                    availability=SeatAvailability.TAKEN.value,
                    occupant_name=request.name,
                    occupant_email=request.email,
                )
                .execution_options(synchronize_session=False)
            )
            if claimed.rowcount != 1:
                self.db.rollback()
                logger.error(f"Seat {seat.id} was claimed by a concurrent request")
                raise SeatTaken(request.seat_number)

            reservation = Reservation(
                seat_id=seat.id,
                classroom_id=request.classroom_id,
                occupant_name=request.name,
                occupant_email=request.email,
                reservation_date=request.reservation_date,
                start_time=request.start_time,
                end_time=request.end_time,
            )
            self.db.add(reservation)
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            raise self._ledger_conflict(request)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceFailure() from exc

        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceFailure() from exc
        self.db.refresh(reservation)
        self.db.refresh(seat)
        logger.info(
            f"Seat {seat.seat_number} in classroom {seat.classroom_id} reserved "
            f"by {request.email} for {request.reservation_date}"
        )
        return reservation

    def _ledger_conflict(self, request: ReservationCreate):
        existing = (
            self.db.query(Reservation)
            .filter(Reservation.occupant_email == request.email)
            .first()
        )
        if existing is not None:
            logger.error(f"{request.email} already has reservation {existing.id}")
            return DuplicateReservation(request.email)
        logger.error(f"Seat {request.seat_number} already reserved on {request.reservation_date}")
        return SeatTaken(request.seat_number)

    def _record_attendance_if_in_session(self, seat: Seat, request: ReservationCreate) -> bool:
        now = self.clock.now()
        if request.reservation_date != now.date():
            return False

        active_class = find_active_class(
            self.db, request.classroom_id, now, course_name=request.course_name
        )
        if active_class is None:
            return False

        user = self.db.query(User).filter(User.email == request.email).first()
        if user is None:
            logger.warning(f"No registered user for {request.email}, attendance not recorded")
            return False

        try:
            recorded = insert_attendance(
                self.db,
                user_id=user.id,
                seat_id=seat.id,
                classroom_id=request.classroom_id,
                course_name=request.course_name,
                class_date=now.date(),
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceFailure() from exc
        logger.debug(f"Attendance for {request.email} on seat {seat.id}, new row: {recorded}")
        return recorded
