import logging
from datetime import date
from typing import Optional
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.attendance import Attendance
from app.models.seat import Seat
from app.models.user import User
from app.utils.exceptions import NoActiveClass, PersistenceFailure, SeatNotFound, UserNotFound
from app.utils.scheduler import find_active_class


logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def insert_attendance(
    db: Session,
    user_id: int,
    seat_id: int,
    classroom_id: int,
    course_name: str,
    class_date: date,
) -> bool:
    """
    Insert one attendance row unless (user, seat, date) is already recorded.
    Returns True when a new row was written. Does not commit.
    """
    values = {
        "user_id": user_id,
        "seat_id": seat_id,
        "classroom_id": classroom_id,
        "course_name": course_name,
        "class_date": class_date,
    }
    insert = _INSERT_BY_DIALECT.get(db.get_bind().dialect.name)
    if insert is not None:
        statement = (
            insert(Attendance)
            .values(**values)
            .on_conflict_do_nothing(index_elements=["user_id", "seat_id", "class_date"])
        )
        return db.execute(statement).rowcount == 1

    # Dialects without ON CONFLICT: rely on the unique constraint inside a savepoint
    try:
        with db.begin_nested():
            db.add(Attendance(**values))
    except IntegrityError:
        return False
    return True


def record_attendance(
    db: Session,
    clock,
    seat_id: int,
    email: Optional[str] = None,
    user_id: Optional[int] = None,
) -> dict:
    """Check a user in on a seat for the class currently in session in its classroom."""
    if user_id is not None:
        user = db.query(User).filter(User.id == user_id).first()
    else:
        user = db.query(User).filter(User.email == email).first()
    if user is None:
        logger.error(f"Attendance rejected, unknown user: {email or user_id}")
        raise UserNotFound()

    seat = db.query(Seat).filter(Seat.id == seat_id).first()
    if seat is None:
        logger.error(f"Attendance rejected, unknown seat: {seat_id}")
        raise SeatNotFound()

    now = clock.now()
    active_class = find_active_class(db, seat.classroom_id, now)
    if active_class is None:
        logger.error(f"Attendance rejected, no class in session in classroom {seat.classroom_id} at {now}")
        raise NoActiveClass()

    try:
        recorded = insert_attendance(
            db,
            user_id=user.id,
            seat_id=seat.id,
            classroom_id=seat.classroom_id,
            course_name=active_class.course_name,
            class_date=now.date(),
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceFailure() from exc

    logger.debug(f"Attendance for user {user.id} on seat {seat.id}, new row: {recorded}")
    return {
        "message": "Attendance recorded" if recorded else "Attendance already recorded",
        "recorded": recorded,
        "user_id": user.id,
        "seat_id": seat.id,
        "classroom_id": seat.classroom_id,
        "course_name": active_class.course_name,
        "class_date": now.date(),
    }
