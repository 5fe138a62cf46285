from datetime import date, datetime, time
from typing import Optional
from sqlalchemy import case
from sqlalchemy.orm import Session
from app.models.schedule import WEEKDAYS, ClassSchedule


def day_of_week(value: date) -> str:
    """English weekday name for a date, as stored in ClassSchedule.day_of_week."""
    return WEEKDAYS[value.weekday()]


def find_covering_class(
    db: Session,
    classroom_id: int,
    weekday: str,
    course_name: str,
    start_time: time,
    end_time: time,
) -> Optional[ClassSchedule]:
    """
    Find the class of `course_name` whose [start, end] interval contains the
    requested [start_time, end_time] window on the given weekday.
    """
    return (
        db.query(ClassSchedule)
        .filter(
            ClassSchedule.classroom_id == classroom_id,
            ClassSchedule.day_of_week == weekday,
            ClassSchedule.course_name == course_name,
            ClassSchedule.start_time <= start_time,
            ClassSchedule.end_time >= end_time,
        )
        .first()
    )


def find_active_class(
    db: Session,
    classroom_id: int,
    moment: datetime,
    course_name: Optional[str] = None,
) -> Optional[ClassSchedule]:
    """
    Find a class in session at `moment` in the classroom, optionally restricted
    to one course.
    """
    current_time = moment.time().replace(microsecond=0)
    query = db.query(ClassSchedule).filter(
        ClassSchedule.classroom_id == classroom_id,
        ClassSchedule.day_of_week == day_of_week(moment.date()),
        ClassSchedule.start_time <= current_time,
        ClassSchedule.end_time >= current_time,
    )
    if course_name is not None:
        query = query.filter(ClassSchedule.course_name == course_name)
    return query.order_by(ClassSchedule.start_time).first()


def weekday_order():
    """SQL expression ordering day_of_week names Monday first."""
    return case(
        {name: index for index, name in enumerate(WEEKDAYS)},
        value=ClassSchedule.day_of_week,
        else_=len(WEEKDAYS),
    )
