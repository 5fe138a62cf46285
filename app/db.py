import logging
import os
from datetime import time
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings


logger = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL
_connect_args = (
    {"check_same_thread": False}
    if SQLALCHEMY_DATABASE_URL.startswith("sqlite")
    else {}
)
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def _ensure_sqlite_directory(url):
    database = make_url(url).database
    if url.startswith("sqlite") and database and database != ":memory:":
        directory = os.path.dirname(database)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)


def seed_database(db):
    """Insert the demo classrooms, their seats and one class if nothing exists yet."""
    from app.models.classroom import Classroom
    from app.models.schedule import ClassSchedule
    from app.models.seat import Seat

    if db.query(Classroom).count() > 0:
        return False

    logger.info("Initializing classrooms and seats")
    room_a = Classroom(name="Room A", total_seats=10)
    room_b = Classroom(name="Room B", total_seats=8)
    db.add_all([room_a, room_b])
    db.flush()

    for classroom in (room_a, room_b):
        db.add_all(
            Seat(classroom_id=classroom.id, seat_number=number)
            for number in range(1, classroom.total_seats + 1)
        )

    db.add(
        ClassSchedule(
            classroom_id=room_a.id,
            course_name="ECE1528",
            instructor="TBA",
            day_of_week="Monday",
            start_time=time(17, 30),
            end_time=time(20, 30),
        )
    )
    db.commit()
    return True


def init_database(bind=None, seed=None):
    """Create the tables and, when enabled, the demo data."""
    # pylint: disable=import-outside-toplevel,unused-import
    from app.models import attendance, classroom, reservation, schedule, seat, sensor_event, user  # noqa: F401

    bind = bind or engine
    _ensure_sqlite_directory(str(bind.url))
    Base.metadata.create_all(bind=bind)

    if seed is None:
        seed = settings.SEED_DEMO_DATA
    if seed:
        db = sessionmaker(autocommit=False, autoflush=False, bind=bind)()
        try:
            seed_database(db)
        finally:
            db.close()
    logger.info("Classroom and seat tables initialized")


def get_db():
    """Provide a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
