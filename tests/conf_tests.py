import os
import pytest
from datetime import date, datetime, time
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from app.main import app
from app.db import Base, get_db, init_database
from app.models.classroom import Classroom
from app.models.reservation import Reservation
from app.models.schedule import ClassSchedule
from app.models.seat import Seat, SeatAvailability
from app.models.user import User
from app.utils.auth import get_password_hash
from app.utils.clock import FixedClock, get_clock

# Test database setup
if not os.path.exists("./out"):
    os.makedirs("./out")

SQLALCHEMY_DATABASE_URL = "sqlite:///./out/tests.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create test tables
init_database(bind=engine, seed=False)

# 2026-10-19 is a Monday
MONDAY = date(2026, 10, 19)
NEXT_MONDAY = date(2026, 10, 26)
TUESDAY = date(2026, 10, 20)
COURSE = "ECE1528"

# Friday morning: no class in session anywhere
DEFAULT_MOMENT = datetime(2026, 10, 16, 9, 0)
clock = FixedClock(DEFAULT_MOMENT)


# Dependency override
def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


def override_get_clock():
    return clock


app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_clock] = override_get_clock

client = TestClient(app)


# Fixtures
@pytest.fixture(autouse=True)
def clear_db():
    """Clear all data from all tables and rewind the clock before each test"""
    clock.set(DEFAULT_MOMENT)
    with engine.connect() as conn:
        trans = conn.begin()
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        trans.commit()


@pytest.fixture
def test_db():
    """Provide a database session for testing"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_classroom(db, name, total_seats):
    classroom = Classroom(name=name, total_seats=total_seats)
    db.add(classroom)
    db.flush()
    db.add_all(
        Seat(classroom_id=classroom.id, seat_number=number)
        for number in range(1, total_seats + 1)
    )
    db.commit()
    db.refresh(classroom)
    return classroom


@pytest.fixture
def room_a(test_db):
    """Room A, 30 seats, ECE1528 on Mondays 17:30-20:30"""
    classroom = create_classroom(test_db, "Room A", 30)
    test_db.add(
        ClassSchedule(
            classroom_id=classroom.id,
            course_name=COURSE,
            instructor="Dr. Lee",
            day_of_week="Monday",
            start_time=time(17, 30),
            end_time=time(20, 30),
        )
    )
    test_db.commit()
    return classroom


@pytest.fixture
def room_b(test_db):
    """Room B, 8 seats, no classes"""
    return create_classroom(test_db, "Room B", 8)


@pytest.fixture
def test_user(test_db):
    """Fixture to create a registered user in the database"""
    user = User(
        fullname="Ada Student",
        email="ada@example.com",
        hashed_password=get_password_hash("testpassword"),
    )
    test_db.add(user)
    test_db.commit()
    test_db.refresh(user)
    return user


def reservation_payload(classroom, seat_number=5, **overrides):
    payload = {
        "classroom_id": classroom.id,
        "seat_number": seat_number,
        "name": "Ada Student",
        "email": "ada@example.com",
        "reservation_date": NEXT_MONDAY.isoformat(),
        "start_time": "18:00",
        "end_time": "19:00",
        "course_name": COURSE,
    }
    payload.update(overrides)
    return payload


def get_seat(db, classroom, seat_number):
    db.expire_all()
    return (
        db.query(Seat)
        .filter(Seat.classroom_id == classroom.id, Seat.seat_number == seat_number)
        .one()
    )


def assert_seats_match_reservations(db):
    """A seat is taken iff a reservation row references it"""
    db.expire_all()
    reserved_seat_ids = {seat_id for (seat_id,) in db.query(Reservation.seat_id)}
    for seat in db.query(Seat).all():
        expected = (
            SeatAvailability.TAKEN.value
            if seat.id in reserved_seat_ids
            else SeatAvailability.AVAILABLE.value
        )
        assert seat.availability == expected, f"seat {seat.id} is {seat.availability}"
