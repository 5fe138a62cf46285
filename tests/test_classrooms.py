from datetime import time
from unittest import mock

from fastapi import status
from sqlalchemy.exc import OperationalError

from app.db import seed_database
from app.models.classroom import Classroom
from app.models.schedule import ClassSchedule
from app.models.seat import Seat, SeatAvailability
from app.models.sensor_event import SeatSensorEvent
from app.services import reservations as reservations_module

from tests.conf_tests import (
    MONDAY,
    NEXT_MONDAY,
    TUESDAY,
    clear_db,
    client,
    get_seat,
    reservation_payload,
    room_a,
    room_b,
    test_db,
)


# pylint: disable-next=redefined-outer-name
def test_get_classrooms(room_a, room_b):
    response = client.get("/api/classrooms")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [classroom["name"] for classroom in data] == ["Room A", "Room B"]
    assert data[0]["total_seats"] == 30


# pylint: disable-next=redefined-outer-name
def test_get_seats_live_state(room_b):
    client.post(
        "/api/seat/update",
        json={"classroom_id": room_b.id, "seat_number": 3, "sensor_status": "occupied"},
    )

    response = client.get(f"/api/classrooms/{room_b.id}/seats")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [seat["seat_number"] for seat in data] == list(range(1, 9))
    assert data[2]["availability"] == "taken"
    assert all(seat["availability"] == "available" for seat in data if seat["seat_number"] != 3)


def test_get_seats_unknown_classroom():
    response = client.get("/api/classrooms/9999/seats")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Classroom 9999 not found"


# pylint: disable-next=redefined-outer-name
def test_get_seats_for_date(room_a):
    client.post("/api/seats/reserve", json=reservation_payload(room_a, seat_number=4))

    reserved_day = client.get(f"/api/classrooms/{room_a.id}/seats/{NEXT_MONDAY.isoformat()}")
    other_day = client.get(f"/api/classrooms/{room_a.id}/seats/{MONDAY.isoformat()}")
    live = client.get(f"/api/classrooms/{room_a.id}/seats")

    assert reserved_day.status_code == status.HTTP_200_OK
    seats = {seat["seat_number"]: seat for seat in reserved_day.json()}
    assert len(seats) == 30
    assert seats[4]["availability"] == "taken"
    assert seats[4]["occupant_email"] == "ada@example.com"
    assert seats[5]["availability"] == "available"
    assert seats[5]["occupant_email"] is None

    # The live flag shows the future reservation, the other date does not
    assert all(seat["availability"] == "available" for seat in other_day.json())
    assert live.json()[3]["availability"] == "taken"


# pylint: disable-next=redefined-outer-name
def test_get_seats_for_invalid_date(room_a):
    response = client.get(f"/api/classrooms/{room_a.id}/seats/not-a-date")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


# pylint: disable-next=redefined-outer-name
def test_get_schedule_ordered_by_day_then_start(test_db, room_a):
    test_db.add_all(
        [
            ClassSchedule(
                classroom_id=room_a.id,
                course_name="MAT1000",
                instructor="Dr. Noether",
                day_of_week="Wednesday",
                start_time=time(9, 0),
                end_time=time(11, 0),
            ),
            ClassSchedule(
                classroom_id=room_a.id,
                course_name="PHY2000",
                instructor="Dr. Curie",
                day_of_week="Monday",
                start_time=time(8, 0),
                end_time=time(10, 0),
            ),
            ClassSchedule(
                classroom_id=room_a.id,
                course_name="CSC3000",
                instructor="Dr. Hopper",
                day_of_week="Sunday",
                start_time=time(8, 0),
                end_time=time(9, 0),
            ),
        ]
    )
    test_db.commit()

    response = client.get(f"/api/classrooms/{room_a.id}/schedule")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [(row["day_of_week"], row["course_name"]) for row in data] == [
        ("Monday", "PHY2000"),
        ("Monday", "ECE1528"),
        ("Wednesday", "MAT1000"),
        ("Sunday", "CSC3000"),
    ]
    assert data[1]["start_time"] == "17:30:00"
    assert data[1]["end_time"] == "20:30:00"


def test_get_schedule_unknown_classroom():
    response = client.get("/api/classrooms/9999/schedule")
    assert response.status_code == status.HTTP_404_NOT_FOUND


# pylint: disable-next=redefined-outer-name
def test_sensor_update_logs_event_and_mirrors_flag(test_db, room_b):
    payload = {
        "classroom_id": room_b.id,
        "seat_number": 2,
        "course_name": "ECE1528",
        "date_of_class": TUESDAY.isoformat(),
        "sensor_status": "Occupied",
    }
    occupied = client.post("/api/seat/update", json=payload)
    assert occupied.status_code == status.HTTP_200_OK
    assert occupied.json()["availability"] == "taken"
    assert get_seat(test_db, room_b, 2).availability == SeatAvailability.TAKEN.value

    freed = client.post("/api/seat/update", json={**payload, "sensor_status": "empty"})
    assert freed.json()["availability"] == "available"

    events = test_db.query(SeatSensorEvent).order_by(SeatSensorEvent.id).all()
    assert [event.sensor_status for event in events] == ["occupied", "empty"]
    assert events[0].date_of_class == TUESDAY


# pylint: disable-next=redefined-outer-name
def test_sensor_free_clears_occupant(test_db, room_a):
    client.post("/api/seats/reserve", json=reservation_payload(room_a))
    freed = client.post(
        "/api/seat/update",
        json={"classroom_id": room_a.id, "seat_number": 5, "sensor_status": "free"},
    )
    assert freed.status_code == status.HTTP_200_OK

    seats = client.get(f"/api/classrooms/{room_a.id}/seats").json()
    assert seats[4]["availability"] == "available"
    assert seats[4]["occupant_name"] is None
    assert seats[4]["occupant_email"] is None

    seat = get_seat(test_db, room_a, 5)
    assert seat.occupant_email is None


# pylint: disable-next=redefined-outer-name
def test_sensor_update_unknown_seat(room_b):
    response = client.post(
        "/api/seat/update",
        json={"classroom_id": room_b.id, "seat_number": 42, "sensor_status": "occupied"},
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


# pylint: disable-next=redefined-outer-name
def test_reserve_database_failure_returns_500(test_db, room_a):
    def broken_claim(self, seat, request):
        raise reservations_module.PersistenceFailure()

    with mock.patch.object(reservations_module.ReservationEngine, "_claim", broken_claim):
        response = client.post("/api/seats/reserve", json=reservation_payload(room_a))
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "Database error"


# pylint: disable-next=redefined-outer-name
def test_query_database_failure_returns_500(room_a):
    with mock.patch(
        "app.routers.classrooms.get_classroom_or_404",
        side_effect=OperationalError("SELECT", {}, Exception("database is locked")),
    ):
        response = client.get(f"/api/classrooms/{room_a.id}/seats")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "Database error"


# pylint: disable-next=redefined-outer-name
def test_seed_database(test_db):
    assert seed_database(test_db) is True
    assert seed_database(test_db) is False

    rooms = {room.name: room for room in test_db.query(Classroom).all()}
    assert rooms["Room A"].total_seats == 10
    assert test_db.query(Seat).filter(Seat.classroom_id == rooms["Room B"].id).count() == 8
    schedule = test_db.query(ClassSchedule).one()
    assert schedule.classroom_id == rooms["Room A"].id
    assert (schedule.day_of_week, schedule.start_time, schedule.end_time) == (
        "Monday",
        time(17, 30),
        time(20, 30),
    )
