from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db import get_db
from app.schemas.attendance import AttendanceCheckIn, AttendanceResult
from app.services.attendance import record_attendance
from app.utils.clock import get_clock

router = APIRouter(tags=["attendance"])


@router.post("/attendance", response_model=AttendanceResult, summary="Check in on a seat")
def check_in(
    check_in_request: AttendanceCheckIn,
    db: Session = Depends(get_db),
    clock=Depends(get_clock),
):
    """
    Record attendance for the class currently in session in the seat's
    classroom. Checking in twice on the same day is not an error.
    """
    return record_attendance(
        db,
        clock,
        seat_id=check_in_request.seat_id,
        email=check_in_request.email,
        user_id=check_in_request.user_id,
    )
