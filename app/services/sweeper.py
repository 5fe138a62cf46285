import asyncio
import logging
import threading
from datetime import datetime
from typing import List, Optional
from sqlalchemy import delete, update
from sqlalchemy.orm import Session
from app.config import settings
from app.db import SessionLocal
from app.models.classroom import Classroom
from app.models.reservation import Reservation
from app.models.seat import Seat, SeatAvailability
from app.utils.clock import system_clock
from app.utils.scheduler import find_active_class


logger = logging.getLogger(__name__)


def sweep_classroom(db: Session, classroom_id: int, moment: datetime) -> bool:
    """
    Release every seat and delete every reservation of a classroom that has
    no class in session at `moment`. Returns True when the classroom was reset.
    """
    if find_active_class(db, classroom_id, moment) is not None:
        return False

    seats_released = db.execute(
        update(Seat)
        .where(Seat.classroom_id == classroom_id)
        .values(
            availability=SeatAvailability.AVAILABLE.value,
            occupant_name=None,
            occupant_email=None,
        )
        .execution_options(synchronize_session=False)
    ).rowcount
    reservations_deleted = db.execute(
        delete(Reservation)
        .where(Reservation.classroom_id == classroom_id)
        .execution_options(synchronize_session=False)
    ).rowcount
    db.commit()
    logger.debug(
        f"Classroom {classroom_id} reset: {seats_released} seats released, "
        f"{reservations_deleted} reservations deleted"
    )
    return True


class OccupancySweeper:
    """Periodically resets classrooms that have no class in session."""

    def __init__(self, session_factory=SessionLocal, clock=system_clock, interval: Optional[int] = None):
        self.session_factory = session_factory
        self.clock = clock
        self.interval = settings.SWEEP_INTERVAL_SECONDS if interval is None else interval
        self._running = threading.Lock()

    def run_once(self) -> Optional[List[int]]:
        """
        Sweep all classrooms once. Returns the ids of the classrooms that were
        reset, or None when another sweep is still in progress.
        """
        if not self._running.acquire(blocking=False):
            logger.info("Previous sweep still running, skipping this one")
            return None
        try:
            return self._sweep()
        finally:
            self._running.release()

    def _sweep(self) -> List[int]:
        db = self.session_factory()
        reset = []
        try:
            moment = self.clock.now()
            classroom_ids = [
                classroom_id
                for (classroom_id,) in db.query(Classroom.id).order_by(Classroom.id)
            ]
            for classroom_id in classroom_ids:
                try:
                    if sweep_classroom(db, classroom_id, moment):
                        reset.append(classroom_id)
                except Exception:  # pylint: disable=broad-except
                    db.rollback()
                    logger.exception(f"Sweep of classroom {classroom_id} failed, continuing")
        finally:
            db.close()
        if reset:
            logger.info(f"Sweep at {moment:%A %H:%M} reset classrooms {reset}")
        return reset

    async def run_forever(self):
        logger.info(f"Occupancy sweeper started, interval {self.interval}s")
        while True:
            try:
                await asyncio.to_thread(self.run_once)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Sweep failed")
            await asyncio.sleep(self.interval)
