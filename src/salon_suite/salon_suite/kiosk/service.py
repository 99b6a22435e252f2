from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from ..appointments.repository import AppointmentRepository
from ..common.datetime_utils import now_local
from ..common.validators import normalize_phone
from ..core.constants import MIN_PHONE_DIGITS
from ..core.enums import AppointmentStatus, KioskStage
from ..core.exceptions import InvalidTransitionError, NotFoundError
from ..locations.model import Location
from ..locations.repository import LocationRepository
from .model import KioskSession
from .session_store import KioskSessionStore

logger = logging.getLogger(__name__)

_NOT_CHECKABLE = {
    AppointmentStatus.CANCELLED,
    AppointmentStatus.NO_SHOW,
    AppointmentStatus.COMPLETED,
}

NO_APPOINTMENT_MESSAGE = "We couldn't find an appointment for today with that phone number."
LOOKUP_FAILED_MESSAGE = "Something went wrong looking up your appointment. Please see the front desk."
CHECK_IN_FAILED_MESSAGE = "Something went wrong checking you in. Please see the front desk."


class KioskService:
    """Client self check-in: idle -> lookup -> confirm -> success, with error exits."""

    def __init__(
        self,
        store: KioskSessionStore,
        appointments: AppointmentRepository,
        locations: LocationRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._store = store
        self._appointments = appointments
        self._locations = locations
        self._clock = clock

    def _location(self, location_id: int) -> Location:
        loc = self._locations.get_by_id(int(location_id))
        if not loc or not loc.is_active:
            raise NotFoundError("Location not found")
        return loc

    @staticmethod
    def _move(session: KioskSession, stage: KioskStage, now: datetime) -> None:
        logger.info(
            "Kiosk %s location=%s %s -> %s",
            session.device_id,
            session.location_id,
            session.stage.value,
            stage.value,
        )
        session.stage = stage
        session.updated_at = now

    def state(self, *, location_id: int, device_id: str) -> dict:
        self._location(location_id)
        now = self._clock()
        with self._store.session(device_id, int(location_id), now) as s:
            return s.to_dict()

    def start_lookup(self, *, location_id: int, device_id: str, phone: str) -> dict:
        loc = self._location(location_id)
        now = self._clock()
        with self._store.session(device_id, loc.location_id, now) as s:
            if s.stage != KioskStage.IDLE:
                raise InvalidTransitionError(f"Cannot look up from stage '{s.stage.value}'")

            digits = normalize_phone(phone, min_digits=MIN_PHONE_DIGITS)
            s.phone = digits
            self._move(s, KioskStage.LOOKUP, now)

            try:
                found = self._appointments.find_for_phone(
                    organization_id=loc.organization_id,
                    phone_digits=digits,
                    work_date=now.date(),
                )
            except Exception:
                logger.exception("Kiosk lookup failed location=%s", loc.location_id)
                s.message = LOOKUP_FAILED_MESSAGE
                self._move(s, KioskStage.ERROR, now)
                return s.to_dict()

            open_ = [a for a in found if a.status not in _NOT_CHECKABLE]
            here = [a for a in open_ if a.location_id == loc.location_id]

            if here:
                s.appointments = here
                s.message = None
                self._move(s, KioskStage.CONFIRM, now)
            elif open_:
                s.appointments = open_
                s.message = "Your appointment today is at a different location."
                self._move(s, KioskStage.WRONG_LOCATION, now)
            else:
                s.appointments = []
                s.message = NO_APPOINTMENT_MESSAGE
                self._move(s, KioskStage.ERROR, now)
            return s.to_dict()

    def confirm(self, *, location_id: int, device_id: str) -> dict:
        self._location(location_id)
        now = self._clock()
        with self._store.session(device_id, int(location_id), now) as s:
            if s.stage != KioskStage.CONFIRM:
                raise InvalidTransitionError(f"Cannot confirm from stage '{s.stage.value}'")

            pending = [a.appointment_id for a in s.appointments if not a.is_checked_in]
            try:
                changed = self._appointments.mark_checked_in(appointment_ids=pending, checked_in_at=now)
            except Exception:
                logger.exception("Kiosk check-in failed location=%s ids=%s", location_id, pending)
                s.message = CHECK_IN_FAILED_MESSAGE
                self._move(s, KioskStage.ERROR, now)
                return s.to_dict()

            s.checked_in_count = changed
            s.message = "You're checked in!"
            self._move(s, KioskStage.SUCCESS, now)
            return s.to_dict()

    def reset(self, *, location_id: int, device_id: str) -> dict:
        now = self._clock()
        with self._store.session(device_id, int(location_id), now) as s:
            if s.stage != KioskStage.IDLE:
                logger.info("Kiosk %s location=%s reset from %s", device_id, location_id, s.stage.value)
            s.clear(now)
            return s.to_dict()
