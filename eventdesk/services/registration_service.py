import base64
import json
import secrets
from datetime import datetime, timezone
from io import BytesIO
from typing import List

import qrcode
from flask import current_app

from eventdesk.exceptions import EventMismatchError, MissingFieldsError
from eventdesk.models import Event, Registration
from eventdesk.models.enums import AttendeeType
from eventdesk.repositories.registration_repository import RegistrationRepository

PLACEHOLDER_EMAIL = "test@example.gov"
PLACEHOLDER_PHONE = "555-555-5555"


def generate_registration_code() -> str:
    return secrets.token_hex(16)


def normalize_attendees(raw_attendees) -> str:
    """Validate the attendee list and return it JSON encoded.

    Accepts a list of dicts or a JSON string of one. Each attendee needs a
    name; ``type`` defaults to adult, the flags default to False.
    """
    if raw_attendees is None:
        return "[]"
    if isinstance(raw_attendees, str):
        try:
            raw_attendees = json.loads(raw_attendees)
        except ValueError:
            raise ValueError("Attendees must be a JSON list")
    if not isinstance(raw_attendees, list):
        raise ValueError("Attendees must be a list")

    attendees = []
    for attendee in raw_attendees:
        if not isinstance(attendee, dict) or not attendee.get("name"):
            raise ValueError("Each attendee needs a name")
        attendee_type = attendee.get("type", AttendeeType.ADULT.value)
        if attendee_type not in [t.value for t in AttendeeType]:
            raise ValueError(f"Invalid attendee type: {attendee_type}")
        attendees.append(
            {
                "name": str(attendee["name"]),
                "type": attendee_type,
                "isPrimary": bool(attendee.get("isPrimary", False)),
                "waiverSigned": bool(attendee.get("waiverSigned", False)),
            }
        )
    return json.dumps(attendees)


class RegistrationService:
    @staticmethod
    def get_registrations(event_id: int) -> List[Registration]:
        return RegistrationRepository.get_all_for_event(event_id)

    @staticmethod
    def create_registration(event: Event, data: dict):
        """Register attendees for an event.

        Returns the new Registration, or an error dict when the request does
        not fit (bad values, not enough spots).
        """
        required_fields = ["name", "email"]
        missing = [f for f in required_fields if not data.get(f)]
        if missing:
            raise MissingFieldsError(missing)

        participants = data.get("participants", 1)
        if isinstance(participants, bool) or not isinstance(participants, int) or participants < 1:
            return {"error": "Participants must be a positive integer"}

        try:
            attendees = normalize_attendees(data.get("attendees"))
        except ValueError as e:
            return {"error": str(e)}

        spots_left = event.spots_left()
        if participants > spots_left:
            current_app.logger.warning(
                f"Registration for event {event.id} blocked: {participants} requested, {spots_left} left"
            )
            return {"error": "Not enough spots left", "spots_left": spots_left}

        waiver_signed = bool(data.get("waiverSigned", False))
        registration = RegistrationRepository.create(
            {
                "event_id": event.id,
                "name": data["name"],
                "email": data["email"],
                "phone": data.get("phone"),
                "participants": participants,
                "attendees": attendees,
                "waiver_signed": waiver_signed,
                "waiver_signed_at": datetime.now(timezone.utc) if waiver_signed else None,
            },
            generate_registration_code(),
        )
        current_app.logger.info(
            f"Created registration {registration.id} for event {event.id}"
        )
        return registration

    @staticmethod
    def find_or_create_placeholder(code: str, event_id: int) -> Registration:
        """Find the demo registration stored under ``code``, creating it if needed.

        This writes to the store: the first scan of a never-seen demo code
        persists a placeholder registration under ``event_id``.
        """
        registration = RegistrationRepository.get_by_code(code)
        if registration is None:
            current_app.logger.info(f"Creating test registration for code: {code}")
            registration = RegistrationRepository.create(
                {
                    "event_id": event_id,
                    "name": f"Test User ({code})",
                    "email": PLACEHOLDER_EMAIL,
                    "phone": PLACEHOLDER_PHONE,
                    "participants": 1,
                    "attendees": "[]",
                },
                code,
            )
        elif registration.event_id != event_id:
            raise EventMismatchError(
                "This registration is for a different event",
                debug={
                    "registrationEventId": registration.event_id,
                    "requestEventId": event_id,
                },
            )
        return registration

    @staticmethod
    def render_qr_data_url(code: str) -> str:
        """PNG QR image of ``code`` as a data URL."""
        qr = qrcode.QRCode(version=None, box_size=10, border=2)
        qr.add_data(code)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white")
        buffered = BytesIO()
        img.save(buffered, format="PNG")
        encoded = base64.b64encode(buffered.getvalue()).decode("utf-8")
        return f"data:image/png;base64,{encoded}"
