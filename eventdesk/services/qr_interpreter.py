"""
Resolution of scanned or typed check-in codes.

Scanners hand us whatever the ticket encoded: a bare registration code, a
URL carrying the code in its query string, or a JSON payload identifying
the registrant. Every shape is funnelled into one lookup key, the stored
registration code, by applying the unwrap strategies in order. A strategy
that does not recognise its input returns None and the working value is
left as it was, so a failed unwrap never makes things worse than the raw
text.

Legacy demo codes (see LEGACY_TEST_PREFIXES) are not resolved here. They
go through RegistrationService.find_or_create_placeholder, which may write.
"""
import json
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlparse, parse_qs

from flask import current_app

from eventdesk.exceptions import EventMismatchError, InterpretationError
from eventdesk.models import Registration
from eventdesk.repositories.registration_repository import RegistrationRepository

# Codes printed on demo tickets; scanning one creates its registration on the fly
LEGACY_TEST_PREFIXES = ("REG-EVENT", "EVENT", "QRCODE-TEST")

URL_CODE_PARAMETERS = ("data", "code")


def is_legacy_test_code(raw_input: str) -> bool:
    return raw_input.startswith(LEGACY_TEST_PREFIXES)


def unwrap_url(value: str) -> Optional[str]:
    """Return the ``data`` (or else ``code``) query parameter of an http(s) URL."""
    if not value.lower().startswith(("http://", "https://")):
        return None
    try:
        query = parse_qs(urlparse(value).query)
    except ValueError:
        return None

    for parameter in URL_CODE_PARAMETERS:
        values = query.get(parameter)
        if values and values[0]:
            return values[0]
    return None


@dataclass
class TicketPayload:
    event_id: Any
    email: Optional[str] = None
    name: Optional[str] = None


def parse_ticket_payload(value: str) -> Optional[TicketPayload]:
    """Parse a JSON ticket carrying ``eventId`` plus ``email`` and/or ``name``."""
    text = value.strip()
    if not (
        (text.startswith("{") and text.endswith("}"))
        or (text.startswith("[") and text.endswith("]"))
    ):
        return None
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        return None

    if not isinstance(data, dict):
        return None
    if not data.get("eventId") or not (data.get("email") or data.get("name")):
        return None
    return TicketPayload(
        event_id=data["eventId"],
        email=data.get("email"),
        name=data.get("name"),
    )


def same_event_id(payload_event_id, event_id: int) -> bool:
    # JSON booleans are ints in Python; a ticket saying `true` is not event 1
    if isinstance(payload_event_id, bool):
        return False
    return payload_event_id == event_id


class QrCodeInterpreter:
    def __init__(self, event_id: int):
        self.event_id = event_id
        # Applied in order; each one sees the output of the previous
        self.strategies = (
            ("url", self.from_url),
            ("json", self.from_ticket_payload),
        )

    def from_url(self, value: str) -> Optional[str]:
        return unwrap_url(value)

    def from_ticket_payload(self, value: str) -> Optional[str]:
        payload = parse_ticket_payload(value)
        if payload is None:
            return None

        if not same_event_id(payload.event_id, self.event_id):
            raise EventMismatchError(
                "This QR code is for a different event",
                debug={
                    "parsedEventId": payload.event_id,
                    "requestEventId": self.event_id,
                },
            )

        match = find_registration_by_identity(self.event_id, payload.email, payload.name)
        if match is None:
            current_app.logger.info(
                f"No registration for event {self.event_id} matches the ticket payload"
            )
            return None
        current_app.logger.info(f"Ticket payload matched registration {match.id}")
        return match.qr_code

    def unwrap(self, raw_input: str) -> str:
        working_value = raw_input
        for name, strategy in self.strategies:
            unwrapped = strategy(working_value)
            if unwrapped is not None:
                current_app.logger.info(f"Unwrapped scanned code via {name} strategy")
                working_value = unwrapped
        return working_value

    def resolve(self, raw_input: str) -> Registration:
        code = self.unwrap(raw_input)

        # Stored codes never contain NUL, and Postgres rejects it in a literal
        registration = None if "\x00" in code else RegistrationRepository.get_by_code(code)
        if registration is None:
            current_app.logger.info("No registration found for scanned code")
            raise InterpretationError(
                "Invalid QR code - no matching registration found",
                debug={"qrCode": code},
            )

        if registration.event_id != self.event_id:
            current_app.logger.info(
                f"Registration event mismatch: {registration.event_id} vs {self.event_id}"
            )
            raise EventMismatchError(
                "This registration is for a different event",
                debug={
                    "registrationEventId": registration.event_id,
                    "requestEventId": self.event_id,
                },
            )
        return registration


def find_registration_by_identity(event_id: int, email=None, name=None) -> Optional[Registration]:
    """First registration of the event with this email, else with this name.

    Several registrations may share an email; the oldest one wins.
    """
    registrations = RegistrationRepository.get_all_for_event(event_id)
    if email:
        for registration in registrations:
            if registration.email == email:
                return registration
    if name:
        for registration in registrations:
            if registration.name == name:
                return registration
    return None
