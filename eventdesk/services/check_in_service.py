from flask import current_app

from eventdesk.exceptions import InvalidRequestError, MissingFieldsError, TransitionError
from eventdesk.models import Registration
from eventdesk.repositories.registration_repository import RegistrationRepository
from eventdesk.services.event_service import EventService
from eventdesk.services.qr_interpreter import QrCodeInterpreter, is_legacy_test_code
from eventdesk.services.registration_service import RegistrationService


def parse_event_id(value) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    raise InvalidRequestError("Event ID must be an integer")


class CheckInService:
    @staticmethod
    def apply_check_in(registration: Registration, event_id: int) -> Registration:
        updated = RegistrationRepository.set_checked_in(registration.qr_code, event_id)
        if updated is None:
            raise TransitionError("Invalid QR code", debug={"qrCode": registration.qr_code})
        return updated

    @staticmethod
    def check_in(data: dict, user_id) -> Registration:
        qr_code = data.get("qrCode")
        event_id = data.get("eventId")
        missing = [
            field
            for field, value in (("qrCode", qr_code), ("eventId", event_id))
            if value is None or value == ""
        ]
        if missing:
            raise MissingFieldsError(missing)
        if not isinstance(qr_code, str):
            raise InvalidRequestError("QR code must be a string")
        event_id = parse_event_id(event_id)

        current_app.logger.info(
            f"Check-in request received for event {event_id} by user {user_id}"
        )

        EventService.get_owned_event(event_id, user_id)

        if is_legacy_test_code(qr_code):
            current_app.logger.info(f"Using test QR code: {qr_code}")
            registration = RegistrationService.find_or_create_placeholder(qr_code, event_id)
        else:
            registration = QrCodeInterpreter(event_id).resolve(qr_code)

        updated = CheckInService.apply_check_in(registration, event_id)
        current_app.logger.info(f"Successfully checked in registration {updated.id}")
        return updated
