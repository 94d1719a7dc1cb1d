from datetime import datetime, timezone
import pytest
from eventdesk.exceptions import (
    EventMismatchError,
    InterpretationError,
    InvalidRequestError,
    MissingFieldsError,
    NotFoundError,
    TransitionError,
    UnauthorizedError,
)
from eventdesk.extensions import db
from eventdesk.models import Registration
from eventdesk.repositories.registration_repository import RegistrationRepository
from eventdesk.services.check_in_service import CheckInService, parse_event_id
from eventdesk.services.registration_service import RegistrationService
from tests.conftest import OWNER_ID, OTHER_USER_ID


def utc_naive(value):
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.replace(tzinfo=None)


def test_transition_flips_flag_and_stamps_time(ctx, make_event, make_registration):
    event_id = make_event()
    registration = make_registration(event_id, code="ABCDEF")
    assert registration["checkedIn"] is False
    assert registration["checkedInAt"] is None

    before = datetime.now(timezone.utc)
    updated = RegistrationRepository.set_checked_in("ABCDEF", event_id)

    assert updated.checked_in is True
    assert utc_naive(updated.checked_in_at) >= utc_naive(before)


def test_transition_restamps_on_repeat(ctx, make_event, make_registration):
    event_id = make_event()
    make_registration(event_id, code="ABCDEF")

    first = RegistrationRepository.set_checked_in("ABCDEF").checked_in_at
    second = RegistrationRepository.set_checked_in("ABCDEF").checked_in_at

    assert utc_naive(second) >= utc_naive(first)


def test_transition_is_scoped_to_event(ctx, make_event, make_registration):
    event_id = make_event()
    other_event_id = make_event(title="Other")
    make_registration(event_id, code="ABCDEF")

    assert RegistrationRepository.set_checked_in("ABCDEF", other_event_id) is None
    assert RegistrationRepository.get_by_code("ABCDEF").checked_in is False


def test_transition_fails_when_registration_vanished(ctx, make_event):
    event_id = make_event()
    vanished = Registration(event_id=event_id, qr_code="GONE00")

    with pytest.raises(TransitionError) as excinfo:
        CheckInService.apply_check_in(vanished, event_id)

    assert excinfo.value.reason == "invalid_code"


def test_placeholder_is_created_once(ctx, make_event):
    event_id = make_event()

    first = RegistrationService.find_or_create_placeholder("REG-EVENT1-001", event_id)
    second = RegistrationService.find_or_create_placeholder("REG-EVENT1-001", event_id)

    assert first.id == second.id
    assert Registration.query.filter_by(qr_code="REG-EVENT1-001").count() == 1
    assert first.name == "Test User (REG-EVENT1-001)"
    assert first.email == "test@example.gov"
    assert first.phone == "555-555-5555"
    assert first.participants == 1
    assert first.event_id == event_id


def test_placeholder_from_other_event_is_rejected(ctx, make_event):
    event_id = make_event()
    other_event_id = make_event(title="Other")
    RegistrationService.find_or_create_placeholder("QRCODE-TEST-1", event_id)

    with pytest.raises(EventMismatchError):
        RegistrationService.find_or_create_placeholder("QRCODE-TEST-1", other_event_id)


def test_check_in_marks_registration(ctx, make_event, make_registration):
    event_id = make_event()
    make_registration(event_id, code="ABCDEF")

    registration = CheckInService.check_in(
        {"qrCode": "ABCDEF", "eventId": event_id}, str(OWNER_ID)
    )

    assert registration.checked_in is True
    assert registration.checked_in_at is not None


def test_check_in_accepts_string_event_id(ctx, make_event, make_registration):
    event_id = make_event()
    make_registration(event_id, code="ABCDEF")

    registration = CheckInService.check_in(
        {"qrCode": "ABCDEF", "eventId": str(event_id)}, str(OWNER_ID)
    )

    assert registration.checked_in is True


def test_check_in_with_legacy_code_creates_and_checks_in(ctx, make_event):
    event_id = make_event()

    registration = CheckInService.check_in(
        {"qrCode": "EVENT1-TICKET-9", "eventId": event_id}, str(OWNER_ID)
    )

    assert registration.qr_code == "EVENT1-TICKET-9"
    assert registration.checked_in is True
    assert registration.event_id == event_id


def test_check_in_requires_both_fields(ctx):
    with pytest.raises(MissingFieldsError) as excinfo:
        CheckInService.check_in({"qrCode": ""}, str(OWNER_ID))

    assert excinfo.value.fields == ["qrCode", "eventId"]


def test_check_in_unknown_event(ctx):
    with pytest.raises(NotFoundError):
        CheckInService.check_in({"qrCode": "ABCDEF", "eventId": 999}, str(OWNER_ID))


def test_check_in_by_non_owner(ctx, make_event, make_registration):
    event_id = make_event()
    make_registration(event_id, code="ABCDEF")

    with pytest.raises(UnauthorizedError):
        CheckInService.check_in(
            {"qrCode": "ABCDEF", "eventId": event_id}, str(OTHER_USER_ID)
        )

    db.session.expire_all()
    assert RegistrationRepository.get_by_code("ABCDEF").checked_in is False


def test_check_in_unknown_code_leaves_store_untouched(ctx, make_event):
    event_id = make_event()

    with pytest.raises(InterpretationError):
        CheckInService.check_in({"qrCode": "NOPE", "eventId": event_id}, str(OWNER_ID))

    assert Registration.query.count() == 0


@pytest.mark.parametrize("value, expected", [(7, 7), ("7", 7), (" 12 ", 12)])
def test_parse_event_id(value, expected):
    assert parse_event_id(value) == expected


@pytest.mark.parametrize("value", [True, "seven", "7.5", 7.0, None, [7]])
def test_parse_event_id_rejects_non_integers(value):
    with pytest.raises(InvalidRequestError):
        parse_event_id(value)


def test_check_in_rejects_non_string_code(ctx, make_event):
    event_id = make_event()

    with pytest.raises(InvalidRequestError) as excinfo:
        CheckInService.check_in({"qrCode": ["ABCDEF"], "eventId": event_id}, str(OWNER_ID))

    assert excinfo.value.reason == "invalid_request"
