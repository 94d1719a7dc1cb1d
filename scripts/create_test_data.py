import sys
import os

sys.path.append(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)  # relative imports

from datetime import datetime, timedelta, timezone
from flask_jwt_extended import create_access_token
from eventdesk import create_app
from eventdesk.extensions import db
from eventdesk.repositories.event_repository import EventRepository
from eventdesk.services.registration_service import RegistrationService

ORGANIZER_ID = int(os.getenv("DEMO_ORGANIZER_ID", 1))

app = create_app()

# Print the database URI the app is configured to use
with app.app_context():
    print(f"INFO: Connecting to database: {app.config['SQLALCHEMY_DATABASE_URI']}")


def create_test_event():
    """Create an event owned by the demo organizer"""
    event = EventRepository.create_event(
        {
            "title": "Community Cleanup Day",
            "description": "Test event for the check-in scanner",
            "location": "City Park Pavilion",
            "starts_at": datetime.now(timezone.utc) + timedelta(days=7),
            "capacity": 50,
            "needs_waiver": True,
            "waiver": "I accept the risks of participating.",
            "creator_id": ORGANIZER_ID,
        }
    )
    print(f"Created test event {event.id}")
    return event


def create_test_registrations(event):
    """Register a handful of attendees, including a family with a minor"""
    registrants = [
        {"name": "Alice Moreno", "email": "alice@test.com", "participants": 1},
        {"name": "Ben Okafor", "email": "ben@test.com", "phone": "555-0101", "participants": 1},
        {
            "name": "Carla Nguyen",
            "email": "carla@test.com",
            "participants": 2,
            "waiverSigned": True,
            "attendees": [
                {"name": "Carla Nguyen", "type": "adult", "isPrimary": True, "waiverSigned": True},
                {"name": "Dev Nguyen", "type": "minor", "isPrimary": False, "waiverSigned": True},
            ],
        },
    ]
    registrations = []
    for data in registrants:
        result = RegistrationService.create_registration(event, data)
        if isinstance(result, dict):
            print(f"Could not register {data['email']}: {result['error']}")
            continue
        registrations.append(result)
        print(f"Registered {result.name} with code {result.qr_code}")
    return registrations


if __name__ == "__main__":
    with app.app_context():
        db.create_all()
        event = create_test_event()
        create_test_registrations(event)
        token = create_access_token(identity=str(ORGANIZER_ID))
        print(f"\nOrganizer token (user {ORGANIZER_ID}):\n{token}")
        print(
            f"\nTry scanning a code, or a demo code such as REG-EVENT{event.id}-001, "
            f"with eventId={event.id}"
        )
