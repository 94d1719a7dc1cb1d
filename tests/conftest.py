import pytest
from flask_jwt_extended import create_access_token
from eventdesk import create_app
from eventdesk.extensions import db
from eventdesk.repositories.event_repository import EventRepository
from eventdesk.repositories.registration_repository import RegistrationRepository

OWNER_ID = 1
OTHER_USER_ID = 2


@pytest.fixture
def app():
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "JWT_SECRET_KEY": "test-secret-key-with-enough-length-for-hs256",
            "RATELIMIT_ENABLED": False,
            "INCLUDE_DEBUG_PAYLOADS": True,
        }
    )
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    def make_headers(user_id=OWNER_ID):
        with app.app_context():
            token = create_access_token(identity=str(user_id))
        return {"Authorization": f"Bearer {token}"}

    return make_headers


@pytest.fixture
def make_event(app):
    def factory(**overrides):
        attrs = {
            "title": "Harvest Festival",
            "capacity": 100,
            "creator_id": OWNER_ID,
        }
        attrs.update(overrides)
        with app.app_context():
            return EventRepository.create_event(attrs).id

    return factory


@pytest.fixture
def make_registration(app):
    counter = {"n": 0}

    def factory(event_id, code=None, **overrides):
        counter["n"] += 1
        attrs = {
            "event_id": event_id,
            "name": f"Attendee {counter['n']}",
            "email": f"attendee{counter['n']}@example.com",
            "participants": 1,
            "attendees": "[]",
        }
        attrs.update(overrides)
        code = code or f"code{counter['n']:04d}"
        with app.app_context():
            return RegistrationRepository.create(attrs, code).to_dict()

    return factory
