from flask import current_app
from eventdesk.repositories.event_repository import EventRepository
from eventdesk.exceptions import NotFoundError, UnauthorizedError
from eventdesk.models import Event


class EventService:
    @staticmethod
    def get_owned_event(event_id: int, user_id) -> Event:
        """Load an event the caller created.

        Raises NotFoundError for unknown ids and UnauthorizedError when the
        caller is not the event's creator.
        """
        event = EventRepository.get_event(event_id)
        if not event:
            current_app.logger.info(f"Event {event_id} not found")
            raise NotFoundError("Event not found")
        if not event.is_owned_by(user_id):
            current_app.logger.info(f"User {user_id} not authorized for event {event_id}")
            raise UnauthorizedError()
        return event
