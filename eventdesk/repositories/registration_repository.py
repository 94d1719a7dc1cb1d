from datetime import datetime, timezone
from typing import List, Optional
from eventdesk.extensions import db
from eventdesk.models import Registration


class RegistrationRepository:
    @staticmethod
    def get_by_code(code: str) -> Optional[Registration]:
        return Registration.query.filter_by(qr_code=code).first()

    @staticmethod
    def get_all_for_event(event_id: int) -> List[Registration]:
        """All registrations of an event, oldest first."""
        return (
            Registration.query.filter_by(event_id=event_id)
            .order_by(Registration.id.asc())
            .all()
        )

    @staticmethod
    def sum_participants(event_id: int) -> int:
        total = (
            db.session.query(db.func.coalesce(db.func.sum(Registration.participants), 0))
            .filter(Registration.event_id == event_id)
            .scalar()
        )
        return int(total or 0)

    @staticmethod
    def create(attrs, code: str) -> Registration:
        registration = Registration(**attrs, qr_code=code)
        db.session.add(registration)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return registration

    @staticmethod
    def set_checked_in(code: str, event_id: Optional[int] = None) -> Optional[Registration]:
        """Mark the registration with this code as checked in, stamped now.

        Issued as a single keyed UPDATE, optionally scoped to ``event_id``.
        The previous state is not consulted, so a repeat call re-stamps
        ``checked_in_at``. Returns None when no row matched.
        """
        query = Registration.query.filter(Registration.qr_code == code)
        if event_id is not None:
            query = query.filter(Registration.event_id == event_id)

        try:
            updated = query.update(
                {
                    Registration.checked_in: True,
                    Registration.checked_in_at: datetime.now(timezone.utc),
                },
                synchronize_session=False,
            )
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        if not updated:
            return None
        return Registration.query.filter_by(qr_code=code).first()
