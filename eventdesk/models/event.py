from eventdesk.extensions import db


class Event(db.Model):
    __tablename__ = "events"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    location = db.Column(db.String(255), nullable=True)
    starts_at = db.Column(db.TIMESTAMP(timezone=True), nullable=True)
    capacity = db.Column(db.Integer, nullable=False)
    needs_waiver = db.Column(db.Boolean, nullable=False, default=False)
    waiver = db.Column(db.Text, nullable=True)
    creator_id = db.Column(db.Integer, nullable=False, index=True)
    created_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now()
    )
    updated_at = db.Column(
        db.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    registrations = db.relationship(
        "Registration",
        backref="event",
        lazy=True,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def is_owned_by(self, user_id) -> bool:
        return str(self.creator_id) == str(user_id)

    def spots_left(self) -> int:
        from eventdesk.repositories.registration_repository import (
            RegistrationRepository,
        )

        taken = RegistrationRepository.sum_participants(self.id)
        return max(self.capacity - taken, 0)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "startsAt": self.starts_at.isoformat() if self.starts_at else None,
            "capacity": self.capacity,
            "spotsLeft": self.spots_left(),
            "needsWaiver": self.needs_waiver,
            "waiver": self.waiver,
            "createdBy": self.creator_id,
        }

    def __repr__(self):
        return (
            f"Event("
            f"id={self.id}, "
            f"title='{self.title}', "
            f"capacity={self.capacity}, "
            f"creator_id={self.creator_id}"
            f")"
        )
