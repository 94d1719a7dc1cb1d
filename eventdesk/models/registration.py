from eventdesk.extensions import db


class Registration(db.Model):
    __tablename__ = "registrations"

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(
        db.Integer,
        db.ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(50), nullable=True)
    participants = db.Column(db.Integer, nullable=False, default=1)
    # JSON-encoded list of attendee dicts (name, type, isPrimary, waiverSigned)
    attendees = db.Column(db.Text, nullable=False, default="[]")
    waiver_signed = db.Column(db.Boolean, nullable=False, default=False)
    waiver_signed_at = db.Column(db.TIMESTAMP(timezone=True), nullable=True)
    checked_in = db.Column(db.Boolean, nullable=False, default=False)
    checked_in_at = db.Column(db.TIMESTAMP(timezone=True), nullable=True)
    qr_code = db.Column(db.String(255), unique=True, nullable=False)
    created_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now()
    )

    def to_dict(self):
        return {
            "id": self.id,
            "eventId": self.event_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "participants": self.participants,
            "attendees": self.attendees,
            "waiverSigned": self.waiver_signed,
            "waiverSignedAt": (
                self.waiver_signed_at.isoformat() if self.waiver_signed_at else None
            ),
            "checkedIn": self.checked_in,
            "checkedInAt": (
                self.checked_in_at.isoformat() if self.checked_in_at else None
            ),
            "qrCode": self.qr_code,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return (
            f"Registration("
            f"id={self.id}, "
            f"event_id={self.event_id}, "
            f"email='{self.email}', "
            f"checked_in={self.checked_in}, "
            f"checked_in_at={self.checked_in_at}"
            f")"
        )
