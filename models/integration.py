from extensions import db
from models.common import generate_id, utcnow


class Integration(db.Model):
    __tablename__ = 'integrations'

    writable_columns = ("twilio_phone_number", "whatsapp_business_id", "updated_at")

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    # at most one integration row per user
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), unique=True, nullable=False)
    twilio_phone_number = db.Column(db.String(32))
    whatsapp_business_id = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "twilio_phone_number": self.twilio_phone_number,
            "whatsapp_business_id": self.whatsapp_business_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None
        }
