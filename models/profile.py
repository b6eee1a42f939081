from sqlalchemy.orm import validates
from extensions import db
from models.common import generate_id, utcnow


class Profile(db.Model):
    __tablename__ = 'profiles'

    # Columns the data service may set on insert/update
    writable_columns = (
        "company_name", "niche", "description", "website", "user_type",
        "trial_start", "onboarding_completed", "updated_at",
    )

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), unique=True, nullable=False)
    company_name = db.Column(db.String(200))
    niche = db.Column(db.String(100))  # e.g. 'dental-clinic'
    description = db.Column(db.Text)
    website = db.Column(db.String(255))
    user_type = db.Column(db.String(50))
    trial_start = db.Column(db.DateTime)
    onboarding_completed = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow)

    @validates('trial_start')
    def validate_trial_start(self, key, value):
        if self.trial_start is not None and value != self.trial_start:
            raise ValueError("trial_start cannot be changed once set")
        return value

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "company_name": self.company_name,
            "niche": self.niche,
            "description": self.description,
            "website": self.website,
            "user_type": self.user_type,
            "trial_start": self.trial_start.isoformat() if self.trial_start else None,
            "onboarding_completed": self.onboarding_completed,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None
        }
