from extensions import db
from models.common import generate_id, utcnow


class CallLog(db.Model):
    __tablename__ = 'call_logs'

    writable_columns = ("call_date", "call_time", "duration", "summary")

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    call_date = db.Column(db.Date, nullable=False)
    call_time = db.Column(db.Time, nullable=False)
    duration = db.Column(db.Integer, nullable=True)  # seconds
    summary = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "call_date": self.call_date.isoformat(),
            "call_time": self.call_time.isoformat(),
            "duration": self.duration,
            "summary": self.summary,
            "created_at": self.created_at.isoformat() if self.created_at else None
        }
