import uuid
from datetime import datetime, timezone


def generate_id():
    return str(uuid.uuid4())


def utcnow():
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
