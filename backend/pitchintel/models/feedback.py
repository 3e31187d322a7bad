from sqlalchemy import Column, String, DateTime, Uuid
from datetime import datetime
import uuid
from ..core.db import Base

class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    type = Column(String, nullable=False)  # "like" | "dislike"
    page = Column(String, nullable=True)   # where the prompt was shown, e.g. "landing"
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
