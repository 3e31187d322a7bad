from sqlalchemy import Column, String, JSON, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
from ..core.db import Base

class OutreachSession(Base):
    __tablename__ = "outreach_sessions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String, index=True, nullable=True)
    brief_id = Column(Uuid(as_uuid=True), ForeignKey("briefs.id", ondelete="CASCADE"), index=True, nullable=False)
    session_name = Column(String, nullable=False)
    messages = Column(JSON, nullable=False, default=list)  # [{role, content, draft_type, ...}]
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    brief = relationship("Brief", lazy="joined")
