from sqlalchemy import Column, String, Text, JSON, DateTime, Uuid
from datetime import datetime
import uuid
from ..core.db import Base

class Brief(Base):
    __tablename__ = "briefs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String, index=True, nullable=True)  # null for guest briefs
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # caller-supplied input
    company_name = Column(String, nullable=False)
    website = Column(String, nullable=True)
    user_intent = Column(Text, nullable=False)
    user_company = Column(JSON, nullable=True)  # {name, industry, product, value_proposition, website, goals}

    # derived narrative
    summary = Column(Text, nullable=False, default="")
    pitch_angle = Column(Text, nullable=False, default="")
    subject_line = Column(String, nullable=False, default="")
    what_not_to_pitch = Column(Text, nullable=False, default="")
    signal_tag = Column(String, nullable=False, default="")
    hiring_trends = Column(String, nullable=True)
    news_trends = Column(String, nullable=True)
    company_logo = Column(String, nullable=True)
    outreach_copy = Column(Text, nullable=True)

    # collected signals
    news = Column(JSON, nullable=False, default=list)
    job_signals = Column(JSON, nullable=False, default=list)
    tech_stack = Column(JSON, nullable=False, default=list)        # List[str] of names
    tech_stack_data = Column(JSON, nullable=False, default=list)   # List[TechStackItem]
    tone_insights = Column(JSON, nullable=True)
    intelligence_sources = Column(JSON, nullable=True)
