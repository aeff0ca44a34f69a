"""
DbLead model — one row per collected lead, written by the collection job.

The console only ever reads rows and updates ``status``.
"""
import uuid

from sqlalchemy import Column, Text, DateTime, Index
from sqlalchemy.sql import func

from mission_control.database import Base


class DbLead(Base):
    __tablename__ = 'leads'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    platform = Column(Text, nullable=False)
    content = Column(Text, default='')
    url = Column(Text, default='')
    score = Column(Text, default='')
    intent = Column(Text, default='')
    context = Column(Text, default='')
    outreach = Column(Text, default='')
    status = Column(Text, nullable=False, default='new')
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index('ix_leads_status', 'status'),
        Index('ix_leads_created_at', 'created_at'),
    )

    def to_record(self):
        return {
            'id': self.id,
            'platform': self.platform,
            'content': self.content,
            'url': self.url,
            'score': self.score,
            'intent': self.intent,
            'context': self.context,
            'outreach': self.outreach,
            'status': self.status,
            'created_at': self.created_at,
        }
