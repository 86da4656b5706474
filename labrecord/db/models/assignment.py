from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, JSON
from sqlalchemy.orm import relationship
from labrecord.db.base import Base

class Assignment(Base):
    """A published programming exercise ("program" in the student UI)."""

    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="active")
    classroom_id = Column(Integer, nullable=True, index=True)
    teacher_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    # difficulty, input/output format, constraints, samples
    details = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    teacher = relationship("User", back_populates="assignments")
