"""Support contact messages and outbound email log."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from app.clock import utcnow
from app.database import Base


class ContactMessage(Base):
    """Message submitted through the contact-support form."""

    __tablename__ = "contact_message"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=False)
    message = Column(Text, nullable=False)
    category = Column(String(100), nullable=False, default="general")
    status = Column(String(50), nullable=False, default="open")  # open, answered, closed
    priority = Column(String(20), nullable=False, default="medium")
    user_id = Column(Integer, ForeignKey("user.id"), nullable=True, index=True)
    response_message = Column(Text, nullable=True)
    response_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class EmailLog(Base):
    """Delivery record for every transactional email attempt."""

    __tablename__ = "email_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    to_email = Column(String(255), nullable=False, index=True)
    subject = Column(String(500), nullable=False)
    template = Column(String(100), nullable=False)
    status = Column(String(50), nullable=False, default="pending")  # pending, sent, failed
    provider = Column(String(50), nullable=False, default="sendgrid")
    message_id = Column(String(255), nullable=True)
    error_message = Column(Text, nullable=True)
    sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
