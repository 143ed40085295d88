from sqlalchemy import Column, String, DateTime, Integer
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone

Base = declarative_base()

DOMAIN_LENGTH = 8
SECRET_LENGTH = 128

def _utcnow():
    return datetime.now(timezone.utc)

class Subdomain(Base):
    __tablename__ = "subdomains"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # The unique constraint is the only guard against two issues drawing the same label
    domain = Column(String(DOMAIN_LENGTH), nullable=False, unique=True, index=True)
    secret = Column(String(SECRET_LENGTH), nullable=False)
    timestamp_created = Column(DateTime(timezone=True), default=_utcnow)
