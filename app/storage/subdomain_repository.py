# storage/subdomain_repository.py
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.subdomain_db import Subdomain

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the subdomains table could not be read or written."""


async def insert_subdomain(db: AsyncSession, domain: str, secret: str) -> Subdomain:
    record = Subdomain(domain=domain, secret=secret)
    try:
        db.add(record)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        message = str(getattr(exc, "orig", None) or exc)
        logger.error(f"Insert of subdomain {domain} failed: {message}")
        raise StorageError(message) from exc
    return record


async def fetch_by_domain(db: AsyncSession, domain: str) -> Subdomain | None:
    try:
        result = await db.execute(select(Subdomain).where(Subdomain.domain == domain))
    except SQLAlchemyError as exc:
        message = str(getattr(exc, "orig", None) or exc)
        logger.error(f"Lookup of subdomain {domain} failed: {message}")
        raise StorageError(message) from exc
    return result.scalar_one_or_none()
