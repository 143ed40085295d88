import hmac
import logging
import secrets

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.errors import ErrorCode, raise_error
from app.models.response_schema import AttachResponse, IssueResponse
from app.models.subdomain_db import DOMAIN_LENGTH, SECRET_LENGTH
from app.models.subdomain_schema import AttachRequest
from app.services.dns_provider import DNSProvider, DNSRecordCreated, DNSRecordFailed
from app.services.validator import validate_record_content, validate_record_type
from app.storage import subdomain_repository as repo
from app.storage.subdomain_repository import StorageError
from app.utils.hostname_utils import last_label

logger = logging.getLogger(__name__)


def generate_domain() -> str:
    return secrets.token_hex(DOMAIN_LENGTH // 2)


def generate_secret() -> str:
    return secrets.token_hex(SECRET_LENGTH // 2)


async def issue_subdomain(db: AsyncSession) -> IssueResponse:
    """Creates a new subdomain and returns it with its secret. The secret is never shown again."""
    domain = generate_domain()
    secret = generate_secret()
    try:
        await repo.insert_subdomain(db, domain, secret)
    except StorageError as exc:
        raise_error(str(exc), status_code=500)

    logger.info(f"Issued subdomain {domain}")
    return IssueResponse(domain=domain, secret=secret)


async def attach_record(
    db: AsyncSession,
    dns: DNSProvider,
    settings: Settings,
    request: AttachRequest,
) -> AttachResponse:
    """
    Checks the record and the caller's secret, then asks the DNS provider to
    create the record under the stored domain. Nothing is written locally.
    """
    validate_record_type(request.record_type)
    validate_record_content(request.record_type, request.content)

    if request.subdomain is None:
        raise_error(ErrorCode.MISSING_SUBDOMAIN, status_code=400)

    try:
        record = await repo.fetch_by_domain(db, last_label(request.subdomain))
    except StorageError as exc:
        raise_error(str(exc), status_code=500)

    if record is None:
        if settings.HIDE_SUBDOMAIN_EXISTENCE:
            raise_error(ErrorCode.PERMISSION_DENIED, status_code=403)
        raise_error(ErrorCode.SUBDOMAIN_NOT_FOUND, status_code=404)

    supplied = request.secret or ""
    if not supplied or not hmac.compare_digest(record.secret.encode(), supplied.encode()):
        raise_error(ErrorCode.PERMISSION_DENIED, status_code=403)

    result = await dns.create_record(
        zone_id=settings.CLOUDFLARE_ZONE_ID,
        record_type=request.record_type,
        name=record.domain,
        content=request.content,
        ttl=settings.DNS_RECORD_TTL,
        proxied=settings.DNS_RECORD_PROXIED,
    )

    match result:
        case DNSRecordCreated():
            logger.info(f"{request.record_type} record added for {record.domain}")
            return AttachResponse(subdomain=record.domain)
        case DNSRecordFailed(message=message):
            logger.error(f"DNS record for {record.domain} not created: {message}")
            raise_error(ErrorCode.DNS_RECORD_FAILED, status_code=502)
