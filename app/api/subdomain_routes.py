import json
from typing import Union

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.session import get_session_user, require_confirmed
from app.core.config import Settings, get_settings
from app.core.errors import ErrorCode, raise_error
from app.models.response_schema import AttachResponse, ErrorResponse, IssueResponse
from app.models.user_schema import SessionUser
from app.services.dns_provider import DNSProvider, get_dns_provider
from app.services.provisioning import attach_record, issue_subdomain
from app.services.validator import parse_attach_request
from app.storage.db import get_db

router = APIRouter()

ALLOWED_METHODS = ["GET", "POST", "PUT"]

ERROR_RESPONSES = {
    code: {"model": ErrorResponse}
    for code in (400, 401, 403, 404, 405, 500, 502, 503)
}


async def read_json_body(request: Request):
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        raise_error(ErrorCode.INVALID_DATA, status_code=400)


@router.api_route(
    "/configure-subdomain",
    methods=ALLOWED_METHODS,
    response_model=Union[IssueResponse, AttachResponse],
    responses=ERROR_RESPONSES,
)
async def configure_subdomain(
    request: Request,
    user: SessionUser = Depends(get_session_user),
    db: AsyncSession = Depends(get_db),
    dns: DNSProvider = Depends(get_dns_provider),
    settings: Settings = Depends(get_settings),
):
    """
    GET issues a fresh subdomain and its secret.
    POST/PUT attach an A, AAAA or TXT record to a subdomain the caller holds the secret for.
    """
    if request.method == "GET":
        require_confirmed(user)
        return await issue_subdomain(db)

    if settings.REQUIRE_CONFIRMED_FOR_ATTACH:
        require_confirmed(user)

    body = parse_attach_request(await read_json_body(request))
    return await attach_record(db, dns, settings, body)
