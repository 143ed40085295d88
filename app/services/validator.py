from pydantic import ValidationError

from app.core.errors import ErrorCode, raise_error
from app.models.subdomain_schema import AttachRequest, SUPPORTED_RECORD_TYPES
from app.utils.record_utils import ADDRESS_RECORD_VERSIONS, is_private_ip, matches_record_family


def parse_attach_request(body) -> AttachRequest:
    try:
        return AttachRequest.model_validate(body)
    except ValidationError:
        raise_error(ErrorCode.INVALID_DATA, status_code=400)


def validate_record_type(record_type: str):
    if record_type not in SUPPORTED_RECORD_TYPES:
        raise_error(ErrorCode.UNSUPPORTED_RECORD_TYPE, status_code=400)


def validate_record_content(record_type: str, content: str):
    # TXT content is passed through untouched
    if record_type not in ADDRESS_RECORD_VERSIONS:
        return
    if not is_private_ip(content):
        raise_error(ErrorCode.PUBLIC_ADDRESS, status_code=400)
    if not matches_record_family(record_type, content):
        raise_error(ErrorCode.ADDRESS_FAMILY_MISMATCH, status_code=400)
