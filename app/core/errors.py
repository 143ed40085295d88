from fastapi import HTTPException

class ErrorCode:
    PERMISSION_DENIED = "Permission denied"
    INVALID_DATA = "Invalid data"
    UNSUPPORTED_RECORD_TYPE = "Only A, AAAA and TXT records are supported"
    PUBLIC_ADDRESS = "Only private IP addresses are supported."
    ADDRESS_FAMILY_MISMATCH = "A records need an IPv4 address, AAAA records an IPv6 address"
    MISSING_SUBDOMAIN = "Missing subdomain"
    SUBDOMAIN_NOT_FOUND = "Subdomain not found"
    DNS_RECORD_FAILED = "Error adding DNS record"
    AUTH_UNAVAILABLE = "Authentication service unavailable"

def raise_error(detail: str, status_code: int = 400):
    raise HTTPException(status_code=status_code, detail=detail)
