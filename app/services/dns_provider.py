import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Union

import httpx
from fastapi import Depends

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DNSRecordCreated:
    record_id: Optional[str]
    name: str


@dataclass(frozen=True)
class DNSRecordFailed:
    message: str


DNSResult = Union[DNSRecordCreated, DNSRecordFailed]


class DNSProvider(Protocol):
    """Creates records in the upstream zone. Failures come back as DNSRecordFailed, never raised."""

    async def create_record(
        self,
        zone_id: str,
        record_type: str,
        name: str,
        content: str,
        ttl: int,
        proxied: bool,
    ) -> DNSResult:
        ...


def _error_messages(payload) -> str:
    if not isinstance(payload, dict):
        return ""
    errors = payload.get("errors") or []
    return "; ".join(
        str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors
    )


class CloudflareDNSProvider:
    def __init__(self, token: str, api_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.transport = transport

    async def create_record(self, zone_id, record_type, name, content, ttl, proxied) -> DNSResult:
        url = f"{self.api_url}/zones/{zone_id}/dns_records"
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
        record_data = {
            "type": record_type,
            "name": name,
            "content": content,
            "ttl": ttl,
            "proxied": proxied,
        }

        logger.info(f"Creating {record_type} record for {name}")
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(url, headers=headers, json=record_data)
        except httpx.HTTPError as exc:
            return DNSRecordFailed(message=f"Cloudflare request failed: {exc}")

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if (
            response.status_code not in (200, 201)
            or not isinstance(payload, dict)
            or not payload.get("success", False)
        ):
            detail = _error_messages(payload) or response.text
            return DNSRecordFailed(message=f"Cloudflare API error: {response.status_code} - {detail}")

        result = payload.get("result")
        if not isinstance(result, dict):
            result = {}
        return DNSRecordCreated(record_id=result.get("id"), name=result.get("name", name))


def get_dns_provider(settings: Settings = Depends(get_settings)) -> DNSProvider:
    return CloudflareDNSProvider(token=settings.CLOUDFLARE_TOKEN, api_url=settings.CLOUDFLARE_API_URL)
