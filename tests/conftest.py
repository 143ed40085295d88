# tests/conftest.py
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("CLOUDFLARE_TOKEN", "cf-test-token")
os.environ.setdefault("CLOUDFLARE_ZONE_ID", "test-zone")
os.environ.setdefault("AUTH_URL", "http://auth.test")
os.environ.setdefault("AUTH_API_KEY", "anon-key")
os.environ.setdefault("SESSION_CACHE_TTL", "0")

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.main import app
from app.models.subdomain_db import Base
from app.models.user_schema import SessionUser
from app.services.dns_provider import DNSRecordCreated, get_dns_provider
from app.services.identity import get_identity_provider
from app.storage.db import get_db

CONFIRMED = {"Authorization": "Bearer confirmed-token"}
UNCONFIRMED = {"Authorization": "Bearer unconfirmed-token"}


class FakeDNSProvider:
    def __init__(self):
        self.calls = []
        self.result = None

    async def create_record(self, zone_id, record_type, name, content, ttl, proxied):
        self.calls.append({
            "zone_id": zone_id,
            "type": record_type,
            "name": name,
            "content": content,
            "ttl": ttl,
            "proxied": proxied,
        })
        return self.result or DNSRecordCreated(record_id=f"rec-{len(self.calls)}", name=name)


class FakeIdentityProvider:
    users = {
        "confirmed-token": SessionUser(
            id="user-1",
            email="one@example.com",
            confirmed_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ),
        "unconfirmed-token": SessionUser(id="user-2", email="two@example.com"),
    }

    async def get_user(self, token):
        return self.users.get(token)


@pytest.fixture(scope="function")
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'subdomains.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture(scope="function")
def db_opened():
    return []


# Override DB dependency
@pytest.fixture(scope="function")
def override_get_db(session_factory, db_opened):
    async def _get_db():
        db_opened.append(True)
        async with session_factory() as session:
            yield session
    app.dependency_overrides[get_db] = _get_db


@pytest.fixture(scope="function")
def dns():
    provider = FakeDNSProvider()
    app.dependency_overrides[get_dns_provider] = lambda: provider
    return provider


# Return isolated AsyncClient
@pytest.fixture(scope="function")
async def client(override_get_db, dns):
    app.dependency_overrides[get_identity_provider] = FakeIdentityProvider
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def issued(client):
    response = await client.get("/api/configure-subdomain", headers=CONFIRMED)
    assert response.status_code == 200
    return response.json()
