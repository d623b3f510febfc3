"""
System smoke test: full API flow in-process with SQLite.
Verifies health, block submission, receipts and the read-only registry views.
Uses a temp file DB so all connections share the same database.
"""

import asyncio
import os
import tempfile
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

# Use file-based SQLite so all connections share the same DB (in-memory is per-connection)
_tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
_tmp.close()
TEST_DB_PATH = _tmp.name
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
# Force config reload so app uses test DB
from priority_credit.config import Settings, get_settings
get_settings.cache_clear()

from priority_credit.api.middleware import rate_limit
from priority_credit.chain.accounts import devnet_accounts
from priority_credit.kernel.models import Base
from priority_credit.main import app
from priority_credit.database import get_db


TEST_ENGINE = create_async_engine(
    f"sqlite+aiosqlite:///{TEST_DB_PATH}",
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=NullPool,
)
TEST_SESSION_MAKER = async_sessionmaker(
    TEST_ENGINE,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

ACCOUNTS = {name: account.address for name, account in devnet_accounts().items()}
DEPLOYER = ACCOUNTS["deployer"]
BLOCKS = "/api/v1/blocks"


async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TEST_SESSION_MAKER() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def _fresh_schema() -> None:
    async with TEST_ENGINE.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest_asyncio.fixture
async def client():
    """Async client on a fresh schema, started through the app lifespan (genesis included)."""
    await _fresh_schema()

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with app.router.lifespan_context(app):
            async with AsyncClient(
                transport=ASGITransport(app=app),
                base_url="http://test",
            ) as ac:
                yield ac
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture
async def uninitialized_client():
    """Async client on a fresh schema whose startup never ran."""
    await _fresh_schema()

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_db, None)


def call(function: str, args: list, sender: str) -> dict:
    return {"function": function, "args": args, "sender": sender}


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    """Health endpoint responds."""
    r = await client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert "version" in data


@pytest.mark.asyncio
async def test_genesis_administrator(client: AsyncClient):
    """A fresh registry reports the deployer as administrator."""
    r = await client.get("/api/v1/administrator")
    assert r.status_code == 200
    assert r.json()["administrator"] == DEPLOYER

    r = await client.get(f"/api/v1/roles/{DEPLOYER}")
    assert r.status_code == 200
    assert r.json()["role"] == "administrator"


@pytest.mark.asyncio
async def test_full_flow(client: AsyncClient):
    """Appoint validator -> register developer -> read back -> fetch stored block."""
    validator = ACCOUNTS["wallet_1"]
    developer = ACCOUNTS["wallet_2"]

    r = await client.post(BLOCKS, json={"transactions": [
        call("register-validator", [validator], DEPLOYER),
        call("register-project-developer", [developer, "Renewable Energy Solutions"], validator),
        call("register-validator", [developer], validator),
    ]})
    assert r.status_code == 201, r.text
    block = r.json()
    assert block["height"] == 1
    assert block["receipt_count"] == 3
    ok_flags = [receipt["ok"] for receipt in block["receipts"]]
    assert ok_flags == [True, True, False]
    assert block["receipts"][2]["error"] == {"kind": "unauthorized", "code": 100}
    assert block["receipts"][1]["events"][0]["type"] == "developer.registered"

    r = await client.get(f"/api/v1/validators/{validator}")
    assert r.status_code == 200
    assert r.json()["is_active"] is True

    r = await client.get(f"/api/v1/developers/{developer}")
    assert r.status_code == 200
    assert r.json()["project_name"] == "Renewable Energy Solutions"

    r = await client.get(f"/api/v1/developers/{developer}/validator")
    assert r.json() == {"developer": developer, "validator": validator}

    r = await client.get(f"/api/v1/validators/{validator}/developers")
    assert [d["principal"] for d in r.json()] == [developer]

    r = await client.get(f"{BLOCKS}/1")
    assert r.status_code == 200
    assert [receipt["ok"] for receipt in r.json()["receipts"]] == ok_flags


@pytest.mark.asyncio
async def test_admin_transfer_and_revocation(client: AsyncClient):
    """New administrator revokes a validator; the old one is refused."""
    new_admin = ACCOUNTS["wallet_3"]
    validator = ACCOUNTS["wallet_4"]

    r = await client.post(BLOCKS, json={"transactions": [
        call("register-validator", [validator], DEPLOYER),
        call("transfer-administration", [new_admin], DEPLOYER),
        call("revoke-validator", [validator], DEPLOYER),
        call("revoke-validator", [validator], new_admin),
    ]})
    assert r.status_code == 201, r.text
    assert [receipt["ok"] for receipt in r.json()["receipts"]] == [True, True, False, True]

    r = await client.get("/api/v1/administrator")
    assert r.json()["administrator"] == new_admin

    r = await client.get(f"/api/v1/validators/{validator}")
    assert r.json()["status"] == "revoked"
    assert r.json()["is_active"] is False

    r = await client.get(f"/api/v1/roles/{validator}")
    assert r.json() == {"principal": validator, "role": "none", "roles": []}


@pytest.mark.asyncio
async def test_not_found_and_validation(client: AsyncClient):
    """Unknown records are 404 with the standard error body; malformed requests are 422."""
    stranger = ACCOUNTS["wallet_5"]

    r = await client.get(f"/api/v1/developers/{stranger}")
    assert r.status_code == 404
    assert r.json() == {"detail": "Developer not found"}

    r = await client.get(f"/api/v1/validators/{stranger}/developers")
    assert r.status_code == 404

    r = await client.get(f"{BLOCKS}/99")
    assert r.status_code == 404
    assert r.json() == {"detail": "Block not found"}

    r = await client.get("/api/v1/roles/not-a-principal")
    assert r.status_code == 422

    r = await client.post(BLOCKS, json={"transactions": []})
    assert r.status_code == 422
    assert "X-Request-ID" in r.headers


@pytest.mark.asyncio
async def test_malformed_call_yields_receipt(client: AsyncClient):
    """Contract-level input errors, a malformed sender included, are receipts, not HTTP errors."""
    stranger = ACCOUNTS["wallet_5"]

    r = await client.post(BLOCKS, json={"transactions": [
        call("register-validator", ["bogus"], DEPLOYER),
        call("no-such-function", [], DEPLOYER),
        call("register-validator", [stranger], "nobody"),
    ]})
    assert r.status_code == 201, r.text
    receipts = r.json()["receipts"]
    errors = [receipt["error"]["kind"] for receipt in receipts]
    assert errors == ["invalid_input", "not_found", "invalid_input"]
    assert receipts[2]["sender"] == "nobody"

    r = await client.get(f"/api/v1/validators/{stranger}")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_concurrent_first_reads(client: AsyncClient):
    """Simultaneous reads right after startup all succeed."""
    responses = await asyncio.gather(*[
        client.get("/api/v1/administrator") for _ in range(6)
    ])

    assert [r.status_code for r in responses] == [200] * 6
    assert {r.json()["administrator"] for r in responses} == {DEPLOYER}


@pytest.mark.asyncio
async def test_reads_before_startup(uninitialized_client: AsyncClient):
    """Reads never run genesis; a block submission still can."""
    responses = await asyncio.gather(*[
        uninitialized_client.get("/api/v1/administrator") for _ in range(4)
    ])
    assert [r.status_code for r in responses] == [503] * 4
    assert responses[0].json() == {"detail": "Registry not initialized", "request_id": responses[0].headers["X-Request-ID"]}

    r = await uninitialized_client.post(BLOCKS, json={"transactions": [
        call("register-validator", [ACCOUNTS["wallet_1"]], DEPLOYER),
    ]})
    assert r.status_code == 201, r.text
    assert r.json()["receipts"][0]["ok"] is True

    r = await uninitialized_client.get("/api/v1/administrator")
    assert r.status_code == 200
    assert r.json()["administrator"] == DEPLOYER


@pytest.mark.asyncio
async def test_block_submission_rate_limit(client: AsyncClient, monkeypatch):
    """Over the per-IP limit a whole block is refused with 429; reads are not limited."""
    limited = Settings(_env_file=None, rate_limit_enabled=True, rate_limit_blocks_per_minute=1)
    monkeypatch.setattr(rate_limit, "get_settings", lambda: limited)
    monkeypatch.setattr(rate_limit, "_store", None)

    first = await client.post(BLOCKS, json={"transactions": [
        call("register-validator", [ACCOUNTS["wallet_6"]], DEPLOYER),
    ]})
    second = await client.post(BLOCKS, json={"transactions": [
        call("register-validator", [ACCOUNTS["wallet_7"]], DEPLOYER),
    ]})

    assert first.status_code == 201, first.text
    assert second.status_code == 429
    assert (await client.get(f"{BLOCKS}/2")).status_code == 404
    assert (await client.get(f"/api/v1/validators/{ACCOUNTS['wallet_7']}")).status_code == 404
