"""
Pytest fixtures for registry tests.
"""

from typing import AsyncGenerator, Dict

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from priority_credit.chain.accounts import Account, devnet_accounts
from priority_credit.chain.chain import Chain
from priority_credit.config import Settings
from priority_credit.kernel.models import Base
from priority_credit.kernel.state import RegistryPolicy, RegistryState


CONTRACT = "priority-credit"


@pytest.fixture
def settings() -> Settings:
    """Defaults only, independent of the developer's .env file."""
    return Settings(_env_file=None, contract_name=CONTRACT)


@pytest.fixture
def accounts() -> Dict[str, Account]:
    return devnet_accounts()


@pytest.fixture
def deployer(accounts: Dict[str, Account]) -> str:
    return accounts["deployer"].address


@pytest.fixture
def wallet_1(accounts: Dict[str, Account]) -> str:
    return accounts["wallet_1"].address


@pytest.fixture
def wallet_2(accounts: Dict[str, Account]) -> str:
    return accounts["wallet_2"].address


@pytest.fixture
def wallet_3(accounts: Dict[str, Account]) -> str:
    return accounts["wallet_3"].address


@pytest.fixture
def state(deployer: str) -> RegistryState:
    """Fresh registry right after genesis."""
    return RegistryState.genesis(deployer, RegistryPolicy())


@pytest.fixture
def chain(deployer: str, settings: Settings) -> Chain:
    return Chain(deployer=deployer, settings=settings)


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path):
    """File-backed SQLite engine so every connection sees the same database."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'registry.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_maker = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_maker() as session:
        yield session
        await session.rollback()
