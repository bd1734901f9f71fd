"""
Fixtures for integration tests.

Provides:
- Test settings with a known secret and whitelist
- A fresh RateLimiter per test
- Recording and crashing ledger clients
- Test client for the FastAPI app with dependencies overridden
"""

from typing import AsyncGenerator, Awaitable, Callable, List, Tuple

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport, Response

from src.main import app
from src.core.config import Settings
from src.core.dependencies import (
    get_app_settings,
    get_ledger_client,
    get_rate_limiter,
)
from src.domain.entities import LedgerResult
from src.domain.interfaces import LedgerClient
from src.infrastructure.clients import MockLedgerClient
from src.service.authorization import RateLimiter, SignatureVerifier


TEST_SECRET = "integration-secret"
WHITELISTED_DEST = "11111111111111111111111111111111"
OTHER_WHITELISTED_DEST = "So11111111111111111111111111111111111111112"
UNLISTED_DEST = "4Nd1mBQtrMJVYVfKf2PJy9NZUZdTAsp7D4xWLs4gDB4T"
DAILY_LIMIT = 5


# =============================================================================
# Mock Clients
# =============================================================================

class RecordingLedgerClient(MockLedgerClient):
    """Mock ledger that records every transfer it is asked to make."""

    def __init__(self):
        self.calls: List[Tuple] = []

    async def pay_lamports(self, dest: str, lamports: int) -> LedgerResult:
        self.calls.append(("lamports", dest, lamports))
        return await super().pay_lamports(dest, lamports)

    async def pay_token(self, mint: str, dest: str, amount_minor: int) -> LedgerResult:
        self.calls.append(("token", mint, dest, amount_minor))
        return await super().pay_token(mint, dest, amount_minor)


class CrashingLedgerClient(LedgerClient):
    """Ledger client whose backend is down."""

    async def pay_lamports(self, dest: str, lamports: int) -> LedgerResult:
        raise RuntimeError("ledger unavailable")

    async def pay_token(self, mint: str, dest: str, amount_minor: int) -> LedgerResult:
        raise RuntimeError("ledger unavailable")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment."""
    return Settings(
        _env_file=None,
        hmac_secret=TEST_SECRET,
        treasury_dest_whitelist=f"{WHITELISTED_DEST}, {OTHER_WHITELISTED_DEST}",
        daily_tx_limit=DAILY_LIMIT,
        max_lamports_per_tx=10_000,
        max_usdc_minor_per_tx=100_000,
    )


@pytest.fixture
def rate_limiter(test_settings: Settings) -> RateLimiter:
    """A fresh daily limiter for each test."""
    return RateLimiter(daily_limit=test_settings.daily_tx_limit)


@pytest.fixture
def ledger_client() -> RecordingLedgerClient:
    return RecordingLedgerClient()


@pytest.fixture
def signer() -> SignatureVerifier:
    return SignatureVerifier(TEST_SECRET)


async def _client_for(
    settings: Settings,
    limiter: RateLimiter,
    ledger: LedgerClient,
) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_app_settings] = lambda: settings
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    app.dependency_overrides[get_ledger_client] = lambda: ledger

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(
    test_settings: Settings,
    rate_limiter: RateLimiter,
    ledger_client: RecordingLedgerClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Uses the test secret and whitelist
    - Uses a per-test RateLimiter
    - Records ledger calls
    """
    async for ac in _client_for(test_settings, rate_limiter, ledger_client):
        yield ac


@pytest_asyncio.fixture
async def client_with_crashing_ledger(
    test_settings: Settings,
    rate_limiter: RateLimiter,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client whose ledger raises on every call."""
    async for ac in _client_for(test_settings, rate_limiter, CrashingLedgerClient()):
        yield ac


@pytest.fixture
def post_signed(
    signer: SignatureVerifier,
) -> Callable[[AsyncClient, str, dict], Awaitable[Response]]:
    """POST a JSON body with a valid X-Signature header."""

    async def _post(ac: AsyncClient, path: str, body: dict) -> Response:
        return await ac.post(path, json=body, headers={"X-Signature": signer.sign(body)})

    return _post
