import os

# 🧩 configurar el entorno antes de cargar los módulos del backend
os.environ.setdefault("APP_ENV", "local")
os.environ["TOTP_SECRET"] = "JBSWY3DPEHPK3PXP"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from backend.main import app  # isort: skip
from backend.routers import health as health_router  # isort: skip
from backend.routers import totp as totp_router  # isort: skip
from backend.services.secret_provider import SecretProvider
from backend.services.totp_service import TotpService
from totp_engine import TotpConfig, clock

TEST_SECRET = "JBSWY3DPEHPK3PXP"
# 2023-01-01T00:00:00Z
FIXED_NOW_MS = 1_672_531_200_000


@pytest_asyncio.fixture()
async def async_client() -> AsyncClient:
    """Create an AsyncClient bound to the FastAPI app for integration tests."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture(name="client")
def client_fixture(async_client: AsyncClient) -> AsyncClient:
    """
    Wrapper para compatibilidad.
    Permite que los tests usen `client` aunque internamente siga siendo `async_client`.
    """
    return async_client


@pytest.fixture()
def fixed_clock(monkeypatch: pytest.MonkeyPatch) -> int:
    monkeypatch.setattr(clock, "now_millis", lambda: FIXED_NOW_MS)
    return FIXED_NOW_MS


@pytest.fixture()
def install_totp_service(monkeypatch: pytest.MonkeyPatch):
    """Swap the service used by the routers for one built from explicit inputs."""

    def _install(
        secret: str | None = TEST_SECRET,
        *,
        allow_demo_secret: bool = False,
        config: TotpConfig | None = None,
    ) -> TotpService:
        service = TotpService(
            SecretProvider(secret, allow_demo_secret=allow_demo_secret),
            config,
            issuer="TOTP-Test",
            account="tester",
        )
        monkeypatch.setattr(totp_router, "totp_service", service)
        monkeypatch.setattr(health_router, "totp_service", service)
        return service

    return _install
