import logging
import logging.handlers

import httpx
import pytest

from stride.app.main import configure_logging, init_services, run
from stride.shared.core.configuration import LoggingConfig, ServiceConfig, SystemConfig
from stride.shared.infrastructure.causes import CausesClient
from stride.shared.infrastructure.identity import InMemoryUserInfo


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def causes_with_status(status: int) -> CausesClient:
    http = httpx.AsyncClient(
        base_url="http://causes.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(status)),
    )
    return CausesClient(ServiceConfig(base_url="http://causes.test"), client=http)


def test_configure_logging_writes_rotating_file(tmp_path, restore_root_logger):
    path = configure_logging(LoggingConfig(level="DEBUG", log_dir="logs"), root=tmp_path)

    assert path == tmp_path / "logs" / "stride.log"
    handlers = logging.getLogger().handlers
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in handlers)
    logging.getLogger("stride.test").info("written")
    for handler in handlers:
        handler.flush()
    assert "written" in path.read_text(encoding="utf-8")


@pytest.mark.asyncio
async def test_returning_user_with_reachable_backend_lands_on_navigation():
    services = await init_services(
        SystemConfig(),
        InMemoryUserInfo(identity="fb-1", onboarding_complete=True),
        causes_with_status(200),
    )
    assert await run(services) == "MainNavigation"


@pytest.mark.asyncio
async def test_unreachable_backend_sends_user_to_login():
    services = await init_services(
        SystemConfig(),
        InMemoryUserInfo(identity="fb-1", onboarding_complete=True),
        causes_with_status(500),
    )
    assert await run(services) == "Login"
    assert len(services.app.notices) == 1


@pytest.mark.asyncio
async def test_picker_uses_roster_config():
    config = SystemConfig(roster={"max_selection": 3})
    services = await init_services(config, InMemoryUserInfo(), causes_with_status(200))
    assert services.picker.selection.limit == 3
    await services.causes.aclose()
