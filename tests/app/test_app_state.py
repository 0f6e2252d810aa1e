import pytest

from stride.app.state import AppState
from stride.shared.core import events
from stride.shared.domain.roster import ContactPicker
from stride.shared.domain.session import LogoutRequested, OnboardingFinished, ScreenId, SessionContext
from stride.shared.infrastructure.identity import InMemoryUserInfo


@pytest.mark.asyncio
async def test_screen_follows_session(bus, user_info):
    session = SessionContext(bus, user_info)
    app = AppState(bus, session)
    await app.initialize()
    await app.initialize()

    await session.launch()
    await bus.wait_until_idle()
    assert app.screen is ScreenId.LOGIN

    await session.login("fb-1")
    await bus.wait_until_idle()
    assert app.screen is ScreenId.ONBOARDING

    await session.dispatch(OnboardingFinished())
    await bus.wait_until_idle()
    assert app.screen is ScreenId.MAIN_NAVIGATION

    await session.dispatch(LogoutRequested())
    await bus.wait_until_idle()
    assert app.screen is ScreenId.LOGIN


@pytest.mark.asyncio
async def test_connectivity_notice_shown_on_login_screen(bus, make_causes):
    session = SessionContext(bus, InMemoryUserInfo(identity="fb-1"), health_probe=make_causes(healthy=False))
    app = AppState(bus, session)
    await app.initialize()

    await session.launch()
    await bus.wait_until_idle()

    assert app.screen is ScreenId.LOGIN
    assert [n["kind"] for n in app.notices] == [events.NOTICE_CONNECTIVITY]

    app.dismiss_notices()
    assert app.notices == []


@pytest.mark.asyncio
async def test_selection_limit_notice(bus, user_info, friend_source):
    session = SessionContext(bus, user_info)
    app = AppState(bus, session)
    await app.initialize()
    picker = ContactPicker(bus, limit=1)
    await picker.reload(friend_source)

    await picker.select("1")
    await picker.select("2")
    await bus.wait_until_idle()

    assert app.notices[-1]["message"] == "You are limited to 1 members"


@pytest.mark.asyncio
async def test_push_log_lands_in_buffer(bus, user_info):
    app = AppState(bus, SessionContext(bus, user_info))
    await app.initialize()

    await app.push_log("hello", "success")
    await bus.wait_until_idle()

    assert app.logs[-1]["message"] == "hello"
    assert app.logs[-1]["level"] == "success"
