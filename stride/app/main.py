"""Stride - application entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import logging.handlers
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from stride.app.state import AppState
from stride.shared.core.configuration import LoggingConfig, SystemConfig, get_config
from stride.shared.core.event_bus import EventBus
from stride.shared.domain.roster import ContactPicker
from stride.shared.domain.session import SessionContext
from stride.shared.infrastructure.causes import CausesClient
from stride.shared.infrastructure.identity import InMemoryUserInfo, UserInfoStore

logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig, root: Optional[Path] = None) -> Path:
    """Configure the root logger.

    File handler logs at the configured level to ``<log_dir>/stride.log``;
    the console only shows warnings and errors unless configured otherwise.

    Returns:
        Path of the log file
    """
    log_dir = Path(config.log_dir)
    if not log_dir.is_absolute():
        log_dir = (root or Path.cwd()) / log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = log_dir / "stride.log"

    file_level = getattr(logging, config.level, logging.INFO)
    console_level = getattr(logging, config.console_level, logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(min(file_level, console_level))
    # Avoid duplicate handlers when configured twice
    root_logger.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8',
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(file_handler)

    console_handler = RichHandler(show_path=False, rich_tracebacks=True)
    console_handler.setLevel(console_level)
    root_logger.addHandler(console_handler)

    # Suppress verbose third-party library logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info(f"Logging configured: file={log_file_path}, console={config.console_level}+")
    return log_file_path


@dataclass
class Services:
    """Everything wired at startup, passed explicitly to the presentation layer."""
    bus: EventBus
    config: SystemConfig
    user_info: UserInfoStore
    causes: CausesClient
    session: SessionContext
    app: AppState
    picker: ContactPicker


async def init_services(
    config: SystemConfig,
    user_info: Optional[UserInfoStore] = None,
    causes: Optional[CausesClient] = None,
) -> Services:
    """Build and wire all services."""
    bus = EventBus()
    user_info = user_info or InMemoryUserInfo()
    causes = causes or CausesClient(config.service)

    session = SessionContext(
        bus,
        user_info,
        health_probe=causes,
        participants=causes,
        health_check_enabled=config.session.health_check_enabled,
    )
    logger.info("SessionContext initialized")

    app = AppState(bus, session)
    await app.initialize()
    logger.info("AppState initialized")

    picker = ContactPicker.from_config(bus, config.roster)
    logger.info(f"ContactPicker initialized (limit={config.roster.max_selection})")

    return Services(
        bus=bus,
        config=config,
        user_info=user_info,
        causes=causes,
        session=session,
        app=app,
        picker=picker,
    )


async def run(services: Services) -> str:
    """Launch the session and return the screen the shell ends up on."""
    try:
        await services.session.launch()
        await services.bus.wait_until_idle()
        await services.session.wait_for_background()
    finally:
        await services.causes.aclose()
    return services.app.screen.value


def main(argv: Optional[list[str]] = None) -> int:
    """Command-line launcher: resolve and print the initial screen."""
    load_dotenv()

    parser = argparse.ArgumentParser(prog="stride", description="Resolve the Stride launch screen")
    parser.add_argument("--identity", help="Stored identity from a previous login")
    parser.add_argument("--onboarding-complete", action="store_true", help="Onboarding already finished")
    args = parser.parse_args(argv)

    config = get_config()
    configure_logging(config.logging)
    logger.info("Initializing Stride...")

    async def _launch() -> Services:
        services = await init_services(
            config,
            InMemoryUserInfo(identity=args.identity, onboarding_complete=args.onboarding_complete),
        )
        await run(services)
        return services

    services = asyncio.run(_launch())

    console = Console()
    console.print(f"Screen: [bold]{services.app.screen.value}[/bold]")
    for notice in services.app.notices:
        console.print(f"[yellow]{notice['message']}[/yellow]")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
