"""AppShell - command-line entry point.

Activates a shell for a URL, reports what it would present, then deactivates.

    appshell https://meet.jit.si/room1
    appshell --default-url https://example.org --storage data/state.json
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from appshell.app.environment import HostEnvironment
from appshell.app.lifecycle import LifecycleController, Props
from appshell.app.routes import RouteTable
from appshell.shared.core.configuration import ShellConfig, get_config
from appshell.shared.core.container_locator import ContainerLocator
from appshell.shared.core.redux.devtools import action_logger
from appshell.shared.infrastructure.storage.backends import FileStorage, MemoryStorage

logger = logging.getLogger(__name__)

log_level_map = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(config: ShellConfig) -> None:
    """File handler logs at the configured level, console only WARNING+."""
    file_log_level = log_level_map.get(config.logging.level.upper(), logging.DEBUG)
    log_file_path = Path(config.logging.file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(file_log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=config.logging.max_bytes,
        backupCount=config.logging.backup_count,
        encoding='utf-8'
    )
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))
    root_logger.addHandler(console_handler)

    # Suppress asyncio warnings on Windows during shutdown
    if os.name == 'nt':
        logging.getLogger("asyncio").setLevel(logging.CRITICAL)

    logger.info(f"Logging configured: file={log_file_path}, console=WARNING+")


class WelcomeView:
    """Stand-in view when no room is open."""

    def __init__(self, **props):
        self.props = props


class RoomView:
    """Stand-in view inside a room."""

    def __init__(self, **props):
        self.props = props


def build_controller(
    config: ShellConfig,
    props: Props,
    routes: Optional[RouteTable] = None,
    location: Optional[str] = None,
) -> LifecycleController:
    """Wire a controller from configuration."""
    storage = FileStorage(config.storage.path) if config.storage.path else MemoryStorage()
    environment = HostEnvironment(
        storage=storage,
        location=location,
        devtools=action_logger if config.app.devtools else None,
    )
    locator = ContainerLocator() if config.app.expose_legacy_store else None
    return LifecycleController(
        props,
        environment=environment,
        routes=routes or RouteTable(welcome=WelcomeView, room=RoomView),
        locator=locator,
        fallback_url=config.app.default_url,
    )


async def run(controller: LifecycleController) -> int:
    await controller.activate()
    await controller.wait_until_idle()

    state = controller.container.get_state()
    location = state.get("features/base/location", {})
    view = controller.render()
    print(f"url:  {location.get('location_url')}")
    print(f"room: {location.get('room') or '-'}")
    print(f"view: {type(view).__name__ if view is not None else '-'}")

    controller.deactivate()
    return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="appshell", description=__doc__.splitlines()[2])
    parser.add_argument("url", nargs="?", help="URL to open")
    parser.add_argument("--default-url", help="URL to open when none is given")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--storage", help="JSON storage file (overrides configuration)")
    parser.add_argument("--location", help="Pretend the host already sits at this URL")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)

    config = get_config(args.config)
    if args.storage:
        config = config.model_copy(update={"storage": config.storage.model_copy(update={"path": args.storage})})
    configure_logging(config)

    props = Props(url=args.url, default_url=args.default_url)
    controller = build_controller(config, props, location=args.location)
    logger.info("Starting AppShell...")
    return asyncio.run(run(controller))


if __name__ == "__main__":
    sys.exit(main())
