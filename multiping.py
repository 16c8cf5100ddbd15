"""
Console entry point: dependency checks, argument parsing, logging, run.
"""

from __future__ import annotations

import importlib.util
import logging
import os
import shutil
import sys
from typing import Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ui import ConsoleMessages

# import name -> distribution name
REQUIRED_PACKAGES = {
    "rich": "rich",
    "pydantic": "pydantic",
    "pydantic_settings": "pydantic-settings",
    "prometheus_client": "prometheus-client",
}


def check_project_dependencies() -> None:
    """
    Check all project dependencies before importing external packages.
    """
    missing_packages = [
        dist for module, dist in REQUIRED_PACKAGES.items()
        if importlib.util.find_spec(module) is None
    ]

    if missing_packages:
        # config itself needs pydantic-settings, so this message cannot go through t()
        print("Required Python packages are not installed:")
        for pkg in missing_packages:
            print(f"  - {pkg}")
        print("\nInstall them with:")
        print(f"  pip install {' '.join(missing_packages)}")
        sys.exit(1)


def _check_ping_command(messages: ConsoleMessages) -> bool:
    from config import PING_COMMAND, t

    if shutil.which(PING_COMMAND) is not None:
        return True

    messages.error(t("err_missing_commands").format(cmds=PING_COMMAND))
    messages.console.print(t("install_commands_hint"), markup=False)
    if sys.platform == "win32":
        messages.console.print("  ping.exe ships with Windows; check PATH", markup=False)
    else:
        messages.console.print("  Debian/Ubuntu: sudo apt-get install iputils-ping", markup=False)
        messages.console.print("  RHEL/CentOS: sudo yum install iputils", markup=False)
        messages.console.print("  Alpine: sudo apk add iputils", markup=False)
    return False


def configure_logging() -> None:
    from config import LOG_DIR, LOG_FILE, LOG_LEVEL, LOG_TRUNCATE_ON_START

    # Create log directory if it doesn't exist
    os.makedirs(LOG_DIR, exist_ok=True)

    logging.basicConfig(
        filename=LOG_FILE,
        filemode='w' if LOG_TRUNCATE_ON_START else 'a',
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(threadName)s %(message)s",
        encoding="utf-8",
    )


def main(argv: Sequence[str] | None = None, messages: ConsoleMessages | None = None) -> int:
    """CLI entry point; returns the process exit code."""
    check_project_dependencies()

    from cli import ConfigurationError, parse_args
    from ui import ConsoleMessages

    messages = messages or ConsoleMessages()
    if argv is None:
        argv = sys.argv[1:]

    # Parse before anything else so bad input never starts workers
    try:
        options = parse_args(argv)
    except ConfigurationError as exc:
        messages.error(exc.message)
        if exc.show_usage:
            messages.usage()
        return 2

    if options is None:
        messages.usage()
        return 0

    if not _check_ping_command(messages):
        return 1

    configure_logging()

    from main import MultiPingApp

    return MultiPingApp(options, messages=messages).run()


if __name__ == "__main__":
    sys.exit(main())
