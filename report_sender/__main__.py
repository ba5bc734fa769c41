"""Entry point: ``python -m report_sender``."""

import asyncio
import sys

from pydantic import ValidationError

from report_sender.core.config import get_environment
from report_sender.core.logging import configure_structlog
from report_sender.pipeline import run_action
from report_sender.reporting import commands


def main() -> int:
    try:
        env = get_environment()
    except ValidationError as exc:
        commands.error(f"Invalid runner environment: {exc}")
        return 1

    configure_structlog(annotate=env.github_actions, debug=env.runner_debug)
    return asyncio.run(run_action(env=env))


if __name__ == "__main__":
    sys.exit(main())
