"""
q8core entry point.

This file handles startup concerns (arg-parsing, logging) and launches the requested mode:

* ``api``    - serve the HTTP API,
* ``health`` - print model and integration credential status for every agent,
* ``tools``  - print the tools an agent exposes.
"""

import argparse
import logging
import sys

from q8core.agent.model_router import check_model_health
from q8core.agent.preflight import check_all_agents_availability
from q8core.common import (
    AnsiColors,
    colored_print,
    print_status,
)
from q8core.config import settings
from q8core.core.schema import AgentType
from q8core.tools import get_agent_tools

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _init_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _print_health() -> int:
    colored_print("Models:", AnsiColors.BLUE)
    healthy = True
    for agent, health in check_model_health().items():
        print_status(health.available, f"{agent}: {health.model} ({health.provider})")
        healthy = healthy and health.available

    colored_print("Integrations:", AnsiColors.BLUE)
    for agent, result in check_all_agents_availability().items():
        missing = ", ".join(result.missing_credentials)
        suffix = f" (missing: {missing})" if missing else ""
        print_status(result.available, f"{agent}{suffix}", warn=True)

    return 0 if healthy else 1


def _print_tools(agents: list[AgentType]) -> None:
    for agent in agents:
        colored_print(f"{agent}:", AnsiColors.BLUE)
        for tool in get_agent_tools(agent):
            required = tool.parameters.get("required") or []
            params = ", ".join(
                f"{name}*" if name in required else name
                for name in tool.parameters.get("properties", {})
            )
            print(f"  {tool.name}({params}) - {tool.description}")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for q8core.

    Sets up the command-line interface, initializes logging and runs the selected mode.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(description="Run the q8core agent core")
    parser.add_argument(
        "--mode",
        choices=["api", "health", "tools"],
        type=str.lower,
        default="api",
        help="Serve the REST API, print credential health, or list agent tools (default: api)",
    )
    parser.add_argument(
        "--agent",
        choices=[agent.value for agent in AgentType],
        type=str.lower,
        default=None,
        help="Restrict --mode tools to one agent",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        type=str.lower,
        default=settings.LOG_LEVEL,
        help="Logging level (default from env: %(default)s)",
    )
    args = parser.parse_args(argv)

    # Override log level setting with command-line argument
    settings.LOG_LEVEL = args.log_level

    _init_logging(settings.LOG_LEVEL)

    logger.info("Starting q8core [%s mode]", args.mode)

    if args.mode == "api":
        # Lazy import to keep fastapi out of the offline modes
        from q8core.api.app import run_api  # pylint: disable=import-outside-toplevel

        run_api(host="0.0.0.0", port=settings.API_PORT, reload=settings.DEBUG)
    elif args.mode == "health":
        sys.exit(_print_health())
    else:
        agents = [AgentType.parse(args.agent)] if args.agent else list(AgentType)
        _print_tools(agents)


if __name__ == "__main__":
    main()
