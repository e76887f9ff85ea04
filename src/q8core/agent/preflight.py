"""Credential preflight for the integrations behind each agent's tools."""

from typing import (
    Dict,
    List,
    NamedTuple,
)

from q8core.core.credentials import (
    CredentialProvider,
    EnvironmentCredentials,
)
from q8core.core.schema import (
    AgentType,
    ToolAvailability,
)


class CredentialCheck(NamedTuple):
    env_key: str
    name: str


AGENT_CREDENTIALS: Dict[AgentType, List[CredentialCheck]] = {
    AgentType.ORCHESTRATOR: [CredentialCheck("OPENAI_API_KEY", "OpenAI")],
    AgentType.PERSONALITY: [
        CredentialCheck("SPOTIFY_REFRESH_TOKEN", "Spotify"),
        CredentialCheck("OPENWEATHER_API_KEY", "Weather"),
    ],
    AgentType.CODER: [CredentialCheck("GITHUB_PERSONAL_ACCESS_TOKEN", "GitHub")],
    AgentType.RESEARCHER: [CredentialCheck("PERPLEXITY_API_KEY", "Perplexity")],
    AgentType.SECRETARY: [
        CredentialCheck("GOOGLE_CLIENT_ID", "Google Calendar"),
        CredentialCheck("GOOGLE_CLIENT_SECRET", "Google Auth"),
        CredentialCheck("YOUTUBE_API_KEY", "YouTube"),
    ],
    AgentType.HOME: [
        CredentialCheck("HASS_TOKEN", "Home Assistant"),
        CredentialCheck("HASS_URL", "Home Assistant URL"),
    ],
    AgentType.FINANCE: [
        CredentialCheck("PLAID_CLIENT_ID", "Plaid Banking"),
        CredentialCheck("PLAID_SECRET", "Plaid Secret"),
    ],
    AgentType.IMAGEGEN: [CredentialCheck("OPENAI_API_KEY", "OpenAI Images")],
}


def check_tool_availability(
    agent: AgentType | str, credentials: CredentialProvider | None = None
) -> ToolAvailability:
    """Check that every integration credential *agent* relies on is set."""
    agent = AgentType.parse(agent)
    credentials = credentials or EnvironmentCredentials()

    missing = [
        check.name
        for check in AGENT_CREDENTIALS.get(agent, [])
        if credentials.lookup(check.env_key) is None
    ]
    return ToolAvailability(
        available=not missing, missing_credentials=missing, degraded_tools=list(missing)
    )


def check_all_agents_availability(
    credentials: CredentialProvider | None = None,
) -> Dict[AgentType, ToolAvailability]:
    """Run :func:`check_tool_availability` for every agent."""
    credentials = credentials or EnvironmentCredentials()
    return {agent: check_tool_availability(agent, credentials) for agent in AgentType}


def availability_report(credentials: CredentialProvider | None = None) -> str:
    """Plain-text summary, one line per agent."""
    lines = ["Agent Tool Availability:"]
    for agent, result in check_all_agents_availability(credentials).items():
        status = "[OK]" if result.available else "[MISSING]"
        missing = (
            f" (missing: {', '.join(result.missing_credentials)})"
            if result.missing_credentials
            else ""
        )
        lines.append(f"  {status} {agent}{missing}")
    return "\n".join(lines)
