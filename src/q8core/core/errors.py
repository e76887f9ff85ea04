"""
Error types and failure classification for tool calls.

Tool executors wrap heterogeneous third-party clients that share no exception hierarchy, so the
classifier works mostly on message text.  The rules are heuristics: provider error strings are not
a stable contract.  They are evaluated in order and the first match wins, which is also how ties
are broken when a message contains several matching substrings.
"""

from typing import (
    Callable,
    NamedTuple,
    Tuple,
)

import httpx

from q8core.core.schema import ErrorClassification


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------
class ToolExecutionError(RuntimeError):
    """Raised when a requested tool cannot run or fails."""


class ToolNotFoundError(ToolExecutionError):
    """Raised when an agent exposes no tool with the requested name."""


class ToolTimeoutError(ToolExecutionError, TimeoutError):
    """Raised when a tool executor does not settle within its timeout."""


class ModelUnavailableError(RuntimeError):
    """Raised at the network boundary when a resolved model has no API key."""


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------
TIMEOUT = "TIMEOUT"
CONNECTION_ERROR = "CONNECTION_ERROR"
NOT_FOUND = "NOT_FOUND"
AUTH_ERROR = "AUTH_ERROR"
RATE_LIMITED = "RATE_LIMITED"
VALIDATION_ERROR = "VALIDATION_ERROR"
UNKNOWN_ERROR = "UNKNOWN_ERROR"


Matcher = Callable[[BaseException | None, str], bool]


class ErrorRule(NamedTuple):
    """One ``(predicate, code, recoverable)`` entry of the classification table."""

    code: str
    recoverable: bool
    matches: Matcher


def _text_rule(*needles: str, types: Tuple[type, ...] = ()) -> Matcher:
    def _matches(exc: BaseException | None, message: str) -> bool:
        if types and isinstance(exc, types):
            return True
        return any(needle in message for needle in needles)

    return _matches


ERROR_RULES: Tuple[ErrorRule, ...] = (
    ErrorRule(TIMEOUT, True, _text_rule("timed out", "timeout", types=(TimeoutError,))),
    ErrorRule(
        CONNECTION_ERROR,
        True,
        _text_rule(
            "failed to fetch",
            "econnrefused",
            "connection refused",
            types=(ConnectionError, httpx.ConnectError),
        ),
    ),
    ErrorRule(NOT_FOUND, False, _text_rule("not found", "404")),
    ErrorRule(AUTH_ERROR, False, _text_rule("unauthorized", "401", "403")),
    ErrorRule(RATE_LIMITED, True, _text_rule("rate limit", "429", "too many requests")),
    ErrorRule(VALIDATION_ERROR, False, _text_rule("validation", "invalid")),
)


def error_message(error: BaseException | str | None) -> str:
    """Return a readable message for *error*, falling back to the exception type name."""
    if error is None:
        return "Unknown error"
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    return str(error)


def classify_error(error: BaseException | str | None) -> ErrorClassification:
    """Map *error* to a fixed error code and a recoverability flag."""
    exc = error if isinstance(error, BaseException) else None
    message = error_message(error).lower()
    for rule in ERROR_RULES:
        if rule.matches(exc, message):
            return ErrorClassification(code=rule.code, recoverable=rule.recoverable)
    return ErrorClassification(code=UNKNOWN_ERROR, recoverable=False)


# ---------------------------------------------------------------------------
# User-facing wording
# ---------------------------------------------------------------------------
_FRIENDLY_MESSAGES = {
    "spotify": (
        "I couldn't connect to Spotify. Make sure you have an active Spotify session on one of "
        "your devices."
    ),
    "github": "GitHub isn't responding right now. The API might be temporarily unavailable.",
    "supabase": "The database isn't responding right now. Please try again shortly.",
    "calendar": "I couldn't access your calendar. You may need to re-authorize Google access.",
    "gmail": "I couldn't access your email. Please check your Google authorization.",
    "drive": "Google Drive isn't accessible right now. Try re-authorizing if this persists.",
    "youtube": "YouTube search isn't working. Please try again in a moment.",
    "control": "I couldn't control that device. Make sure Home Assistant is running.",
    "discover": "I couldn't discover devices. Make sure Home Assistant is running.",
    "weather": "Weather data isn't available right now. Please try again shortly.",
    "finance": (
        "I couldn't access your financial data. Please check your finance integration settings."
    ),
    "generate": "Image generation encountered an issue. Please try again with a different prompt.",
    "calculate": (
        "The calculation couldn't be completed. Please check the expression and try again."
    ),
}


def friendly_error(tool_name: str) -> str:
    """Return a sentence suitable for showing the user when *tool_name* fails."""
    prefix = tool_name.split("_", 1)[0].lower()
    if prefix == "get" and "weather" in tool_name:
        prefix = "weather"
    message = _FRIENDLY_MESSAGES.get(prefix)
    if message:
        return message
    return f"The {tool_name.replace('_', ' ')} tool encountered an issue. Please try again."


_HOME_PREFIXES = ("control_", "discover_", "set_climate", "activate_scene", "get_device_state")


def recovery_suggestion(tool_name: str, message: str) -> str:
    """Suggest a next step for the user, by error text first and tool family second."""
    lower = message.lower()

    if "401" in lower or "403" in lower or "unauthorized" in lower:
        return "Try re-authenticating or check your API credentials in settings."
    if "429" in lower or "rate limit" in lower:
        return "You've hit a rate limit. Please wait a moment and try again."
    if "timeout" in lower or "timed out" in lower:
        return "The service is responding slowly. Check your internet connection and try again."
    if "econnrefused" in lower or "connection" in lower:
        return "Cannot reach the service. Check if the service is running and accessible."
    if "not found" in lower or "404" in lower:
        return "The requested resource wasn't found. Double-check the details and try again."
    if "api key" in lower or "not configured" in lower:
        return "This integration needs an API key. Check your settings to configure it."
    if "500" in lower or "internal server error" in lower:
        return "The service had an internal error. Try again in a moment."

    if tool_name.startswith("spotify"):
        return "Make sure Spotify is open on one of your devices and you have an active session."
    if tool_name.startswith(_HOME_PREFIXES):
        return "Check that Home Assistant is running and accessible on your network."
    if tool_name.startswith(("gmail", "calendar", "drive")):
        return "Try re-authorizing your Google account in settings."
    if tool_name.startswith("github"):
        return "Check that your GitHub token is configured and has access to the repository."
    return "Please try again. If the problem persists, check the integration settings."
