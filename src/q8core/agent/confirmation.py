"""Which tool calls need an explicit go-ahead from the user before they run."""

import re
from typing import (
    Any,
    Mapping,
)

CONFIRMATION_REQUIRED_TOOLS = frozenset(
    {
        "gmail_send_message",
        "github_create_issue",
        "github_create_pr",
        "calendar_delete_event",
        "supabase_run_sql",  # only for destructive statements, see below
    }
)

SQL_TOOL = "supabase_run_sql"
DESTRUCTIVE_SQL = re.compile(r"\b(DELETE|DROP|TRUNCATE|ALTER|UPDATE)\b", re.IGNORECASE)


def requires_confirmation(tool_name: str, args: Mapping[str, Any] | None = None) -> bool:
    """
    Return True if *tool_name* called with *args* must be confirmed first.

    Membership in :data:`CONFIRMATION_REQUIRED_TOOLS` is the base rule.  The SQL tool is the
    exception: read-only queries run straight away and only statements containing a destructive
    keyword need confirmation.
    """
    if tool_name not in CONFIRMATION_REQUIRED_TOOLS:
        return False
    if tool_name == SQL_TOOL:
        query = (args or {}).get("query") or ""
        return DESTRUCTIVE_SQL.search(str(query)) is not None
    return True
