"""
Pydantic models for q8core API requests and responses.
Tool results themselves are returned as :class:`q8core.core.schema.ToolResult`.
"""

from typing import (
    Any,
    Dict,
    Optional,
)

from pydantic import (
    BaseModel,
    Field,
)


# ---------------------------------------------------------------------------
# Pydantic request / response schema
# ---------------------------------------------------------------------------
class ToolCallRequest(BaseModel):
    """Invoke one tool on behalf of an agent."""

    args: Dict[str, Any] = Field(default_factory=dict, description="Tool arguments")
    user_id: Optional[str] = Field(None, description="User on whose behalf the tool runs")
    confirmed: bool = Field(False, description="The user has confirmed a sensitive action")


class ConfirmationRequired(BaseModel):
    """Body of a 409 answer for tool calls that need the user's go-ahead."""

    tool: str
    detail: str = "This action requires confirmation"
