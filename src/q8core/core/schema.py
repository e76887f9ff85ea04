"""
Schema definitions for router <-> dispatcher <-> executor messages.

These data models serve as the contract between the model router, the tool dispatcher, the
individual tool executors and whatever conversation loop sits on top.  We keep them separate from
runtime logic so they can be imported anywhere without side-effects.
"""

from enum import Enum
from typing import (
    Any,
    Dict,
    List,
    Literal,
    Optional,
    Sequence,
)

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


class AgentType(str, Enum):
    """The closed set of agent specializations."""

    ORCHESTRATOR = "orchestrator"
    CODER = "coder"
    RESEARCHER = "researcher"
    SECRETARY = "secretary"
    PERSONALITY = "personality"
    HOME = "home"
    FINANCE = "finance"
    IMAGEGEN = "imagegen"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "AgentType | str") -> "AgentType":
        """Return *value* as an :class:`AgentType`, raising ``ValueError`` for unknown names."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown agent type: {value}") from None


# ---------------------------------------------------------------------------
# Model routing
# ---------------------------------------------------------------------------
class ModelDefinition(BaseModel):
    """Static description of one candidate model for an agent."""

    model_config = ConfigDict(frozen=True)

    model: str
    env_key: str = Field(..., description="Environment variable holding the provider credential")
    provider: str
    base_url: Optional[str] = Field(None, description="Set for non-OpenAI, OpenAI-compatible APIs")


class ModelConfig(BaseModel):
    """A resolved model choice, ready to hand to an OpenAI-compatible client."""

    model: str
    base_url: Optional[str] = None
    api_key: Optional[str] = Field(None, exclude=True, repr=False)
    provider: str
    is_fallback: bool = False
    supports_vision: bool = False
    supports_image_gen: bool = False
    max_image_inputs: Optional[int] = None
    max_image_resolution: Optional[Literal["1k", "2k", "4k"]] = None

    @property
    def has_api_key(self) -> bool:
        """True if a credential was resolved for this model."""
        return bool(self.api_key)


class ModelHealth(BaseModel):
    """Whether the model an agent would use right now has a credential."""

    available: bool
    model: str
    provider: str


class ToolAvailability(BaseModel):
    """Outcome of an integration credential preflight for one agent."""

    available: bool
    missing_credentials: List[str] = Field(default_factory=list)
    degraded_tools: List[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------
def object_params(
    properties: Dict[str, Dict[str, Any]] | None = None, required: Sequence[str] = ()
) -> Dict[str, Any]:
    """Build a JSON-schema ``object`` parameter block."""
    return {"type": "object", "properties": dict(properties or {}), "required": list(required)}


class ToolSchema(BaseModel):
    """A function-calling declaration shown to the LLM."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: Dict[str, Any] = Field(default_factory=object_params)

    def to_openai(self) -> Dict[str, Any]:
        """Return the OpenAI ``{"type": "function", "function": {...}}`` form."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class ErrorClassification(BaseModel):
    """Machine-readable class of a failure."""

    code: str
    recoverable: bool


class ToolError(BaseModel):
    """Error block of a failed :class:`ToolResult`."""

    code: str
    details: Optional[str] = None
    recoverable: Optional[bool] = None
    suggestion: Optional[str] = None
    user_message: Optional[str] = Field(None, description="Sentence to show the end user")


class ToolMeta(BaseModel):
    """Trace and timing metadata attached by the dispatcher."""

    model_config = ConfigDict(extra="allow")

    duration_ms: Optional[int] = None
    source: Optional[str] = None
    trace_id: Optional[str] = None


class ToolResult(BaseModel):
    """Uniform outcome envelope of a tool call."""

    success: bool
    message: str
    data: Any = None
    error: Optional[ToolError] = None
    meta: Optional[ToolMeta] = None

    @model_validator(mode="after")
    def _success_has_no_error(self) -> "ToolResult":
        # A successful call never reports an error block.
        if self.success and self.error is not None:
            self.error = None
        return self
