"""
Built-in utility tools (time, weather, arithmetic, unit conversion, web search).

Several agents expose a trimmed or reworded variant of the same utilities; all of them are served
by the executor bound to the ``default`` group.
"""

from typing import List

from q8core.core.schema import (
    ToolSchema,
    object_params,
)

_TIMEZONE = {
    "type": "string",
    "description": "Timezone (e.g., America/New_York). Defaults to user timezone.",
}
_CITY = {"type": "string", "description": "City name (e.g., New York, London)"}


def _calculate(description: str) -> ToolSchema:
    return ToolSchema(
        name="calculate",
        description=description,
        parameters=object_params(
            {
                "expression": {
                    "type": "string",
                    "description": "Expression (e.g., '2 + 2', 'sqrt(16)', '15% of 200')",
                }
            },
            required=["expression"],
        ),
    )


CONVERT_UNITS = ToolSchema(
    name="convert_units",
    description="Convert between units of measurement",
    parameters=object_params(
        {
            "value": {"type": "number", "description": "Value to convert"},
            "from_unit": {"type": "string", "description": "Source unit (e.g., 'km', 'lb', 'F')"},
            "to_unit": {"type": "string", "description": "Target unit (e.g., 'mi', 'kg', 'C')"},
        },
        required=["value", "from_unit", "to_unit"],
    ),
)


# Orchestrator
DEFAULT_TOOLS: List[ToolSchema] = [
    ToolSchema(
        name="get_current_datetime",
        description="Get the current date and time",
        parameters=object_params(
            {
                "timezone": _TIMEZONE,
                "format": {
                    "type": "string",
                    "enum": ["full", "date", "time", "relative"],
                    "description": "Output format",
                },
            }
        ),
    ),
    ToolSchema(
        name="get_weather",
        description="Get current weather conditions for a location",
        parameters=object_params(
            {
                "city": _CITY,
                "lat": {"type": "number", "description": "Latitude (alternative to city)"},
                "lon": {"type": "number", "description": "Longitude (alternative to city)"},
            }
        ),
    ),
    ToolSchema(
        name="get_weather_forecast",
        description="Get the weather forecast for the next few days",
        parameters=object_params(
            {
                "city": _CITY,
                "days": {"type": "number", "description": "Number of days to forecast (1-7)"},
            }
        ),
    ),
    _calculate("Perform mathematical calculations"),
    CONVERT_UNITS,
    ToolSchema(
        name="search_web",
        description="Search the web for current information",
        parameters=object_params(
            {
                "query": {"type": "string", "description": "Search query"},
                "num_results": {"type": "number", "description": "Number of results to return"},
            },
            required=["query"],
        ),
    ),
]

# Researcher
RESEARCH_TOOLS: List[ToolSchema] = [
    ToolSchema(
        name="get_current_datetime",
        description="Get the current date and time for time-sensitive research",
        parameters=object_params({"timezone": _TIMEZONE}),
    ),
    _calculate("Perform calculations for data analysis"),
    ToolSchema(
        name="get_weather",
        description="Get current weather for research context",
        parameters=object_params({"city": _CITY}),
    ),
    CONVERT_UNITS,
]

# Personality
PERSONALITY_TOOLS: List[ToolSchema] = [
    ToolSchema(
        name="get_current_datetime",
        description="Get the current date and time",
        parameters=object_params({"timezone": _TIMEZONE}),
    ),
    ToolSchema(
        name="get_weather",
        description="Get current weather to make conversation more contextual",
        parameters=object_params({"city": _CITY}),
    ),
    _calculate("Perform quick calculations"),
]

# Secretary: scheduling needs the clock and simple arithmetic on top of Google Workspace.
SECRETARY_EXTRA_TOOLS: List[ToolSchema] = [
    tool for tool in DEFAULT_TOOLS if tool.name in ("get_current_datetime", "calculate")
]
