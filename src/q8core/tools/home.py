"""Home Assistant tool declarations (lights, climate, media, locks, sensors, automations)."""

from typing import List

from q8core.core.schema import (
    ToolSchema,
    object_params,
)

_ENTITY = {"type": "string", "description": "The Home Assistant entity ID"}


def _entity(description: str) -> dict:
    return {**_ENTITY, "description": description}


def _choice(description: str, *values: str) -> dict:
    return {"type": "string", "enum": list(values), "description": description}


HOME_TOOLS: List[ToolSchema] = [
    ToolSchema(
        name="discover_devices",
        description=(
            "Discover available Home Assistant devices/entities. Use this to find entity IDs "
            "before controlling them."
        ),
        parameters=object_params(
            {
                "domain": {
                    "type": "string",
                    "description": (
                        "Filter by domain (e.g., light, switch, sensor, climate, media_player, "
                        "cover, lock, vacuum, alarm_control_panel, automation, script)"
                    ),
                },
                "area": {
                    "type": "string",
                    "description": "Filter by area/room name (e.g., living room, bedroom, kitchen)",
                },
            }
        ),
    ),
    ToolSchema(
        name="control_device",
        description="Control a Home Assistant device (lights, switches, fans, covers, locks, etc.)",
        parameters=object_params(
            {
                "entity_id": _entity(
                    "The Home Assistant entity ID (e.g., light.living_room, switch.bedroom_fan)"
                ),
                "action": _choice("The action to perform", "turn_on", "turn_off", "toggle"),
                "brightness_pct": {
                    "type": "number",
                    "description": "Brightness percentage (0-100) for lights. Optional.",
                },
                "color_name": {
                    "type": "string",
                    "description": "Color name for lights (e.g., red, blue, warm_white). Optional.",
                },
            },
            required=["entity_id", "action"],
        ),
    ),
    ToolSchema(
        name="set_climate",
        description="Set thermostat/climate device temperature and mode",
        parameters=object_params(
            {
                "entity_id": _entity("The climate entity ID (e.g., climate.living_room)"),
                "temperature": {"type": "number", "description": "Target temperature in degrees"},
                "hvac_mode": _choice(
                    "HVAC mode. Optional.", "heat", "cool", "heat_cool", "auto", "off"
                ),
            },
            required=["entity_id", "temperature"],
        ),
    ),
    ToolSchema(
        name="activate_scene",
        description="Activate a Home Assistant scene",
        parameters=object_params(
            {"entity_id": _entity("The scene entity ID (e.g., scene.movie_night)")},
            required=["entity_id"],
        ),
    ),
    ToolSchema(
        name="control_media",
        description="Control media players (TV, speakers, etc.)",
        parameters=object_params(
            {
                "entity_id": _entity("The media player entity ID"),
                "action": _choice(
                    "Media control action",
                    "play",
                    "pause",
                    "stop",
                    "next",
                    "previous",
                    "volume_up",
                    "volume_down",
                    "volume_mute",
                ),
                "volume_level": {
                    "type": "number",
                    "description": "Volume level (0.0 to 1.0). Only for volume_set.",
                },
            },
            required=["entity_id", "action"],
        ),
    ),
    ToolSchema(
        name="control_cover",
        description="Control blinds, shades, garage doors, etc.",
        parameters=object_params(
            {
                "entity_id": _entity("The cover entity ID"),
                "action": _choice("Cover control action", "open", "close", "stop", "set_position"),
                "position": {
                    "type": "number",
                    "description": "Position percentage (0-100). Only for set_position.",
                },
            },
            required=["entity_id", "action"],
        ),
    ),
    ToolSchema(
        name="control_lock",
        description="Lock or unlock a door lock",
        parameters=object_params(
            {
                "entity_id": _entity("The lock entity ID"),
                "action": _choice("Lock action", "lock", "unlock"),
            },
            required=["entity_id", "action"],
        ),
    ),
    ToolSchema(
        name="get_device_state",
        description="Get the current state of a device",
        parameters=object_params(
            {"entity_id": _entity("The entity ID to check")}, required=["entity_id"]
        ),
    ),
    # Security & safety
    ToolSchema(
        name="control_alarm",
        description="Control a security alarm system",
        parameters=object_params(
            {
                "entity_id": _entity("The alarm control panel entity ID"),
                "action": _choice(
                    "Alarm action to perform",
                    "arm_home",
                    "arm_away",
                    "arm_night",
                    "disarm",
                    "trigger",
                ),
                "code": {"type": "string", "description": "PIN code if required for the action"},
            },
            required=["entity_id", "action"],
        ),
    ),
    # Sensors
    ToolSchema(
        name="get_sensor_state",
        description=(
            "Get the current state of a sensor (motion, door, window, temperature, humidity, "
            "water leak, etc.)"
        ),
        parameters=object_params(
            {"entity_id": _entity("The sensor entity ID")}, required=["entity_id"]
        ),
    ),
    ToolSchema(
        name="get_sensor_history",
        description="Get historical data for a sensor over a time period",
        parameters=object_params(
            {
                "entity_id": _entity("The sensor entity ID"),
                "hours": {
                    "type": "number",
                    "description": "Number of hours of history to retrieve (default: 24)",
                },
            },
            required=["entity_id"],
        ),
    ),
    # Automations & scripts
    ToolSchema(
        name="trigger_automation",
        description="Manually trigger a Home Assistant automation",
        parameters=object_params(
            {"entity_id": _entity("The automation entity ID")}, required=["entity_id"]
        ),
    ),
    ToolSchema(
        name="toggle_automation",
        description="Enable or disable a Home Assistant automation",
        parameters=object_params(
            {
                "entity_id": _entity("The automation entity ID"),
                "action": _choice(
                    "Whether to enable or disable the automation", "enable", "disable"
                ),
            },
            required=["entity_id", "action"],
        ),
    ),
    ToolSchema(
        name="run_script",
        description="Run a Home Assistant script",
        parameters=object_params(
            {
                "entity_id": _entity("The script entity ID"),
                "variables": {"type": "object", "description": "Variables to pass to the script"},
            },
            required=["entity_id"],
        ),
    ),
    # Vacuum
    ToolSchema(
        name="control_vacuum",
        description="Control a robot vacuum cleaner",
        parameters=object_params(
            {
                "entity_id": _entity("The vacuum entity ID"),
                "action": _choice(
                    "Vacuum control action",
                    "start",
                    "stop",
                    "pause",
                    "return_to_base",
                    "locate",
                    "set_fan_speed",
                ),
                "fan_speed": _choice(
                    "Fan speed setting (only for set_fan_speed action)",
                    "low",
                    "medium",
                    "high",
                    "turbo",
                ),
            },
            required=["entity_id", "action"],
        ),
    ),
    # Energy & notifications
    ToolSchema(
        name="get_energy_stats",
        description="Get energy consumption statistics",
        parameters=object_params(
            {"period": _choice("Time period for energy stats", "today", "week", "month")},
            required=["period"],
        ),
    ),
    ToolSchema(
        name="send_notification",
        description="Send a notification to devices via Home Assistant",
        parameters=object_params(
            {
                "message": {"type": "string", "description": "The notification message"},
                "title": {"type": "string", "description": "Optional notification title"},
                "target": _choice("Target device(s) for the notification", "mobile", "tv", "all"),
            },
            required=["message"],
        ),
    ),
]
