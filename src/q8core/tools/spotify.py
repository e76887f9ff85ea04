"""Spotify playback tool declarations."""

from typing import List

from q8core.core.schema import (
    ToolSchema,
    object_params,
)

_DEVICE = {"type": "string", "description": "Target device ID (optional)"}

SPOTIFY_TOOLS: List[ToolSchema] = [
    ToolSchema(
        name="spotify_search",
        description="Search Spotify for tracks, albums, artists or playlists",
        parameters=object_params(
            {
                "query": {"type": "string", "description": "Search query"},
                "type": {
                    "type": "string",
                    "enum": ["track", "album", "artist", "playlist"],
                    "description": "Type of item to search for",
                },
                "limit": {"type": "number", "description": "Number of results"},
            },
            required=["query"],
        ),
    ),
    ToolSchema(
        name="spotify_now_playing",
        description="Get the currently playing track",
    ),
    ToolSchema(
        name="spotify_play_pause",
        description="Play, pause or toggle playback",
        parameters=object_params(
            {
                "action": {
                    "type": "string",
                    "enum": ["play", "pause", "toggle"],
                    "description": "Playback action",
                },
                "uri": {
                    "type": "string",
                    "description": "Spotify URI to start playing (optional)",
                },
                "deviceId": _DEVICE,
            }
        ),
    ),
    ToolSchema(
        name="spotify_next_previous",
        description="Skip to the next or previous track",
        parameters=object_params(
            {
                "direction": {
                    "type": "string",
                    "enum": ["next", "previous"],
                    "description": "Skip direction",
                },
                "deviceId": _DEVICE,
            },
            required=["direction"],
        ),
    ),
    ToolSchema(
        name="spotify_add_to_queue",
        description="Add a track to the playback queue",
        parameters=object_params(
            {
                "uri": {"type": "string", "description": "Spotify track URI"},
                "deviceId": _DEVICE,
            },
            required=["uri"],
        ),
    ),
    ToolSchema(
        name="spotify_get_devices",
        description="List available Spotify playback devices",
    ),
    ToolSchema(
        name="spotify_set_volume",
        description="Set the playback volume",
        parameters=object_params(
            {
                "volume": {"type": "number", "description": "Volume percentage (0-100)"},
                "deviceId": _DEVICE,
            },
            required=["volume"],
        ),
    ),
]
