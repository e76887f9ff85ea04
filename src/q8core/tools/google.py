"""Google Workspace tool declarations: Gmail, Calendar, Drive and YouTube."""

from typing import List

from q8core.core.schema import (
    ToolSchema,
    object_params,
)

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

GOOGLE_TOOLS: List[ToolSchema] = [
    # Gmail
    ToolSchema(
        name="gmail_list_messages",
        description="List email messages from Gmail inbox",
        parameters=object_params(
            {
                "query": {
                    "type": "string",
                    "description": "Gmail search query (e.g., 'is:unread', 'from:bob@example.com')",
                },
                "maxResults": {"type": "number", "description": "Maximum number of messages"},
                "labelIds": {**_STRING_LIST, "description": "Filter by label IDs"},
            }
        ),
    ),
    ToolSchema(
        name="gmail_get_message",
        description="Get full content of a specific email",
        parameters=object_params(
            {"messageId": {"type": "string", "description": "The message ID"}},
            required=["messageId"],
        ),
    ),
    ToolSchema(
        name="gmail_send_message",
        description="Send an email",
        parameters=object_params(
            {
                "to": {"type": "string", "description": "Recipient email address"},
                "subject": {"type": "string", "description": "Email subject"},
                "body": {"type": "string", "description": "Email body (plain text or HTML)"},
                "cc": {"type": "string", "description": "CC recipients"},
                "bcc": {"type": "string", "description": "BCC recipients"},
            },
            required=["to", "subject", "body"],
        ),
    ),
    ToolSchema(
        name="gmail_create_draft",
        description="Create an email draft",
        parameters=object_params(
            {
                "to": {"type": "string", "description": "Recipient email address"},
                "subject": {"type": "string", "description": "Email subject"},
                "body": {"type": "string", "description": "Email body"},
            },
            required=["to", "subject", "body"],
        ),
    ),
    # Calendar
    ToolSchema(
        name="calendar_list_events",
        description="List upcoming calendar events",
        parameters=object_params(
            {
                "calendarId": {
                    "type": "string",
                    "description": "Calendar ID (default: primary)",
                },
                "timeMin": {"type": "string", "description": "Start time (ISO 8601)"},
                "timeMax": {"type": "string", "description": "End time (ISO 8601)"},
                "maxResults": {"type": "number", "description": "Maximum number of events"},
            }
        ),
    ),
    ToolSchema(
        name="calendar_create_event",
        description="Create a new calendar event",
        parameters=object_params(
            {
                "summary": {"type": "string", "description": "Event title"},
                "start": {"type": "string", "description": "Start time (ISO 8601)"},
                "end": {"type": "string", "description": "End time (ISO 8601)"},
                "description": {"type": "string", "description": "Event description"},
                "location": {"type": "string", "description": "Event location"},
                "attendees": {**_STRING_LIST, "description": "Attendee email addresses"},
            },
            required=["summary", "start", "end"],
        ),
    ),
    ToolSchema(
        name="calendar_update_event",
        description="Update an existing calendar event",
        parameters=object_params(
            {
                "eventId": {"type": "string", "description": "Event ID to update"},
                "summary": {"type": "string", "description": "New event title"},
                "start": {"type": "string", "description": "New start time"},
                "end": {"type": "string", "description": "New end time"},
            },
            required=["eventId"],
        ),
    ),
    ToolSchema(
        name="calendar_delete_event",
        description="Delete a calendar event",
        parameters=object_params(
            {"eventId": {"type": "string", "description": "Event ID to delete"}},
            required=["eventId"],
        ),
    ),
    # Drive
    ToolSchema(
        name="drive_search_files",
        description="Search for files in Google Drive",
        parameters=object_params(
            {
                "query": {"type": "string", "description": "Search query"},
                "mimeType": {"type": "string", "description": "Filter by MIME type"},
                "maxResults": {"type": "number", "description": "Maximum results"},
            },
            required=["query"],
        ),
    ),
    ToolSchema(
        name="drive_get_file",
        description="Get file metadata and content from Google Drive",
        parameters=object_params(
            {
                "fileId": {"type": "string", "description": "File ID"},
                "includeContent": {
                    "type": "boolean",
                    "description": "Whether to include file content",
                },
            },
            required=["fileId"],
        ),
    ),
    # YouTube
    ToolSchema(
        name="youtube_search",
        description="Search YouTube videos",
        parameters=object_params(
            {
                "query": {"type": "string", "description": "Search query"},
                "maxResults": {"type": "number", "description": "Maximum results"},
            },
            required=["query"],
        ),
    ),
]
