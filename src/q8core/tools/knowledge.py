"""Document knowledge-base tools shared by agents that answer from uploaded files."""

from typing import List

from q8core.core.schema import (
    ToolSchema,
    object_params,
)

KNOWLEDGE_TOOLS: List[ToolSchema] = [
    ToolSchema(
        name="search_knowledge",
        description=(
            "Search the user's uploaded documents and knowledge base. Use this when the user asks "
            "about their files, notes or documents."
        ),
        parameters=object_params(
            {
                "query": {"type": "string", "description": "What to search for"},
                "fileTypes": {
                    "type": "array",
                    "items": {
                        "type": "string",
                        "enum": ["pdf", "docx", "txt", "md", "csv", "xlsx"],
                    },
                    "description": "Restrict the search to these file types",
                },
                "limit": {"type": "number", "description": "Maximum number of results"},
            },
            required=["query"],
        ),
    ),
    ToolSchema(
        name="list_documents",
        description="List the documents the user has uploaded",
        parameters=object_params(
            {
                "scope": {
                    "type": "string",
                    "enum": ["global", "conversation"],
                    "description": "All documents, or only those attached to this conversation",
                }
            }
        ),
    ),
]
