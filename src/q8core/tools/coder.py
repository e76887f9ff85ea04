"""GitHub and Supabase tool declarations used by the coder agent."""

from typing import List

from q8core.core.schema import (
    ToolSchema,
    object_params,
)

GITHUB_TOOLS: List[ToolSchema] = [
    ToolSchema(
        name="github_search_code",
        description="Search for code in GitHub repositories",
        parameters=object_params(
            {
                "query": {"type": "string", "description": "Search query"},
                "repo": {
                    "type": "string",
                    "description": "Repository in format owner/repo (optional)",
                },
                "language": {"type": "string", "description": "Programming language filter"},
            },
            required=["query"],
        ),
    ),
    ToolSchema(
        name="github_get_file",
        description="Get contents of a file from GitHub",
        parameters=object_params(
            {
                "repo": {"type": "string", "description": "Repository in format owner/repo"},
                "path": {"type": "string", "description": "File path"},
                "ref": {"type": "string", "description": "Branch or commit (optional)"},
            },
            required=["repo", "path"],
        ),
    ),
    ToolSchema(
        name="github_list_prs",
        description="List pull requests in a repository",
        parameters=object_params(
            {
                "repo": {"type": "string", "description": "Repository in format owner/repo"},
                "state": {
                    "type": "string",
                    "enum": ["open", "closed", "all"],
                    "description": "PR state filter",
                },
            },
            required=["repo"],
        ),
    ),
    ToolSchema(
        name="github_create_issue",
        description="Create a new GitHub issue",
        parameters=object_params(
            {
                "repo": {"type": "string", "description": "Repository in format owner/repo"},
                "title": {"type": "string", "description": "Issue title"},
                "body": {"type": "string", "description": "Issue body (markdown)"},
                "labels": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Labels to add",
                },
            },
            required=["repo", "title", "body"],
        ),
    ),
    ToolSchema(
        name="github_create_pr",
        description="Create a pull request",
        parameters=object_params(
            {
                "repo": {"type": "string", "description": "Repository in format owner/repo"},
                "title": {"type": "string", "description": "PR title"},
                "body": {"type": "string", "description": "PR description"},
                "head": {"type": "string", "description": "Branch containing changes"},
                "base": {"type": "string", "description": "Branch to merge into"},
            },
            required=["repo", "title", "head", "base"],
        ),
    ),
]

SUPABASE_TOOLS: List[ToolSchema] = [
    ToolSchema(
        name="supabase_run_sql",
        description="Execute a SQL query on Supabase (read-only queries preferred)",
        parameters=object_params(
            {"query": {"type": "string", "description": "SQL query to execute"}},
            required=["query"],
        ),
    ),
    ToolSchema(
        name="supabase_get_schema",
        description="Get database schema information",
        parameters=object_params(
            {"table": {"type": "string", "description": "Specific table name (optional)"}}
        ),
    ),
    ToolSchema(
        name="supabase_list_tables",
        description="List all tables in the database",
        parameters=object_params(
            {"schema": {"type": "string", "description": "Schema name (default: public)"}}
        ),
    ),
    ToolSchema(
        name="supabase_vector_search",
        description="Perform semantic search using pgvector",
        parameters=object_params(
            {
                "query": {"type": "string", "description": "Search query text"},
                "table": {"type": "string", "description": "Table with embeddings"},
                "limit": {"type": "number", "description": "Number of results"},
            },
            required=["query", "table"],
        ),
    ),
]
