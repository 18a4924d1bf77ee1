"""
Exercise Catalog MCP Tools
Read-only tools over published exercise content.
"""

from mcp import types

LANGUAGE_PROPERTY = {
    "type": "string",
    "description": "Locale (language_iso) used for title and description (default: en)",
    "default": "en"
}


def get_exercise_tools() -> list[types.Tool]:
    """
    Returns the exercise catalog tools available in every profile.

    Tools included:
    - get_exercises: Paginated listing with category/search filters
    - get_exercise_by_id: Full exercise document
    - search_exercises: Category, difficulty and duration filtering
    """
    return [
        _get_exercises_tool(),
        _get_exercise_by_id_tool(),
        _search_exercises_tool(),
    ]


def _get_exercises_tool() -> types.Tool:
    return types.Tool(
        name="get_exercises",
        description="Retrieve exercises from the database with optional filtering",
        inputSchema={
            "type": "object",
            "properties": {
                "limit": {
                    "type": "number",
                    "description": "Maximum number of exercises to return (default: 10)",
                    "default": 10
                },
                "skip": {
                    "type": "number",
                    "description": "Number of exercises to skip for pagination (default: 0)",
                    "default": 0
                },
                "category": {
                    "type": "string",
                    "description": "Filter by exercise category"
                },
                "search": {
                    "type": "string",
                    "description": "Search exercises by title or content"
                },
                "language": LANGUAGE_PROPERTY
            }
        }
    )


def _get_exercise_by_id_tool() -> types.Tool:
    return types.Tool(
        name="get_exercise_by_id",
        description="Retrieve a specific exercise by its ID",
        inputSchema={
            "type": "object",
            "properties": {
                "id": {
                    "type": "string",
                    "description": "The exercise ID to retrieve"
                },
                "language": LANGUAGE_PROPERTY
            },
            "required": ["id"]
        }
    )


def _search_exercises_tool() -> types.Tool:
    return types.Tool(
        name="search_exercises",
        description="Search exercises with advanced filtering options",
        inputSchema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query for exercise content"
                },
                "categories": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Array of category IDs to filter by"
                },
                "difficulty": {
                    "type": "string",
                    "description": "Filter by difficulty level"
                },
                "duration": {
                    "type": "object",
                    "properties": {
                        "min": {"type": "number"},
                        "max": {"type": "number"}
                    },
                    "description": "Filter by exercise duration range"
                },
                "language": LANGUAGE_PROPERTY
            }
        }
    )
