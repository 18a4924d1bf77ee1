"""
Workout Program MCP Tools
Tools used by an assistant to assemble training programs for the caller.
"""

from mcp import types

_CONTENT_PROPERTIES = {
    "title": {"type": "string", "description": "Display title (English locale)"},
    "summary": {"type": "string", "description": "One-line summary"},
    "description": {"type": "string", "description": "Long description"},
    "creator": {
        "type": "string",
        "description": "Creator ID (defaults to the authenticated user)"
    },
    "categories": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Category IDs"
    },
    "is_premium": {"type": "boolean", "default": False},
    "content_metadata": {
        "type": "object",
        "description": "Free-form metadata (difficulty, duration_weeks, total_duration in seconds, ...)"
    }
}


def get_program_tools() -> list[types.Tool]:
    """
    Returns the program-building tools (authenticated profile only).

    Tools included:
    - list_all_exercises: Compact index of every exercise to pick from
    - create_workout_program: Create workouts and a program scheduling them
    """
    return [
        _list_all_exercises_tool(),
        _create_workout_program_tool(),
    ]


def _list_all_exercises_tool() -> types.Tool:
    return types.Tool(
        name="list_all_exercises",
        description="List every available exercise (id, slug, title, difficulty, duration) for building workouts",
        inputSchema={
            "type": "object",
            "properties": {
                "category": {
                    "type": "string",
                    "description": "Only list exercises in this category"
                },
                "language": {
                    "type": "string",
                    "description": "Locale (language_iso) used for titles (default: en)",
                    "default": "en"
                }
            }
        }
    )


def _create_workout_program_tool() -> types.Tool:
    return types.Tool(
        name="create_workout_program",
        description="""Create a workout program together with the workouts it schedules.

Workouts are created first, then the program referencing them. The schedule
refers to workouts by their position in the `workouts` array (workout_index,
zero-based).

EXAMPLE:
{
  "program": {"title": "Beginner Program", "summary": "...", "description": "..."},
  "workouts": [
    {"title": "Full Body A", "content_metadata": {"total_duration": 1800},
     "sections": [{"label": "Main", "position": 1,
                   "items": [{"_id": "<exercise id>", "position": 1, "easy": 45, "medium": 60, "hard": 75}]}]}
  ],
  "program_schedule": [{"day": 1, "workout_index": 0}]
}""",
        inputSchema={
            "type": "object",
            "properties": {
                "program": {
                    "type": "object",
                    "properties": dict(_CONTENT_PROPERTIES),
                    "required": ["title"]
                },
                "workouts": {
                    "type": "array",
                    "minItems": 1,
                    "items": {
                        "type": "object",
                        "properties": {
                            **_CONTENT_PROPERTIES,
                            "sections": {
                                "type": "array",
                                "items": {"type": "object"},
                                "description": "Workout sections with their exercise items"
                            }
                        },
                        "required": ["title"]
                    }
                },
                "program_schedule": {
                    "type": "array",
                    "minItems": 1,
                    "items": {
                        "type": "object",
                        "properties": {
                            "day": {"type": "number", "description": "Day number, starting at 1"},
                            "workout_index": {
                                "type": "number",
                                "description": "Index into the workouts array"
                            }
                        },
                        "required": ["day", "workout_index"]
                    }
                }
            },
            "required": ["program", "workouts", "program_schedule"]
        }
    )
