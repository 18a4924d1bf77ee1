"""
Exercise Handlers
Handles: get_exercises, get_exercise_by_id, search_exercises, list_all_exercises
"""

import logging
from typing import Any, Optional

from bson import ObjectId
from mcp import types

from query import (
    DEFAULT_LANGUAGE,
    build_exercise_list_pipeline,
    build_exercise_search_pipeline,
    exercise_filter,
)
from utils.serialization import to_json_text

logger = logging.getLogger(__name__)

UNTITLED = "Untitled Exercise"


def _integer_argument(arguments: dict, name: str, default: int, minimum: int, meaning: str) -> int:
    value = arguments.get(name)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
        raise ValueError(f"{name} must be a {meaning} integer")
    if value < minimum:
        raise ValueError(f"{name} must be a {meaning} integer")
    return int(value)


def _language(arguments: dict) -> str:
    return arguments.get("language") or DEFAULT_LANGUAGE


def pick_locale(document: dict, language: str = DEFAULT_LANGUAGE) -> dict:
    """Return the locale[] entry for `language`, or an empty dict"""
    for entry in document.get("locale") or []:
        if isinstance(entry, dict) and entry.get("language_iso") == language:
            return entry
    return {}


def _document_id(value: str) -> Any:
    return ObjectId(value) if ObjectId.is_valid(value) else value


def exercise_summary(exercise: dict) -> dict:
    """Shape one aggregated exercise for tool output"""
    return {
        "id": exercise.get("_id"),
        "slug": exercise.get("slug"),
        "title": exercise.get("title") or UNTITLED,
        "description": exercise.get("description"),
        "media": exercise.get("media"),
        "content_metadata": exercise.get("content_metadata"),
        "published_at": exercise.get("published_at"),
        "categories": exercise.get("categories"),
    }


def _text(payload: dict) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=to_json_text(payload))]


async def handle_get_exercises(repos, arguments: dict) -> list[types.TextContent]:
    """Paginated exercise listing, newest first"""
    limit = _integer_argument(arguments, "limit", 10, 1, "positive")
    skip = _integer_argument(arguments, "skip", 0, 0, "non-negative")

    pipeline = build_exercise_list_pipeline(
        limit=limit,
        skip=skip,
        category=arguments.get("category"),
        search=arguments.get("search"),
        language=_language(arguments),
    )
    logger.info(f"get_exercises limit={limit} skip={skip}")

    try:
        exercises = await repos.content_items.aggregate(pipeline)
    except Exception as e:
        raise RuntimeError(f"Failed to retrieve exercises: {e}") from e

    if not exercises:
        logger.info("get_exercises matched no documents")

    return _text({
        "exercises": [exercise_summary(e) for e in exercises],
        "total": len(exercises),
        "limit": limit,
        "skip": skip,
    })


async def handle_get_exercise_by_id(repos, arguments: dict) -> list[types.TextContent]:
    exercise_id = arguments.get("id")
    if not exercise_id:
        raise ValueError("Exercise ID is required")

    query = exercise_filter()
    query["_id"] = _document_id(str(exercise_id))
    exercise = await repos.content_items.find_one(query)
    if not exercise:
        raise ValueError("Exercise not found")

    locale = pick_locale(exercise, _language(arguments))
    return _text({
        "exercise": {
            "id": exercise.get("_id"),
            "slug": exercise.get("slug"),
            "title": locale.get("title") or UNTITLED,
            "description": locale.get("description"),
            "locale": locale or None,
            "categories": exercise.get("categories"),
            "creator": exercise.get("creator"),
            "published_at": exercise.get("published_at"),
            "content_type": exercise.get("content_type"),
            "content_metadata": exercise.get("content_metadata"),
            "media": exercise.get("media"),
            "settings": exercise.get("settings"),
            "sections": exercise.get("sections"),
        }
    })


async def handle_search_exercises(repos, arguments: dict) -> list[types.TextContent]:
    """Category, difficulty, duration and text filtering over exercises"""
    duration: Optional[dict] = arguments.get("duration")
    if duration is not None and not isinstance(duration, dict):
        raise ValueError("duration must be an object with optional min and max")

    pipeline = build_exercise_search_pipeline(
        query=arguments.get("query"),
        categories=arguments.get("categories"),
        difficulty=arguments.get("difficulty"),
        duration=duration,
        language=_language(arguments),
    )

    try:
        exercises = await repos.content_items.aggregate(pipeline)
    except Exception as e:
        raise RuntimeError(f"Failed to search exercises: {e}") from e

    results = []
    for exercise in exercises:
        summary = exercise_summary(exercise)
        summary["difficulty"] = exercise.get("difficulty")
        summary["duration"] = exercise.get("duration")
        results.append(summary)

    return _text({
        "exercises": results,
        "total": len(results),
        "searchQuery": arguments,
    })


async def handle_list_all_exercises(repos, arguments: dict) -> list[types.TextContent]:
    """Compact index of every exercise, used when assembling workouts"""
    language = _language(arguments)
    exercises = await repos.content_items.find(
        exercise_filter(arguments.get("category")),
        sort=[("published_at", -1)],
    )

    index = []
    for exercise in exercises:
        settings = exercise.get("settings") or {}
        metadata = exercise.get("content_metadata") or {}
        index.append({
            "id": exercise.get("_id"),
            "slug": exercise.get("slug"),
            "title": pick_locale(exercise, language).get("title") or UNTITLED,
            "difficulty": settings.get("difficulty", metadata.get("difficulty")),
            "duration": settings.get("duration", metadata.get("duration")),
            "categories": exercise.get("categories"),
        })

    return _text({"exercises": index, "total": len(index)})
