"""
Resource Handlers
Handles: exercise://exercises, exercise://categories, exercise://stats
"""

from datetime import datetime, timezone

from query import build_all_exercises_pipeline, build_exercise_stats_pipeline, exercise_filter
from tools.resources import CATEGORIES_URI, EXERCISES_URI, STATS_URI
from utils.serialization import to_json_text

from .exercise_handlers import exercise_summary

JSON_MIME_TYPE = "application/json"


def _contents(uri: str, payload: dict) -> dict:
    return {
        "contents": [
            {
                "uri": uri,
                "mimeType": JSON_MIME_TYPE,
                "text": to_json_text(payload),
            }
        ]
    }


async def read_exercises(repos) -> dict:
    exercises = await repos.content_items.aggregate(build_all_exercises_pipeline())
    return _contents(EXERCISES_URI, {
        "exercises": [exercise_summary(e) for e in exercises],
        "total": len(exercises),
    })


async def read_categories(repos) -> dict:
    categories = await repos.content_items.distinct("categories", exercise_filter())
    return _contents(CATEGORIES_URI, {
        "categories": categories,
        "total": len(categories),
    })


async def read_stats(repos) -> dict:
    stats = await repos.content_items.aggregate(build_exercise_stats_pipeline())
    categories = await repos.content_items.distinct("categories", exercise_filter())

    summary = stats[0] if stats else {}
    return _contents(STATS_URI, {
        "totalExercises": summary.get("total") or 0,
        "averageDuration": summary.get("avgDuration") or 0,
        "totalCategories": len(categories),
        "lastUpdated": datetime.now(timezone.utc).isoformat(),
    })
