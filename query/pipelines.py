"""
Pipeline construction for content_items exercise queries.

Every exercise pipeline follows the same shape:
    $match (exercise with content_metadata + filters)
    $addFields localeEntry (the locale[] entry for the requested language)
    $project (flattened title/description)
    $sort published_at desc
    optional $skip / $limit

Search terms are escaped before being used as regular expressions.
"""

import re
from typing import Any, Optional

DEFAULT_LANGUAGE = "en"

# Fields every exercise summary carries
SUMMARY_FIELDS = {
    "_id": 1,
    "slug": 1,
    "title": "$localeEntry.title",
    "description": "$localeEntry.description",
    "media": 1,
    "content_metadata": 1,
    "published_at": 1,
    "categories": 1,
}


def exercise_filter(category: Optional[str] = None) -> dict[str, Any]:
    """Base filter selecting exercise documents that carry content_metadata"""
    match: dict[str, Any] = {
        "item_type": "exercise",
        "content_metadata": {"$exists": True, "$ne": None},
    }
    if category:
        match["categories"] = category
    return match


def _regex(term: str) -> dict[str, str]:
    return {"$regex": re.escape(term), "$options": "i"}


def locale_stage(language: str = DEFAULT_LANGUAGE) -> dict[str, Any]:
    """$addFields stage exposing the locale entry for `language` as localeEntry"""
    return {
        "$addFields": {
            "localeEntry": {
                "$arrayElemAt": [
                    {
                        "$filter": {
                            "input": "$locale",
                            "cond": {"$eq": ["$$this.language_iso", language]},
                        }
                    },
                    0,
                ]
            }
        }
    }


def _projection(**extra: Any) -> dict[str, Any]:
    return {"$project": {**SUMMARY_FIELDS, **extra}}


NEWEST_FIRST = {"$sort": {"published_at": -1}}


def build_exercise_list_pipeline(
    limit: int = 10,
    skip: int = 0,
    category: Optional[str] = None,
    search: Optional[str] = None,
    language: str = DEFAULT_LANGUAGE,
) -> list[dict[str, Any]]:
    """Paginated exercise listing (get_exercises)"""
    match = exercise_filter(category)
    if search:
        # Matches any locale, not only the requested one
        match["$or"] = [
            {"locale.title": _regex(search)},
            {"locale.description": _regex(search)},
        ]

    pipeline = [
        {"$match": match},
        locale_stage(language),
        _projection(),
        NEWEST_FIRST,
    ]
    if skip > 0:
        pipeline.append({"$skip": skip})
    pipeline.append({"$limit": limit})
    return pipeline


def build_exercise_search_pipeline(
    query: Optional[str] = None,
    categories: Optional[list[str]] = None,
    difficulty: Optional[str] = None,
    duration: Optional[dict[str, Any]] = None,
    language: str = DEFAULT_LANGUAGE,
) -> list[dict[str, Any]]:
    """Filtered exercise search (search_exercises)"""
    match = exercise_filter()
    if categories:
        match["categories"] = {"$in": list(categories)}
    if difficulty:
        match["settings.difficulty"] = difficulty
    if duration:
        bounds = {}
        if duration.get("min") is not None:
            bounds["$gte"] = duration["min"]
        if duration.get("max") is not None:
            bounds["$lte"] = duration["max"]
        if bounds:
            match["settings.duration"] = bounds

    pipeline: list[dict[str, Any]] = [{"$match": match}, locale_stage(language)]

    if query:
        pipeline.append({
            "$match": {
                "$or": [
                    {"localeEntry.title": _regex(query)},
                    {"localeEntry.description": _regex(query)},
                    {"localeEntry.instructions": _regex(query)},
                ]
            }
        })

    pipeline.append(_projection(
        difficulty="$settings.difficulty",
        duration="$settings.duration",
    ))
    pipeline.append(NEWEST_FIRST)
    return pipeline


def build_all_exercises_pipeline(language: str = DEFAULT_LANGUAGE) -> list[dict[str, Any]]:
    """Unpaginated listing backing the exercise://exercises resource"""
    return [
        {"$match": exercise_filter()},
        locale_stage(language),
        _projection(),
        NEWEST_FIRST,
    ]


def build_exercise_stats_pipeline() -> list[dict[str, Any]]:
    """Count and average duration across all exercises (exercise://stats)"""
    return [
        {"$match": exercise_filter()},
        {
            "$group": {
                "_id": None,
                "total": {"$sum": 1},
                "avgDuration": {"$avg": "$settings.duration"},
            }
        },
    ]
