"""
Workout Program Handlers
Handles: create_workout_program

Workouts are inserted one by one, then the program that schedules them.
There is no transaction: if an insert fails part way, the workouts created
so far stay in the store and their ids are logged.
"""

import logging
from typing import Any

from mcp import types

from auth import UserContext
from models import (
    ContentItemDocument, ContentInput, ItemType, LocaleEntry,
    ScheduleEntry, WorkoutProgramCreate,
)
from utils.serialization import to_json_text
from utils.slugs import generate_slug

logger = logging.getLogger(__name__)


def validate_program_request(arguments: dict) -> WorkoutProgramCreate:
    """
    Check the structural invariants of a create_workout_program call.

    Raises:
        ValueError: missing sections, empty arrays, or a schedule entry whose
            workout_index does not point into workouts
    """
    program = arguments.get("program")
    workouts = arguments.get("workouts")
    schedule = arguments.get("program_schedule")

    if not program or workouts is None or schedule is None:
        raise ValueError(
            "Missing required fields: program, workouts, and program_schedule are required"
        )
    if not isinstance(workouts, list) or len(workouts) == 0:
        raise ValueError("At least one workout is required")
    if not isinstance(schedule, list) or len(schedule) == 0:
        raise ValueError("At least one schedule entry is required")

    for entry in schedule:
        index = entry.get("workout_index") if isinstance(entry, dict) else None
        if (
            isinstance(index, bool)
            or not isinstance(index, int)
            or index < 0
            or index >= len(workouts)
        ):
            raise ValueError(
                f"Invalid workout_index {index} in program_schedule: "
                f"must be between 0 and {len(workouts) - 1}"
            )

    return WorkoutProgramCreate.model_validate(arguments)


def build_content_document(
    item_type: ItemType,
    content: ContentInput,
    creator: str,
    **extra: Any,
) -> dict[str, Any]:
    """Apply content_items defaults to caller-supplied fields"""
    document = ContentItemDocument(
        item_type=item_type,
        slug=generate_slug(content.title),
        locale=[LocaleEntry(
            title=content.title,
            summary=content.summary,
            description=content.description,
        )],
        creator=content.creator or creator,
        categories=content.categories,
        is_premium=content.is_premium,
        content_metadata=content.content_metadata,
        **extra,
    )
    return document.to_document()


async def handle_create_workout_program(
    repos,
    arguments: dict,
    user: UserContext,
) -> list[types.TextContent]:
    request = validate_program_request(arguments)

    created: list[dict[str, Any]] = []
    try:
        for workout in request.workouts:
            document = build_content_document(
                ItemType.WORKOUT, workout, user.user_id, sections=workout.sections,
            )
            workout_id = await repos.content_items.create(document)
            created.append({
                "id": workout_id,
                "title": workout.title,
                "slug": document["slug"],
                "duration": workout.total_duration,
            })
            logger.info(f"Created workout {workout_id} ({workout.title})")
    except Exception:
        orphaned = [str(w["id"]) for w in created]
        logger.error(
            f"❌ Workout creation failed after {len(created)} of {len(request.workouts)}; "
            f"orphaned workout ids: {orphaned}"
        )
        raise

    schedule = [_schedule_item(entry, created) for entry in request.program_schedule]

    program_document = build_content_document(
        ItemType.PROGRAM, request.program, user.user_id, schedule=schedule,
    )
    try:
        program_id = await repos.content_items.create(program_document)
    except Exception:
        logger.error(
            f"❌ Program creation failed; orphaned workout ids: "
            f"{[str(w['id']) for w in created]}"
        )
        raise

    logger.info(f"✅ Created program {program_id} with {len(created)} workout(s)")

    result = {
        "success": True,
        "program": {
            "id": program_id,
            "title": request.program.title,
            "slug": program_document["slug"],
        },
        "workouts": [
            {"id": w["id"], "title": w["title"], "slug": w["slug"]} for w in created
        ],
        "schedule": schedule,
        "message": (
            f"Successfully created program '{request.program.title}' "
            f"with {len(created)} workout(s)"
        ),
    }
    return [types.TextContent(type="text", text=to_json_text(result))]


def _schedule_item(entry: ScheduleEntry, created: list[dict[str, Any]]) -> dict[str, Any]:
    workout = created[entry.workout_index]
    return {
        "day": entry.day,
        "workout": workout["id"],
        "duration": workout["duration"],
    }
