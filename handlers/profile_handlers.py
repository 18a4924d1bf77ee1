"""
Fitness Profile Handlers
Handles: get_user_fitness_profile
"""

import logging

from bson import ObjectId
from mcp import types

from auth import UserContext
from utils.fitness_metrics import calculate_age, calculate_bmi, calculate_bmr
from utils.serialization import to_json_text

logger = logging.getLogger(__name__)


def _profile_filter(user_id: str) -> dict:
    if ObjectId.is_valid(user_id):
        return {"user_id": {"$in": [user_id, ObjectId(user_id)]}}
    return {"user_id": user_id}


def summarize_profile(profile: dict) -> dict:
    """Reduce a stored profile to the fields an assistant plans with"""
    age = calculate_age(profile.get("date_of_birth"))
    current_weight = profile.get("current_weight") or profile.get("weight")
    height = profile.get("height")

    return {
        "fitness_target": profile.get("fitness_target"),
        "gender": profile.get("gender"),
        "current_weight": current_weight,
        "fitness_level": profile.get("fitness_level") or profile.get("activity_level"),
        "age": age,
        "height": height,
        "target_weight": profile.get("target_weight"),
        "bmi": calculate_bmi(current_weight, height),
        "bmr": calculate_bmr(current_weight, height, age, profile.get("gender")),
        "physical_limitations": bool(
            profile.get("physical_limitations") or profile.get("medical_conditions")
        ),
    }


async def handle_get_user_fitness_profile(
    repos,
    arguments: dict,
    user: UserContext,
) -> list[types.TextContent]:
    profile = await repos.fitness_profiles.find_one(_profile_filter(user.user_id))
    if not profile:
        raise ValueError(f"Fitness profile not found for user {user.user_id}")

    logger.info(f"Loaded fitness profile for user {user.user_id}")
    return [types.TextContent(type="text", text=to_json_text(summarize_profile(profile)))]
