"""
Handler Registry - Maps tool names and resource URIs to handler functions

Tool handlers are async functions handle_<tool_name>(repos, arguments), or
handle_<tool_name>(repos, arguments, user) when the tool acts on behalf of
the caller. Resource readers take only the repository container.

Registry entries are (handler_function, needs_user, profiles) tuples; a
tool is only callable in the profiles it is listed for.

Usage:
    from handlers import get_handler

    handler_info = get_handler(tool_name, profile)
    if handler_info:
        handler, needs_user, _ = handler_info
        result = await handler(repos, arguments, user) if needs_user else await handler(repos, arguments)
"""

from typing import Callable, Optional, Tuple

from config import ServerProfile
from tools.resources import CATEGORIES_URI, EXERCISES_URI, STATS_URI

from . import exercise_handlers
from . import profile_handlers
from . import program_handlers
from . import resource_handlers

ALL_PROFILES = frozenset(ServerProfile)
AUTHENTICATED_ONLY = frozenset({ServerProfile.AUTHENTICATED})


# Handler registry: {tool_name: (handler_function, needs_user, profiles)}
HANDLER_REGISTRY = {
    # Exercise catalog (read only)
    "get_exercises": (
        exercise_handlers.handle_get_exercises,
        False,
        ALL_PROFILES
    ),
    "get_exercise_by_id": (
        exercise_handlers.handle_get_exercise_by_id,
        False,
        ALL_PROFILES
    ),
    "search_exercises": (
        exercise_handlers.handle_search_exercises,
        False,
        ALL_PROFILES
    ),

    # User scoped
    "get_user_fitness_profile": (
        profile_handlers.handle_get_user_fitness_profile,
        True,  # needs_user
        AUTHENTICATED_ONLY
    ),

    # Program building
    "list_all_exercises": (
        exercise_handlers.handle_list_all_exercises,
        False,
        AUTHENTICATED_ONLY
    ),
    "create_workout_program": (
        program_handlers.handle_create_workout_program,
        True,  # needs_user (default creator)
        AUTHENTICATED_ONLY
    ),
}


RESOURCE_REGISTRY = {
    EXERCISES_URI: resource_handlers.read_exercises,
    CATEGORIES_URI: resource_handlers.read_categories,
    STATS_URI: resource_handlers.read_stats,
}


def get_handler(
    tool_name: str,
    profile: Optional[ServerProfile] = None,
) -> Optional[Tuple[Callable, bool, frozenset]]:
    """
    Get handler function and its requirements for a tool.

    Returns:
        Tuple of (handler_function, needs_user, profiles) or None when the
        tool is unknown or not exposed by `profile`
    """
    handler_info = HANDLER_REGISTRY.get(tool_name)
    if handler_info is None:
        return None
    if profile is not None and profile not in handler_info[2]:
        return None
    return handler_info


def get_resource_reader(uri: str) -> Optional[Callable]:
    return RESOURCE_REGISTRY.get(uri)


def list_all_handlers() -> list[str]:
    """Get list of all registered tool names"""
    return list(HANDLER_REGISTRY.keys())


__all__ = [
    'get_handler',
    'get_resource_reader',
    'list_all_handlers',
    'HANDLER_REGISTRY',
    'RESOURCE_REGISTRY',
]
