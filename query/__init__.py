"""
Aggregation pipeline builders for exercise content.

Handlers describe what they want (locale, category, search text, page);
the builders here turn that into MongoDB pipelines.
"""

from .pipelines import (
    DEFAULT_LANGUAGE,
    exercise_filter,
    build_exercise_list_pipeline,
    build_exercise_search_pipeline,
    build_all_exercises_pipeline,
    build_exercise_stats_pipeline,
)

__all__ = [
    'DEFAULT_LANGUAGE',
    'exercise_filter',
    'build_exercise_list_pipeline',
    'build_exercise_search_pipeline',
    'build_all_exercises_pipeline',
    'build_exercise_stats_pipeline',
]
