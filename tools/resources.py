"""
MCP resource descriptors.

Kept as plain dicts: the exercise:// URIs are served exactly as written.
"""

EXERCISES_URI = "exercise://exercises"
CATEGORIES_URI = "exercise://categories"
STATS_URI = "exercise://stats"

RESOURCE_DESCRIPTORS = (
    {
        "uri": EXERCISES_URI,
        "name": "All Exercises",
        "description": "Complete list of all published exercises",
        "mimeType": "application/json"
    },
    {
        "uri": CATEGORIES_URI,
        "name": "Exercise Categories",
        "description": "List of all exercise categories",
        "mimeType": "application/json"
    },
    {
        "uri": STATS_URI,
        "name": "Exercise Statistics",
        "description": "Statistics about exercises in the database",
        "mimeType": "application/json"
    },
)


def get_resource_catalog() -> list[dict]:
    return [dict(resource) for resource in RESOURCE_DESCRIPTORS]
