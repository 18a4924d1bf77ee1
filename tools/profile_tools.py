"""
Fitness Profile MCP Tools
"""

from mcp import types


def get_profile_tools() -> list[types.Tool]:
    """Returns the user-scoped profile tools (authenticated profile only)."""
    return [_get_user_fitness_profile_tool()]


def _get_user_fitness_profile_tool() -> types.Tool:
    return types.Tool(
        name="get_user_fitness_profile",
        description=(
            "Get the authenticated user's fitness profile: target, gender, weight, "
            "fitness level, age, height, target weight, BMI, BMR and whether "
            "physical limitations were reported. The user is taken from the bearer token."
        ),
        inputSchema={
            "type": "object",
            "properties": {}
        }
    )
