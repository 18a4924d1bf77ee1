"""
MCP Tools Package

Tool catalog per deployment profile:
- public: exercise catalog tools
- authenticated: exercise catalog + fitness profile + program building
"""

from mcp import types

from config import ServerProfile
from .exercise_tools import get_exercise_tools
from .program_tools import get_program_tools
from .profile_tools import get_profile_tools
from .resources import get_resource_catalog


def get_tool_catalog(profile: ServerProfile) -> list[types.Tool]:
    """Get the MCP tools exposed by a deployment profile."""
    tools = list(get_exercise_tools())

    if profile is ServerProfile.AUTHENTICATED:
        tools.extend([
            *get_profile_tools(),
            *get_program_tools(),
        ])

    return tools


def tool_descriptor(tool: types.Tool) -> dict:
    """Convert an MCP Tool object to the dict served by tools/list"""
    return {
        "name": tool.name,
        "description": tool.description,
        "inputSchema": tool.inputSchema
    }


__all__ = [
    'get_tool_catalog',
    'tool_descriptor',
    'get_exercise_tools',
    'get_program_tools',
    'get_profile_tools',
    'get_resource_catalog',
]
