"""URL slug generation for content items"""

import re
import uuid

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """'Full Body Workout A!' -> 'full-body-workout-a'"""
    return _NON_ALNUM.sub("-", text.lower()).strip("-")


def generate_slug(title: str) -> str:
    """Slug with a short random suffix so equal titles do not collide"""
    base = slugify(title) or "item"
    return f"{base}-{uuid.uuid4().hex[:6]}"
