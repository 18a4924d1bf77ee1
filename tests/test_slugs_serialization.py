"""
Tests for slug generation and JSON text rendering
"""

import json
import re
from datetime import datetime, timezone

from bson import ObjectId

from utils.serialization import to_json_text
from utils.slugs import generate_slug, slugify


class TestSlugs:

    def test_slugify(self):
        assert slugify("Full Body Workout A!") == "full-body-workout-a"
        assert slugify("  HIIT -- 20 min  ") == "hiit-20-min"

    def test_generate_slug_suffix(self):
        assert re.match(r"^full-body-a-[0-9a-f]{6}$", generate_slug("Full Body A"))

    def test_generate_slug_is_unique(self):
        assert generate_slug("Same") != generate_slug("Same")

    def test_untitled(self):
        assert generate_slug("!!!").startswith("item-")


class TestToJsonText:

    def test_bson_values(self):
        oid = ObjectId("507f1f77bcf86cd799439011")
        text = to_json_text({"id": oid, "at": datetime(2025, 1, 1, tzinfo=timezone.utc)})
        assert json.loads(text) == {"id": "507f1f77bcf86cd799439011", "at": "2025-01-01T00:00:00+00:00"}

    def test_indented(self):
        assert to_json_text({"a": 1}) == '{\n  "a": 1\n}'
