"""
Workout Program Creation Tests
Validation rules, document defaults and the partial-failure behavior.
"""

import json
import logging

import pytest

from auth import UserContext
from handlers.program_handlers import handle_create_workout_program, validate_program_request

USER = UserContext(user_id="user-1")


def program_arguments(**overrides):
    arguments = {
        "program": {
            "title": "Test Beginner Program",
            "summary": "A test program for beginners",
            "description": "Four weeks of full body training",
            "categories": ["beginner"],
            "content_metadata": {"duration_weeks": "4", "difficulty": "easy"},
        },
        "workouts": [
            {
                "title": "Full Body A",
                "creator": "coach-7",
                "content_metadata": {"total_duration": 1800},
                "sections": [{
                    "label": "Main",
                    "position": 1,
                    "items": [{"_id": "exercise-1", "position": 1, "easy": 45, "medium": 60, "hard": 75}],
                }],
            },
            {
                "title": "Full Body B",
                "content_metadata": {},
            },
        ],
        "program_schedule": [
            {"day": 1, "workout_index": 0},
            {"day": 3, "workout_index": 1},
            {"day": 5, "workout_index": 0},
        ],
    }
    arguments.update(overrides)
    return arguments


class TestValidation:

    @pytest.mark.parametrize("missing", ["program", "workouts", "program_schedule"])
    def test_missing_fields(self, missing):
        arguments = program_arguments()
        del arguments[missing]
        with pytest.raises(ValueError, match="Missing required fields: program, workouts, and program_schedule are required"):
            validate_program_request(arguments)

    def test_no_workouts(self):
        with pytest.raises(ValueError, match="At least one workout is required"):
            validate_program_request(program_arguments(workouts=[]))

    def test_no_schedule(self):
        with pytest.raises(ValueError, match="At least one schedule entry is required"):
            validate_program_request(program_arguments(program_schedule=[]))

    @pytest.mark.parametrize("index", [5, 2, -1, None, "0"])
    def test_workout_index_out_of_range(self, index):
        arguments = program_arguments(program_schedule=[{"day": 1, "workout_index": index}])
        with pytest.raises(ValueError, match=f"Invalid workout_index {index} in program_schedule: must be between 0 and 1"):
            validate_program_request(arguments)

    def test_valid_request(self):
        request = validate_program_request(program_arguments())
        assert len(request.workouts) == 2
        assert request.workouts[0].total_duration == 1800
        assert request.workouts[1].total_duration == 0


class TestCreateWorkoutProgram:

    @pytest.mark.asyncio
    async def test_creates_workouts_then_program(self, repos):
        result = await handle_create_workout_program(repos, program_arguments(), USER)
        data = json.loads(result[0].text)

        created = repos.content_items.created
        assert [d["item_type"] for d in created] == ["workout", "workout", "program"]

        workout_a, workout_b, program = created
        assert workout_a["creator"] == "coach-7"
        assert workout_b["creator"] == "user-1"
        assert workout_a["sections"][0]["label"] == "Main"
        assert workout_a["locale"] == [{
            "language_iso": "en",
            "title": "Full Body A",
            "summary": "",
            "description": "",
        }]
        assert workout_a["status"] == "published"
        assert workout_a["is_premium"] is False
        assert workout_a["slug"].startswith("full-body-a-")

        assert program["schedule"] == [
            {"day": 1, "workout": workout_a["_id"], "duration": 1800},
            {"day": 3, "workout": workout_b["_id"], "duration": 0},
            {"day": 5, "workout": workout_a["_id"], "duration": 1800},
        ]
        assert program["categories"] == ["beginner"]

        assert data["success"] is True
        assert data["program"] == {
            "id": str(program["_id"]),
            "title": "Test Beginner Program",
            "slug": program["slug"],
        }
        assert [w["title"] for w in data["workouts"]] == ["Full Body A", "Full Body B"]
        assert data["schedule"][1] == {"day": 3, "workout": str(workout_b["_id"]), "duration": 0}
        assert "2 workout(s)" in data["message"]

    @pytest.mark.asyncio
    async def test_invalid_request_creates_nothing(self, repos):
        arguments = program_arguments(program_schedule=[{"day": 1, "workout_index": 5}])
        with pytest.raises(ValueError, match="Invalid workout_index 5"):
            await handle_create_workout_program(repos, arguments, USER)
        assert repos.content_items.created == []

    @pytest.mark.asyncio
    async def test_partial_failure_leaves_orphans(self, repos, caplog):
        repos.content_items.fail_create_after = 1
        with caplog.at_level(logging.ERROR):
            with pytest.raises(RuntimeError, match="insert_one failed"):
                await handle_create_workout_program(repos, program_arguments(), USER)

        assert len(repos.content_items.created) == 1
        orphan_id = str(repos.content_items.created[0]["_id"])
        assert orphan_id in caplog.text
        assert "orphaned" in caplog.text

    @pytest.mark.asyncio
    async def test_program_insert_failure_leaves_workouts(self, repos, caplog):
        repos.content_items.fail_create_after = 2
        with caplog.at_level(logging.ERROR):
            with pytest.raises(RuntimeError):
                await handle_create_workout_program(repos, program_arguments(), USER)

        assert [d["item_type"] for d in repos.content_items.created] == ["workout", "workout"]
        assert "Program creation failed" in caplog.text
