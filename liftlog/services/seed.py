"""Default exercise library shared by every user."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.enums import ExerciseCategory
from liftlog.db.session import unit_of_work
from liftlog.models.exercise import Exercise

logger = logging.getLogger(__name__)

# Stable ids: re-seeding never duplicates a default exercise
DEFAULT_EXERCISE_NAMESPACE = uuid.UUID("6f1c2b0e-8d4a-4e57-9a43-2f1d7c0b5e21")

# (slug, name, category, muscle group, equipment)
DEFAULT_EXERCISES: list[tuple[str, str, ExerciseCategory, str, str]] = [
    ("bench-press", "Bench Press", ExerciseCategory.CHEST, "Pectorals", "Barbell"),
    ("incline-bench", "Incline Bench Press", ExerciseCategory.CHEST, "Upper chest", "Barbell"),
    ("dumbbell-press", "Dumbbell Bench Press", ExerciseCategory.CHEST, "Pectorals", "Dumbbell"),
    ("chest-fly", "Chest Fly", ExerciseCategory.CHEST, "Pectorals", "Dumbbell"),
    ("push-up", "Push-up", ExerciseCategory.CHEST, "Pectorals", "Bodyweight"),
    ("deadlift", "Deadlift", ExerciseCategory.BACK, "Erector spinae", "Barbell"),
    ("barbell-row", "Barbell Row", ExerciseCategory.BACK, "Latissimus dorsi", "Barbell"),
    ("pull-up", "Pull-up", ExerciseCategory.BACK, "Latissimus dorsi", "Bodyweight"),
    ("lat-pulldown", "Lat Pulldown", ExerciseCategory.BACK, "Latissimus dorsi", "Cable"),
    ("seated-row", "Seated Cable Row", ExerciseCategory.BACK, "Rhomboids", "Cable"),
    ("squat", "Squat", ExerciseCategory.LEGS, "Quadriceps", "Barbell"),
    ("leg-press", "Leg Press", ExerciseCategory.LEGS, "Quadriceps", "Machine"),
    ("romanian-deadlift", "Romanian Deadlift", ExerciseCategory.LEGS, "Hamstrings", "Barbell"),
    ("leg-curl", "Leg Curl", ExerciseCategory.LEGS, "Hamstrings", "Machine"),
    ("leg-extension", "Leg Extension", ExerciseCategory.LEGS, "Quadriceps", "Machine"),
    ("calf-raise", "Calf Raise", ExerciseCategory.LEGS, "Calves", "Machine"),
    ("lunges", "Lunges", ExerciseCategory.LEGS, "Quadriceps", "Dumbbell"),
    ("overhead-press", "Overhead Press", ExerciseCategory.SHOULDERS, "Deltoids", "Barbell"),
    ("lateral-raise", "Lateral Raise", ExerciseCategory.SHOULDERS, "Lateral deltoid", "Dumbbell"),
    ("front-raise", "Front Raise", ExerciseCategory.SHOULDERS, "Anterior deltoid", "Dumbbell"),
    ("rear-delt-fly", "Rear Delt Fly", ExerciseCategory.SHOULDERS, "Posterior deltoid", "Dumbbell"),
    ("face-pull", "Face Pull", ExerciseCategory.SHOULDERS, "Posterior deltoid", "Cable"),
    ("barbell-curl", "Barbell Curl", ExerciseCategory.ARMS, "Biceps", "Barbell"),
    ("dumbbell-curl", "Dumbbell Curl", ExerciseCategory.ARMS, "Biceps", "Dumbbell"),
    ("hammer-curl", "Hammer Curl", ExerciseCategory.ARMS, "Brachialis", "Dumbbell"),
    ("tricep-pushdown", "Triceps Pushdown", ExerciseCategory.ARMS, "Triceps", "Cable"),
    ("skull-crusher", "Skull Crusher", ExerciseCategory.ARMS, "Triceps", "Barbell"),
    ("tricep-dip", "Dip", ExerciseCategory.ARMS, "Triceps", "Bodyweight"),
    ("plank", "Plank", ExerciseCategory.CORE, "Rectus abdominis", "Bodyweight"),
    ("crunch", "Crunch", ExerciseCategory.CORE, "Rectus abdominis", "Bodyweight"),
    ("leg-raise", "Leg Raise", ExerciseCategory.CORE, "Lower abs", "Bodyweight"),
    ("russian-twist", "Russian Twist", ExerciseCategory.CORE, "Obliques", "Bodyweight"),
    ("cable-crunch", "Cable Crunch", ExerciseCategory.CORE, "Rectus abdominis", "Cable"),
]


def default_exercise_id(slug: str) -> uuid.UUID:
    return uuid.uuid5(DEFAULT_EXERCISE_NAMESPACE, slug)


async def seed_default_exercises(db: AsyncSession) -> int:
    """Insert missing default exercises. Returns how many were added."""
    added = 0
    async with unit_of_work(db):
        existing = set(
            (await db.execute(select(Exercise.id).where(Exercise.is_default.is_(True)))).scalars()
        )
        for slug, name, category, muscle_group, equipment in DEFAULT_EXERCISES:
            exercise_id = default_exercise_id(slug)
            if exercise_id in existing:
                continue
            db.add(
                Exercise(
                    id=exercise_id,
                    name=name,
                    category=category.value,
                    muscle_group=muscle_group,
                    equipment=equipment,
                    is_default=True,
                    user_id=None,
                )
            )
            added += 1
    logger.info("Seeded %d default exercises", added)
    return added
