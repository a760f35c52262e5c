"""Built-in exercise catalogs."""

from __future__ import annotations

from blaster.workout.model import Exercise, WorkoutCatalog


DEFAULT_CATALOG = WorkoutCatalog(
    name="Bicep Blaster",
    exercises=(
        Exercise(
            id="ex-1",
            name="Wide DB Curl",
            duration_sec=60,
            instruction=(
                "Hold dumbbells with palms up and arms wider than shoulder-width, "
                "then curl up while keeping elbows fixed."
            ),
        ),
        Exercise(
            id="ex-2",
            name="Hammer Curl",
            duration_sec=60,
            instruction=(
                "Hold dumbbells with palms facing each other, then curl up while "
                "maintaining the neutral grip throughout the movement."
            ),
        ),
        Exercise(
            id="ex-3",
            name="Drag Curl",
            duration_sec=60,
            instruction=(
                "Curl the weights while keeping them close to your body, dragging "
                "them upward as your elbows move backward."
            ),
        ),
        Exercise(
            id="ex-4",
            name="Reverse DB Curl",
            duration_sec=60,
            instruction=(
                "Hold dumbbells with palms facing down, then curl up while maintaining "
                "the overhand grip to target the forearms and brachialis."
            ),
        ),
        Exercise(
            id="ex-5",
            name="DB Straight Curl",
            duration_sec=60,
            instruction=(
                "Hold dumbbells at your sides with palms facing forward, then curl "
                "straight up without letting your elbows move forward."
            ),
        ),
    ),
)

# Used when a catalog source cannot be read; must stay valid on its own.
FALLBACK_CATALOG = WorkoutCatalog(
    name="Quick Curl",
    exercises=(
        Exercise(
            id="fallback-1",
            name="DB Straight Curl",
            duration_sec=60,
            instruction="Curl the dumbbells straight up, elbows pinned to your sides.",
        ),
    ),
)


def default_catalog() -> WorkoutCatalog:
    return DEFAULT_CATALOG


def fallback_catalog() -> WorkoutCatalog:
    return FALLBACK_CATALOG
