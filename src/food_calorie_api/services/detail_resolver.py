"""Resolve classification results to food details."""

from collections.abc import Mapping

from food_calorie_api.models.food import ClassificationResult, FoodDetail, FoodMappingEntry

# Used for labels that have no mapping entry
DEFAULT_CALORIES = 100
DEFAULT_RECOMMENDATION = "Eat"


def resolve(
    item: ClassificationResult,
    table: Mapping[str, FoodMappingEntry],
) -> FoodDetail:
    """
    Look up the food detail for a classification result.

    Args:
        item: Classification result from the prediction service
        table: Label -> entry mapping

    Returns:
        FoodDetail from the mapping entry, or a default detail named
        after the label when the label is not mapped
    """
    entry = table.get(item.label)
    if entry is None:
        return FoodDetail(
            display_name=item.label,
            calories=DEFAULT_CALORIES,
            recommendation=DEFAULT_RECOMMENDATION,
        )

    return FoodDetail(
        display_name=entry.display_name,
        calories=entry.calories,
        recommendation=entry.recommendation,
    )
