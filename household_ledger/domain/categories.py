"""Category registry - display metadata for each spending category"""

from typing import Dict, List, Union
from household_ledger.domain.models import Category, CategoryMeta

FALLBACK_COLOR = "#666666"
FALLBACK_ICON = "📌"

_REGISTRY: Dict[Category, CategoryMeta] = {
    Category.FOOD: CategoryMeta("food", "Food & Dining", "#FF6B6B", "🍔"),
    Category.TRANSPORT: CategoryMeta("transport", "Transportation", "#4ECDC4", "🚗"),
    Category.ENTERTAINMENT: CategoryMeta("entertainment", "Entertainment", "#FFD166", "🎬"),
    Category.HOUSING: CategoryMeta("housing", "Housing & Rent", "#6772E5", "🏠"),
    Category.UTILITIES: CategoryMeta("utilities", "Utilities", "#20BF55", "💡"),
    Category.HEALTHCARE: CategoryMeta("healthcare", "Healthcare", "#3A86FF", "🏥"),
    Category.SHOPPING: CategoryMeta("shopping", "Shopping", "#F72585", "🛍️"),
    Category.EDUCATION: CategoryMeta("education", "Education", "#8338EC", "📚"),
    Category.PERSONAL: CategoryMeta("personal", "Personal Care", "#FB8500", "💇"),
    Category.OTHER: CategoryMeta("other", "Other", "#98A8F8", "📌"),
}


def lookup(category_id: Union[Category, str]) -> CategoryMeta:
    """
    Resolve display metadata for a category.

    Unknown ids degrade to a neutral label/color instead of raising, since
    the result is only used to decorate output.
    """
    try:
        return _REGISTRY[Category(category_id)]
    except ValueError:
        return CategoryMeta(str(category_id), str(category_id), FALLBACK_COLOR, FALLBACK_ICON)


def all_categories() -> List[CategoryMeta]:
    """All categories in registry order"""
    return [_REGISTRY[category] for category in Category]


def registry_order(category: Category) -> int:
    return list(Category).index(category)
