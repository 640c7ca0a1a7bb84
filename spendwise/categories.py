CATEGORIES: tuple[str, ...] = (
    "Food",
    "Travel",
    "Entertainment",
    "Utilities",
    "Other",
)


def is_valid_category(name: object) -> bool:
    """Exact, case-sensitive membership check."""
    return isinstance(name, str) and name in CATEGORIES
