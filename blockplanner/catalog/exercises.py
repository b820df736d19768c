"""Exercise catalog for name autocomplete.

The catalog lives in data/exercises.yaml, grouped by movement pattern.
Search is a case-insensitive substring match in catalog order.
"""

from functools import lru_cache
from pathlib import Path

import yaml
from loguru import logger

from blockplanner.config.settings import settings
from blockplanner.planner.errors import CatalogError

_CATALOG_PATH = Path(__file__).parent / "data" / "exercises.yaml"


def parse_catalog(path: Path) -> dict[str, list[str]]:
    """Parse a catalog file into {movement pattern: [exercise names]}.

    Raises:
        CatalogError: If the file is missing or not a mapping of name lists
    """
    if not path.exists():
        raise CatalogError(f"Exercise catalog not found: {path}")

    with path.open() as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise CatalogError(f"Invalid exercise catalog format in {path}")

    catalog: dict[str, list[str]] = {}
    for group, names in raw.items():
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise CatalogError(f"Invalid exercise list for group '{group}' in {path}")
        catalog[str(group)] = names
    return catalog


@lru_cache(maxsize=1)
def load_catalog() -> tuple[str, ...]:
    """All catalog exercise names, in file order."""
    catalog = parse_catalog(_CATALOG_PATH)
    names = tuple(name for names in catalog.values() for name in names)
    logger.debug(f"Loaded {len(names)} exercises in {len(catalog)} groups from {_CATALOG_PATH.name}")
    return names


def search_exercises(query: str | None, limit: int | None = None) -> list[str]:
    """Exercise names containing query, case-insensitive.

    Args:
        query: Partial name typed by the user
        limit: Maximum number of suggestions; defaults to settings.exercise_search_limit

    Returns:
        Matching names in catalog order; empty for a blank query
    """
    if not query or not query.strip():
        return []
    if limit is None:
        limit = settings.exercise_search_limit
    q = query.strip().lower()
    return [name for name in load_catalog() if q in name.lower()][:limit]
