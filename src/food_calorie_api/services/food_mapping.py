"""
Food mapping table.

Maps classification labels to food records loaded from a flat
``label=displayName,calories,recommendation`` property file.
"""

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from food_calorie_api.core.exceptions import FoodMappingError, MalformedMappingEntry
from food_calorie_api.models.food import FoodMappingEntry

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ("#", "!")


def _split_property(line: str) -> tuple[str, str] | None:
    """Split a property line into key and value, or None if there is no separator."""
    for separator in ("=", ":"):
        if separator in line:
            key, value = line.split(separator, 1)
            return key.strip(), value.strip()
    return None


def parse_entry(key: str, value: str, line_number: int = 0) -> FoodMappingEntry:
    """
    Parse a mapping value into a validated entry.

    The value holds display name, calories and recommendation separated
    by commas. Commas after the second one belong to the recommendation.

    Raises:
        MalformedMappingEntry: If a field is missing or calories is not an integer
    """
    fields = [field.strip() for field in value.split(",", 2)]
    if len(fields) != 3:
        raise MalformedMappingEntry(
            key, value, line_number, f"expected 3 fields, got {len(fields)}"
        )

    display_name, calories, recommendation = fields
    if not display_name:
        raise MalformedMappingEntry(key, value, line_number, "empty display name")

    try:
        calorie_count = int(calories)
    except ValueError:
        raise MalformedMappingEntry(
            key, value, line_number, f"calories '{calories}' is not an integer"
        ) from None

    return FoodMappingEntry(
        display_name=display_name,
        calories=calorie_count,
        recommendation=recommendation,
    )


class FoodMappingTable(Mapping[str, FoodMappingEntry]):
    """
    Read-only label -> food entry lookup.

    Built once at startup and shared by all requests.

    Usage:
        table = FoodMappingTable.load("data/food_mapping.txt")
        entry = table.get("pizza")
    """

    def __init__(self, entries: Mapping[str, FoodMappingEntry] | None = None):
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def load(cls, path: str | Path) -> "FoodMappingTable":
        """
        Load the table from a property file.

        Args:
            path: Path to the mapping file

        Returns:
            Loaded FoodMappingTable

        Raises:
            FoodMappingError: If the file is missing or unreadable
            MalformedMappingEntry: If a line cannot be parsed into an entry
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise FoodMappingError(str(path), e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise FoodMappingError(str(path), f"not valid UTF-8: {e}") from e

        table = cls.parse(text)
        logger.info(f"Loaded {len(table)} food mapping entries from {path}")
        return table

    @classmethod
    def parse(cls, text: str) -> "FoodMappingTable":
        """Parse property file content into a table."""
        entries: dict[str, FoodMappingEntry] = {}

        for line_number, raw_line in enumerate(text.splitlines(), start=1):
            line = raw_line.strip()
            if not line or line.startswith(COMMENT_PREFIXES):
                continue

            parsed = _split_property(line)
            if parsed is None or not parsed[0]:
                raise MalformedMappingEntry(line, "", line_number, "expected key=value")

            key, value = parsed
            if key in entries:
                logger.warning(f"Duplicate food mapping key '{key}' on line {line_number}")
            entries[key] = parse_entry(key, value, line_number)

        return cls(entries)

    def __getitem__(self, label: str) -> FoodMappingEntry:
        return self._entries[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
