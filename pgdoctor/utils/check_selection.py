"""
Selection of checks from --include, --exclude and --categories.

Each list is optional. ``None`` means the constraint is not applied, while an
empty list is a constraint that nothing satisfies. The three constraints are
always combined with AND.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from pgdoctor.plugins.common.errors import ConfigurationError
from pgdoctor.plugins.common.models import CheckCategory


@dataclass(frozen=True)
class CheckSelection:
    include: Optional[Sequence[str]] = None
    exclude: Optional[Sequence[str]] = None
    categories: Optional[Sequence[CheckCategory]] = None

    def should_run(self, check_id: str, category: CheckCategory) -> bool:
        """Returns True if a check with this id and category is selected."""
        if self.include is not None and check_id not in self.include:
            return False
        if self.exclude is not None and check_id in self.exclude:
            return False
        if self.categories is not None and category not in self.categories:
            return False
        return True

    def names_unlisted(self, known_ids: Iterable[str]) -> List[str]:
        """Returns the included ids that are not in ``known_ids``."""
        if self.include is None:
            return []
        known = set(known_ids)
        return [check_id for check_id in self.include if check_id not in known]


def parse_csv_list(value: Optional[str]) -> Optional[List[str]]:
    """
    Splits a comma-delimited option value.

    "a, b,,c" -> ["a", "b", "c"]; "" -> []; None -> None
    """
    if value is None:
        return None
    return [item.strip() for item in value.split(',') if item.strip()]


def parse_categories(value: Optional[str]) -> Optional[List[CheckCategory]]:
    """
    Parses a comma-delimited list of category names.

    Raises:
        ConfigurationError: If a name is not a known category.
    """
    names = parse_csv_list(value)
    if names is None:
        return None
    try:
        return [CheckCategory.from_name(name) for name in names]
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def selection_from_args(include=None, exclude=None, categories=None) -> CheckSelection:
    """Builds a CheckSelection from raw comma-delimited option strings."""
    return CheckSelection(
        include=parse_csv_list(include),
        exclude=parse_csv_list(exclude),
        categories=parse_categories(categories),
    )
