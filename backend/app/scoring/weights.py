"""Category weight tables"""

from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

from backend.app.core.config import settings
from backend.app.core.exceptions import ValidationException
from backend.app.models.score import ScoreCategory

Number = Union[int, float, str, Decimal]

KNOWN_CATEGORIES = tuple(c.value for c in ScoreCategory)

CATEGORY_LABELS = {
    "sports_attire": "Sports Attire",
    "swimsuit": "Swimsuit",
    "talent": "Talent",
    "gown": "Gown",
    "qa": "Q&A",
}


class CategoryWeights:
    """
    Immutable {category: weight percent} table

    Weights are percentages: every weight is positive and together they sum
    to exactly 100. Iteration follows the order the table was declared in,
    which is also the column order of result tables.
    """

    TOTAL = Decimal("100")

    def __init__(self, weights: Mapping[str, Number], name: str = "custom"):
        self.name = name
        self._weights = MappingProxyType(self._validate(weights))

    @classmethod
    def _validate(cls, weights: Mapping[str, Number]) -> Dict[str, Decimal]:
        if not weights:
            raise ValidationException("Weight table must contain at least one category")

        validated: Dict[str, Decimal] = {}
        for category, weight in weights.items():
            if category not in KNOWN_CATEGORIES:
                raise ValidationException(
                    f"Unknown category in weight table: {category}",
                    details={"allowed": list(KNOWN_CATEGORIES)}
                )
            try:
                value = Decimal(str(weight))
            except (InvalidOperation, ValueError):
                raise ValidationException(f"Weight for {category} is not a number: {weight!r}")
            if not value.is_finite() or value <= 0:
                raise ValidationException(f"Weight for {category} must be positive, got {weight}")
            validated[category] = value

        total = sum(validated.values(), Decimal("0"))
        if total != cls.TOTAL:
            raise ValidationException(
                f"Category weights must sum to 100, got {total}",
                details={"weights": {c: str(w) for c, w in validated.items()}}
            )
        return validated

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self._weights)

    def weight(self, category: str) -> Decimal:
        self.require(category)
        return self._weights[category]

    def require(self, category: str) -> str:
        """Return the category if it belongs to this table, else raise ValidationException"""
        if category not in self._weights:
            raise ValidationException(
                f"Invalid category: {category}",
                details={"allowed": list(self._weights)}
            )
        return category

    def __contains__(self, category: object) -> bool:
        return category in self._weights

    def __iter__(self) -> Iterator[str]:
        return iter(self._weights)

    def __len__(self) -> int:
        return len(self._weights)

    def items(self):
        return self._weights.items()

    def as_dict(self) -> Dict[str, float]:
        return {category: float(weight) for category, weight in self._weights.items()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoryWeights):
            return NotImplemented
        return dict(self._weights) == dict(other._weights)

    def __repr__(self):
        return f"<CategoryWeights(name={self.name}, weights={self.as_dict()})>"


# Default table
STANDARD_WEIGHTS = CategoryWeights(
    {"sports_attire": 20, "swimsuit": 20, "gown": 30, "qa": 30},
    name="standard"
)

# Five-category table with a talent round; gown drops to 20%
TALENT_WEIGHTS = CategoryWeights(
    {"sports_attire": 20, "swimsuit": 20, "talent": 10, "gown": 20, "qa": 30},
    name="with_talent"
)

SCHEMES = {
    STANDARD_WEIGHTS.name: STANDARD_WEIGHTS,
    TALENT_WEIGHTS.name: TALENT_WEIGHTS,
}


def load_weights(
    scheme: str = "standard",
    overrides: Optional[Mapping[str, Number]] = None
) -> CategoryWeights:
    """
    Resolve the weight table to use

    Args:
        scheme: Name of a predefined scheme ("standard" or "with_talent")
        overrides: Custom weight table; takes precedence over the scheme

    Returns:
        Validated weight table

    Raises:
        ValidationException: If the scheme is unknown or the overrides are invalid
    """
    if overrides:
        return CategoryWeights(overrides, name="custom")

    if scheme not in SCHEMES:
        raise ValidationException(
            f"Unknown scoring scheme: {scheme}",
            details={"allowed": sorted(SCHEMES)}
        )
    return SCHEMES[scheme]


def get_weights() -> CategoryWeights:
    """Weight table selected by application settings"""
    return load_weights(settings.SCORING_SCHEME, settings.CATEGORY_WEIGHTS)
