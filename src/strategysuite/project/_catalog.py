"""Static catalog of the four strategic frameworks.

The catalog is closed: FrameworkKey enumerates every framework and
FRAMEWORKS maps each key to its fixed list of categories. Projects are
populated from it at creation time and it never changes at runtime.
"""

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Final

from strategysuite.exceptions import CategoryNotFoundError

__all__ = [
    "FRAMEWORKS",
    "CategorySpec",
    "FrameworkKey",
    "FrameworkSpec",
    "get_category",
    "get_framework",
    "parse_framework_key",
]


class FrameworkKey(StrEnum):
    """Keys of the supported strategic frameworks, in display order."""

    PESTLE = "pestle"
    PORTERS = "porters"
    MARKETING = "marketing"
    SWOT = "swot"


@dataclass(frozen=True, slots=True)
class CategorySpec:
    """One fixed category of a framework.

    Attributes:
        id: Stable slug used as the FrameworkItem id.
        title: Display title.
        color: Display color as a hex string.
    """

    id: str
    title: str
    color: str


@dataclass(frozen=True, slots=True)
class FrameworkSpec:
    """A framework with its display label and fixed categories."""

    key: FrameworkKey
    label: str
    categories: tuple[CategorySpec, ...]

    def category_ids(self) -> tuple[str, ...]:
        return tuple(category.id for category in self.categories)


FRAMEWORKS: Final = MappingProxyType(
    {
        FrameworkKey.PESTLE: FrameworkSpec(
            key=FrameworkKey.PESTLE,
            label="PESTLE Analysis",
            categories=(
                CategorySpec("political", "Political", "#E0F2FE"),
                CategorySpec("economic", "Economic", "#FEF9C3"),
                CategorySpec("social", "Social", "#FCE7F3"),
                CategorySpec("technological", "Technological", "#DCFCE7"),
                CategorySpec("legal", "Legal", "#EDE9FE"),
                CategorySpec("environmental", "Environmental", "#FFEDD5"),
            ),
        ),
        FrameworkKey.PORTERS: FrameworkSpec(
            key=FrameworkKey.PORTERS,
            label="Porters Five Forces",
            categories=(
                CategorySpec("rivalry", "Competitive Rivalry", "#FEE2E2"),
                CategorySpec("suppliers", "Supplier Power", "#DBEAFE"),
                CategorySpec("buyers", "Buyer Power", "#F3E8FF"),
                CategorySpec("substitution", "Threat of Substitution", "#ECFDF5"),
                CategorySpec("new_entry", "Threat of New Entry", "#FFF7ED"),
            ),
        ),
        FrameworkKey.MARKETING: FrameworkSpec(
            key=FrameworkKey.MARKETING,
            label="Marketing 4Ps",
            categories=(
                CategorySpec("product", "Product", "#E0F2FE"),
                CategorySpec("price", "Price", "#FEF9C3"),
                CategorySpec("place", "Place", "#DCFCE7"),
                CategorySpec("promotion", "Promotion", "#FCE7F3"),
            ),
        ),
        FrameworkKey.SWOT: FrameworkSpec(
            key=FrameworkKey.SWOT,
            label="SWOT Analysis",
            categories=(
                CategorySpec("strengths", "Strengths", "#DCFCE7"),
                CategorySpec("weaknesses", "Weaknesses", "#FEE2E2"),
                CategorySpec("opportunities", "Opportunities", "#E0F2FE"),
                CategorySpec("threats", "Threats", "#FEF9C3"),
            ),
        ),
    }
)


def parse_framework_key(key: FrameworkKey | str) -> FrameworkKey:
    """Coerce a string to a FrameworkKey.

    Args:
        key: A FrameworkKey or its string value.

    Returns:
        The matching FrameworkKey.

    Raises:
        CategoryNotFoundError: If the key is not a known framework.
    """
    try:
        return FrameworkKey(key)
    except ValueError:
        msg = f"Unknown framework: {key}"
        raise CategoryNotFoundError(msg, framework_key=str(key)) from None


def get_framework(key: FrameworkKey | str) -> FrameworkSpec:
    """Get the catalog entry for a framework.

    Raises:
        CategoryNotFoundError: If the key is not a known framework.
    """
    return FRAMEWORKS[parse_framework_key(key)]


def get_category(key: FrameworkKey | str, item_id: str) -> CategorySpec:
    """Get the catalog entry for one category of a framework.

    Args:
        key: The framework key.
        item_id: The category slug.

    Returns:
        The matching CategorySpec.

    Raises:
        CategoryNotFoundError: If the framework or category is unknown.
    """
    framework = get_framework(key)
    for category in framework.categories:
        if category.id == item_id:
            return category
    msg = f"Unknown category {item_id!r} in framework {framework.key.value}"
    raise CategoryNotFoundError(
        msg, framework_key=framework.key.value, item_id=item_id
    )
