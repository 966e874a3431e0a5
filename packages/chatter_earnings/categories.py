"""Category labels: the automatic set and the manual override table.

The categorizer only ever produces one of :data:`AUTOMATIC_CATEGORIES`. Users
may later replace a transaction's category with any value from
:data:`MANUAL_CATEGORY_OPTIONS`, a presentation/business-policy table kept
separate from the categorization rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .models import Transaction

TIP = "Tip"
SUBSCRIPTION = "Subscription"
WELCOME = "Welcome"
BUNDLE = "Bundle"
PPV_MESSAGE = "PPV Message"
OTHER = "Other"

AUTOMATIC_CATEGORIES: tuple[str, ...] = (TIP, SUBSCRIPTION, WELCOME, BUNDLE, PPV_MESSAGE, OTHER)

type CategoryGroup = Literal["subscription", "welcome", "ppv", "other"]


@dataclass(frozen=True, slots=True)
class CategoryOption:
    label: str
    value: str
    group: CategoryGroup


# Display order matches the override dropdown.
MANUAL_CATEGORY_OPTIONS: tuple[CategoryOption, ...] = (
    CategoryOption("Subscription", SUBSCRIPTION, "subscription"),
    CategoryOption("Recurring Subscription", "Recurring Subscription", "subscription"),
    CategoryOption("Welcome Message", WELCOME, "welcome"),
    CategoryOption("MM PPV (Mass PPV)", "MM PPV", "ppv"),
    CategoryOption("Direct PPV (Bundles)", "Direct PPV", "ppv"),
    CategoryOption("Solo", "Solo", "ppv"),
    CategoryOption("VIP", "VIP", "ppv"),
    CategoryOption("Sextape", "Sextape", "ppv"),
    CategoryOption("BJ", "BJ", "ppv"),
    CategoryOption("Dildo", "Dildo", "ppv"),
    CategoryOption("Anal", "Anal", "ppv"),
    CategoryOption("Titties", "Titties", "ppv"),
    CategoryOption("Pics", "Pics", "ppv"),
    CategoryOption("Titty Pics", "Titty Pics", "ppv"),
    CategoryOption("Pussy Pics", "Pussy Pics", "ppv"),
    CategoryOption("GG Pics", "GG Pics", "ppv"),
    CategoryOption("GG Videos", "GG Videos", "ppv"),
    CategoryOption("Asshole Pics", "Asshole Pics", "ppv"),
    CategoryOption("Ahegao Pics", "Ahegao Pics", "ppv"),
    CategoryOption("Customs", "Customs", "ppv"),
    CategoryOption("Twerking Vids", "Twerking Vids", "ppv"),
    CategoryOption("Ass Pics", "Ass Pics", "ppv"),
    CategoryOption("Dick Rate (Premade)", "Dick Rate", "ppv"),
    CategoryOption("Voice Note", "Voice Note", "ppv"),
    CategoryOption("Panties", "Panties", "ppv"),
    CategoryOption("JOI", "JOI", "ppv"),
    CategoryOption("Tip", TIP, "other"),
    CategoryOption("PPV Message", PPV_MESSAGE, "ppv"),
    CategoryOption("Bundle", BUNDLE, "ppv"),
    CategoryOption("Other", OTHER, "other"),
)

# Legacy label still present in stored rows; counted with welcome messages.
WELCOME_MESSAGE_LEGACY = "Welcome Message"

MANUAL_CATEGORIES: tuple[str, ...] = tuple(o.value for o in MANUAL_CATEGORY_OPTIONS)

_GROUP_BY_VALUE: dict[str, CategoryGroup] = {o.value: o.group for o in MANUAL_CATEGORY_OPTIONS}


def normalize_name(name: str) -> str:
    """Return a trimmed, single-spaced representation of ``name``."""

    return " ".join(name.strip().split())


# Dropdown labels resolve too; a value wins over a label spelled the same.
_CANONICAL_BY_FOLDED: dict[str, str] = {
    **{normalize_name(o.label).casefold(): o.value for o in MANUAL_CATEGORY_OPTIONS},
    **{v.casefold(): v for v in MANUAL_CATEGORIES},
}


def resolve_category(name: str) -> str | None:
    """Map user input to a canonical manual category value.

    Both option values and their dropdown labels (``"Dick Rate (Premade)"``)
    are accepted. Matching ignores case and surrounding/internal whitespace
    runs. Returns ``None`` when the name is not in the manual table.
    """

    return _CANONICAL_BY_FOLDED.get(normalize_name(name).casefold())


def category_group(value: str) -> CategoryGroup | None:
    return _GROUP_BY_VALUE.get(value)


def override_category(transaction: Transaction, category: str) -> Transaction:
    """Return ``transaction`` with its category replaced by a manual label.

    Raises ``ValueError`` when ``category`` is not a known manual category.
    Amounts, fee and hour are carried over unchanged.
    """

    canonical = resolve_category(category)
    if canonical is None:
        raise ValueError(f"unknown category: {category!r}")
    return transaction.with_category(canonical)


__all__ = [
    "AUTOMATIC_CATEGORIES",
    "BUNDLE",
    "CategoryOption",
    "MANUAL_CATEGORIES",
    "MANUAL_CATEGORY_OPTIONS",
    "OTHER",
    "PPV_MESSAGE",
    "SUBSCRIPTION",
    "TIP",
    "WELCOME",
    "WELCOME_MESSAGE_LEGACY",
    "category_group",
    "normalize_name",
    "override_category",
    "resolve_category",
]
