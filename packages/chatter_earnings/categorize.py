"""Rule-based categorization of ledger descriptions.

Rules are an ordered decision table evaluated top to bottom; the first rule
whose predicate holds decides the category. Whole-dollar versus fractional
amounts separate flat-priced bundles from per-item PPV pricing, which is why
rules 5 and 6 look at the cents component.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Collection
from dataclasses import dataclass
from decimal import Decimal

from .categories import BUNDLE, OTHER, PPV_MESSAGE, SUBSCRIPTION, TIP, WELCOME
from .config import WELCOME_PRICE_POINTS
from .currency import is_whole_amount

_TIP_RE = re.compile(r"^\s*tip\s+from\b", re.IGNORECASE)
_SUBSCRIPTION_RE = re.compile(
    r"^\s*(?:recurring\s+subscription|subscription)\s+from\b", re.IGNORECASE
)
_WELCOME_RE = re.compile(r"\bwelcome\b", re.IGNORECASE)
_PAYMENT_FOR_MESSAGE_RE = re.compile(r"\bpayment\s*for\s*message\b", re.IGNORECASE)
_BUNDLE_RE = re.compile(r"\b(?:bundle|mass\s*dm|locked\s*post|post\s*purchase)\b", re.IGNORECASE)
_PPV_RE = re.compile(r"\bppv\b", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class RuleInput:
    description: str
    gross: Decimal
    welcome_prices: Collection[Decimal]

    @property
    def whole(self) -> bool:
        return is_whole_amount(self.gross)


@dataclass(frozen=True, slots=True)
class CategoryRule:
    name: str
    predicate: Callable[[RuleInput], bool]
    label: Callable[[RuleInput], str]


def _fixed(label: str) -> Callable[[RuleInput], str]:
    return lambda _r: label


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule("tip", lambda r: bool(_TIP_RE.search(r.description)), _fixed(TIP)),
    CategoryRule(
        "subscription",
        lambda r: bool(_SUBSCRIPTION_RE.search(r.description)),
        _fixed(SUBSCRIPTION),
    ),
    CategoryRule(
        "welcome_keyword", lambda r: bool(_WELCOME_RE.search(r.description)), _fixed(WELCOME)
    ),
    CategoryRule("welcome_price", lambda r: r.gross in r.welcome_prices, _fixed(WELCOME)),
    CategoryRule(
        "payment_for_message",
        lambda r: bool(_PAYMENT_FOR_MESSAGE_RE.search(r.description)),
        lambda r: BUNDLE if r.whole else PPV_MESSAGE,
    ),
    CategoryRule(
        "bundle_keyword",
        lambda r: r.whole and bool(_BUNDLE_RE.search(r.description)),
        _fixed(BUNDLE),
    ),
    CategoryRule(
        "ppv_keyword",
        lambda r: not r.whole and bool(_PPV_RE.search(r.description)),
        _fixed(PPV_MESSAGE),
    ),
)


def _first_match(rule_input: RuleInput) -> CategoryRule | None:
    for rule in CATEGORY_RULES:
        if rule.predicate(rule_input):
            return rule
    return None


def categorize(
    description: str,
    gross: Decimal,
    *,
    welcome_prices: Collection[Decimal] = WELCOME_PRICE_POINTS,
) -> str:
    """Return the automatic category for a ledger line.

    Pure and deterministic: the same description and amount always give the
    same label, one of ``Tip``, ``Subscription``, ``Welcome``, ``Bundle``,
    ``PPV Message`` or ``Other``.
    """

    r = RuleInput(description or "", gross, welcome_prices)
    rule = _first_match(r)
    return rule.label(r) if rule is not None else OTHER


def explain(
    description: str,
    gross: Decimal,
    *,
    welcome_prices: Collection[Decimal] = WELCOME_PRICE_POINTS,
) -> str | None:
    """Name of the rule that decides ``categorize(...)``; ``None`` means the
    ``Other`` fall-through."""

    rule = _first_match(RuleInput(description or "", gross, welcome_prices))
    return rule.name if rule is not None else None


__all__ = ["CATEGORY_RULES", "CategoryRule", "RuleInput", "categorize", "explain"]
