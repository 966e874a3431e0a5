# ruff: noqa: E501

from decimal import Decimal

import pytest

from chatter_earnings.categories import AUTOMATIC_CATEGORIES
from chatter_earnings.categorize import CATEGORY_RULES, categorize, explain


def D(s: str) -> Decimal:
    return Decimal(s)


@pytest.mark.parametrize("amount", ["15", "11.99", "25", "3.33"])
def test_tip_wins_regardless_of_amount(amount):
    assert categorize("Tip from Jane", D(amount)) == "Tip"


def test_tip_must_lead_the_description():
    assert categorize("Thanks for the tip from Jane", D("7.33")) == "Other"


@pytest.mark.parametrize(
    "desc", ["Subscription from Max", "Recurring subscription from BootyLover", "  subscription FROM x"]
)
def test_subscription(desc):
    assert categorize(desc, D("14.99")) == "Subscription"


def test_subscription_beats_welcome_price():
    assert categorize("Subscription from Max", D("15")) == "Subscription"


def test_welcome_keyword():
    assert categorize("Welcome message purchase", D("9.99")) == "Welcome"
    # Word-bounded: "welcomed" is not the keyword.
    assert categorize("Payment for message welcomed", D("9.99")) == "PPV Message"


@pytest.mark.parametrize("amount", ["15", "15.00", "12", "11.99"])
def test_welcome_price_points_override_wording(amount):
    assert categorize("Payment for message from X", D(amount)) == "Welcome"


def test_welcome_prices_are_configurable():
    assert categorize("Payment for message from X", D("12"), welcome_prices=set()) == "Bundle"
    assert categorize("Something", D("9.5"), welcome_prices={D("9.50")}) == "Welcome"


def test_payment_for_message_splits_on_cents():
    assert categorize("Payment for message from X", D("11.98")) == "PPV Message"
    assert categorize("Payment for message from X", D("25")) == "Bundle"


def test_bundle_keywords_need_whole_amount():
    for desc in ("Bundle purchase", "Mass DM unlock", "massdm", "Locked post from Y", "Post purchase"):
        assert categorize(desc, D("30")) == "Bundle", desc
    assert categorize("Bundle purchase", D("30.50")) == "Other"


def test_ppv_keyword_needs_cents():
    assert categorize("PPV unlock", D("9.99")) == "PPV Message"
    assert categorize("PPV unlock", D("10")) == "Other"


def test_fallthrough_is_other():
    assert categorize("", D("7.77")) == "Other"
    assert explain("", D("7.77")) is None


def test_rules_are_ordered_and_named():
    names = [r.name for r in CATEGORY_RULES]
    assert names == [
        "tip",
        "subscription",
        "welcome_keyword",
        "welcome_price",
        "payment_for_message",
        "bundle_keyword",
        "ppv_keyword",
    ]
    assert explain("Tip from Jane welcome bundle", D("15")) == "tip"
    assert explain("Payment for message", D("12")) == "welcome_price"


@pytest.mark.parametrize(
    "desc, amount",
    [
        ("Tip from A", "1"),
        ("Payment for message", "2.5"),
        ("bundle", "40"),
        ("ppv", "4.44"),
        ("random", "100"),
        ("Welcome", "3"),
    ],
)
def test_results_stay_in_automatic_set(desc, amount):
    assert categorize(desc, D(amount)) in AUTOMATIC_CATEGORIES
