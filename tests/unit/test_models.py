"""Unit tests for domain models, category registry and calendar helpers"""

import pytest
from datetime import datetime, timedelta, timezone
from household_ledger.domain.models import (
    ALL_CATEGORIES,
    Budget,
    Category,
    CategoryScope,
    Expense,
    Period,
    parse_scope,
    scope_to_str,
)
from household_ledger.domain.categories import all_categories, lookup
from household_ledger.domain.exceptions import InvalidPeriodError, InvalidScopeError
from household_ledger.domain.export import CSV_HEADER, export_expenses_csv, format_cents
from household_ledger.utils.date_utils import (
    add_months,
    month_label,
    months_between,
    to_naive_utc,
    trailing_months,
    utcnow,
)


def test_parse_scope_total_sentinel():
    assert parse_scope("total") is ALL_CATEGORIES
    assert scope_to_str(ALL_CATEGORIES) == "total"


def test_parse_scope_category():
    scope = parse_scope("food")

    assert scope == CategoryScope(Category.FOOD)
    assert scope_to_str(scope) == "food"
    assert parse_scope(Category.HOUSING) == CategoryScope(Category.HOUSING)


def test_parse_scope_unknown():
    with pytest.raises(InvalidScopeError):
        parse_scope("pets")


def test_total_is_not_a_category():
    assert "total" not in {c.value for c in Category}


def test_period_parse():
    assert Period.parse("weekly") is Period.WEEKLY
    assert Period.parse(Period.YEARLY) is Period.YEARLY
    with pytest.raises(InvalidPeriodError):
        Period.parse("hourly")


def test_budget_rejects_untyped_period():
    with pytest.raises(InvalidPeriodError):
        Budget("b", ALL_CATEGORIES, 100, "monthly", datetime(2023, 7, 1))


def test_budget_rejects_raw_scope_string():
    with pytest.raises(InvalidScopeError):
        Budget("b", "total", 100, Period.MONTHLY, datetime(2023, 7, 1))


def test_lookup_known_category():
    meta = lookup(Category.FOOD)

    assert meta.name == "Food & Dining"
    assert meta.color == "#FF6B6B"
    assert lookup("transport").name == "Transportation"


def test_lookup_unknown_category_falls_back():
    meta = lookup("pets")

    assert meta.id == "pets"
    assert meta.name == "pets"
    assert meta.color == "#666666"


def test_registry_is_total():
    metas = all_categories()

    assert [m.id for m in metas] == [c.value for c in Category]
    assert all(m.color.startswith("#") and len(m.color) == 7 for m in metas)


def test_add_months_clamps_day():
    assert add_months(datetime(2023, 1, 31), 1) == datetime(2023, 2, 28)
    assert add_months(datetime(2023, 3, 31), -1) == datetime(2023, 2, 28)
    assert add_months(datetime(2023, 12, 15, 9, 30), 1) == datetime(2024, 1, 15, 9, 30)
    assert add_months(datetime(2024, 1, 15), -1) == datetime(2023, 12, 15)
    assert add_months(datetime(2024, 2, 29), 12) == datetime(2025, 2, 28)


def test_months_between_and_trailing_months():
    assert months_between(datetime(2023, 11, 30), datetime(2024, 2, 1)) == 3
    assert trailing_months(datetime(2024, 1, 5), 2) == [(2023, 12), (2024, 1)]
    assert month_label(2023, 7) == "Jul 2023"


def test_to_naive_utc():
    aware = datetime(2023, 7, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))

    assert to_naive_utc(aware) == datetime(2023, 7, 1, 0, 0)
    assert to_naive_utc(datetime(2023, 7, 1)) == datetime(2023, 7, 1)


def test_format_cents():
    assert format_cents(4250) == "42.50"
    assert format_cents(5) == "0.05"
    assert format_cents(0) == "0.00"
    assert format_cents(-1050) == "-10.50"


def test_export_expenses_csv():
    expenses = [
        Expense(
            "e1", 120000, "Rent, July", Category.HOUSING, datetime(2023, 7, 1),
            recurring=True, recurring_frequency=Period.MONTHLY,
        ),
        Expense("e2", 1099, "Movie ticket", Category.ENTERTAINMENT, datetime(2023, 7, 18, 19, 30)),
    ]

    lines = export_expenses_csv(expenses).splitlines()

    assert lines[0] == ",".join(CSV_HEADER)
    assert lines[1] == 'e1,1200.00,"Rent, July",housing,2023-07-01T00:00:00,true,monthly'
    assert lines[2] == "e2,10.99,Movie ticket,entertainment,2023-07-18T19:30:00,false,"


def test_utcnow_is_naive_utc():
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    now = utcnow()

    assert now.tzinfo is None
    assert before <= now <= before + timedelta(seconds=5)
