from datetime import date

import pytest


def test_summary_for_seeded_july(seeded_app):
    summary = seeded_app.reports.get_summary(date(2024, 7, 1), date(2024, 7, 31))
    assert summary['income'] == pytest.approx(4700.00)
    assert summary['expense'] == pytest.approx(1831.69)
    assert summary['net'] == pytest.approx(2868.31)


def test_summary_of_empty_period_is_zero(seeded_app):
    assert seeded_app.reports.get_summary(date(2025, 1, 1), date(2025, 1, 31)) == {
        'income': 0.0, 'expense': 0.0, 'net': 0.0,
    }


def test_category_breakdown_is_largest_first(seeded_app):
    breakdown = seeded_app.reports.get_category_breakdown(date(2024, 7, 1), date(2024, 7, 31))
    assert breakdown[0]['category'] == 'Housing'
    assert breakdown[0]['total'] == pytest.approx(1500.0)
    assert breakdown[1]['category'] == 'Food'
    assert breakdown[1]['total'] == pytest.approx(120.5)
    assert 'Other Income' not in [row['category'] for row in breakdown]


def test_daily_spending_is_zero_filled(seeded_app):
    daily = seeded_app.reports.get_daily_spending(date(2024, 7, 13), date(2024, 7, 16))
    assert daily == [
        {'date': '2024-07-13', 'total': pytest.approx(55.2)},
        {'date': '2024-07-14', 'total': pytest.approx(60.99)},
        {'date': '2024-07-15', 'total': pytest.approx(75.5)},
        {'date': '2024-07-16', 'total': 0.0},
    ]


def test_dashboard(seeded_app):
    dash = seeded_app.reports.get_dashboard(date(2024, 7, 20))
    assert dash['period_start'] == '2024-07-01'
    assert dash['period_end'] == '2024-07-31'
    assert len(dash['recent_transactions']) == 5
    assert dash['recent_transactions'][0].description == 'New T-shirt'
    assert len(dash['budgets']) == 3
    assert dash['summary']['income'] == pytest.approx(4700.00)
