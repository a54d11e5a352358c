from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from app.database import Database

SUMMARY_MONTHS = 6

# Revenue = payments received; expense = expenses + team work entries.
# Soft-deleted rows never count. The month series is the scaffold so empty
# months come back as zeros.
FINANCIAL_SUMMARY_SQL = """
WITH months AS (
    SELECT to_char(d, 'Mon') AS month_label,
           date_trunc('month', d) AS month_start
    FROM generate_series(
        date_trunc('month', CAST(:as_of AS date)) - make_interval(months => :span),
        date_trunc('month', CAST(:as_of AS date)),
        interval '1 month'
    ) AS d
),
monthly_revenue AS (
    SELECT date_trunc('month', payment_date) AS month_start,
           SUM(amount) AS total_revenue
    FROM payments
    WHERE deleted = FALSE
    GROUP BY 1
),
monthly_expenses AS (
    SELECT date_trunc('month', expense_date) AS month_start,
           SUM(amount) AS total_expense
    FROM expenses
    WHERE deleted = FALSE
    GROUP BY 1
),
monthly_team_work AS (
    SELECT date_trunc('month', work_date) AS month_start,
           SUM(amount) AS total_work_amount
    FROM team_work_entries
    WHERE deleted = FALSE
    GROUP BY 1
)
SELECT m.month_label AS month,
       m.month_start AS month_start,
       COALESCE(r.total_revenue, 0) AS revenue,
       COALESCE(e.total_expense, 0) + COALESCE(t.total_work_amount, 0) AS expense
FROM months m
LEFT JOIN monthly_revenue r ON r.month_start = m.month_start
LEFT JOIN monthly_expenses e ON e.month_start = m.month_start
LEFT JOIN monthly_team_work t ON t.month_start = m.month_start
ORDER BY m.month_start ASC
"""


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def financial_summary(database: Database, *, as_of: Optional[date] = None) -> list[dict[str, Any]]:
    """
    Revenue and expense per calendar month for the current month and the five
    before it, oldest first.
    """
    if as_of is None:
        as_of = utc_today()

    rows = database.query(
        FINANCIAL_SUMMARY_SQL,
        {"as_of": as_of, "span": SUMMARY_MONTHS - 1},
    )

    return [
        {
            "month": r["month"],
            "revenue": float(r["revenue"]),
            "expense": float(r["expense"]),
        }
        for r in rows
    ]
