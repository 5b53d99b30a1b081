#!/usr/bin/env python3
"""Print tables and chart series for a saved export of the tracker backend."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pandas as pd

from finance_tracker import aggregation, budgets, config, visualization
from finance_tracker.ingest import load_export
from finance_tracker.joiner import UNKNOWN_CATEGORY
from finance_tracker.logging_setup import configure_logging, get_logger
from finance_tracker.records import RecordError, coerce_datetime, records_to_frame
from finance_tracker.sorting import EXPENSE_FIELDS
from finance_tracker.table_view import TableView

logger = get_logger("finance_tracker.scripts.summarize_export")


def _shares_frame(shares) -> pd.DataFrame:
    return pd.DataFrame(
        [{'Name': s.key, 'Total': s.total, 'Share %': s.percentage} for s in shares],
        columns=['Name', 'Total', 'Share %'],
    )


def main(data_dir: str, sort: List[str], month: Optional[str], html_dir: Optional[str]) -> int:
    try:
        ledger = load_export(data_dir)
    except RecordError as exc:
        logger.error("Could not load export from %s: %s", data_dir, exc)
        return 1

    table = TableView(EXPENSE_FIELDS)
    category_label = table.join_for(ledger.categories, UNKNOWN_CATEGORY)
    try:
        for field in sort:
            table.activate(field)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    reference = month or pd.Timestamp.now(tz=config.get_timezone()).strftime('%Y-%m')
    try:
        reference_date = coerce_datetime(f"{reference}-01")
    except RecordError as exc:
        logger.error("Invalid --month %r: %s", reference, exc)
        return 2

    rows = table.rows(ledger.expenses, category_label)
    order = f"{table.state.field} {table.state.direction.value}" if table.state.is_active else "input order"
    print(f"Expenses ({len(rows)}), {order}:")
    if rows:
        table_df = records_to_frame(rows)
        table_df['category'] = table_df['category_id'].map(category_label)
        print(table_df[['date', 'category', 'amount']].to_string(index=False, formatters={'amount': '{:,.2f}'.format}))

    by_category = aggregation.expenses_by_category(ledger.expenses, ledger.categories)
    print("\nExpenses by category:")
    print(_shares_frame(by_category).to_string(index=False))

    by_source = aggregation.incomes_by_source(ledger.incomes)
    print("\nIncome by source:")
    print(_shares_frame(by_source).to_string(index=False))

    monthly = aggregation.monthly_expenses(ledger.expenses, months=config.MONTH_WINDOW)
    print("\nMonthly expenses:")
    print(pd.DataFrame([{'Month': m.month, 'Amount': m.amount} for m in monthly]).to_string(index=False))

    month_series = budgets.month_budget_series(ledger.budgets, reference_date, ledger.categories)
    print(f"\nBudgets for {reference}:")
    print(pd.DataFrame(
        {'Category': month_series.labels, 'Amount': month_series.amount, 'Spent': month_series.spent}
    ).to_string(index=False))

    if html_dir:
        target = Path(html_dir)
        target.mkdir(parents=True, exist_ok=True)
        figures = {
            'category_expenses.html': visualization.create_share_pie_chart(by_category, "Expenses by Category"),
            'income_sources.html': visualization.create_share_pie_chart(by_source, "Income by Source"),
            'monthly_expenses.html': visualization.create_monthly_bar_chart(monthly, "Monthly Expenses"),
            'month_budgets.html': visualization.create_budget_bar_chart(month_series, f"Budgets {reference}"),
        }
        for name, fig in figures.items():
            fig.write_html(target / name)
        logger.info("Wrote %d charts to %s", len(figures), target)
    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Summarize a saved finance tracker export.')
    parser.add_argument('--data-dir', default=config.get_data_dir(), help='Directory holding <kind>.json exports')
    parser.add_argument('--sort', action='append', default=[], help='Expense column to activate (repeat to cycle)')
    parser.add_argument('--month', help='Budget month as YYYY-MM (defaults to the current month)')
    parser.add_argument('--html-dir', help='Write Plotly charts as HTML into this directory')
    parser.add_argument('--log-level', default=None, help='Logging level (defaults to FINTRACK_LOG_LEVEL)')
    args = parser.parse_args()
    configure_logging(args.log_level)
    raise SystemExit(main(args.data_dir, args.sort, args.month, args.html_dir))
