"""
Runway Ledger: Personal Finance Dashboard
=========================================

Panels:
  1. Net worth and runway:   how long liquid cash lasts, with optional income
  2. Debt:                   single-card payoff, avalanche vs snowball
  3. Credit:                 utilization and a heuristic score estimate
  4. Progress:               health score, insights, payments, quests

Run: streamlit run app/streamlit_app.py
"""

from __future__ import annotations

import io
import json
import logging
import sys
import tempfile
from datetime import date, datetime
from pathlib import Path

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import ProjectionConfig
from core.models import Account, AccountData, IncomeEvent, Snapshot
from core.schema import EXPENSE_CATEGORIES
from core.utils import format_currency, format_duration

from data_prep.loader import PortfolioData, frame_to_accounts, frame_to_expenses, parse_portfolio
from data_prep.portability import export_bundle, import_bundle, validate_bundle
from data_prep.validators import ValidationResult, validate_accounts, validate_credit_score

from engine.expenses import expenses_by_category, resolve_monthly_expenses, seed_detailed_items
from engine.payoff import PayoffResult, payoff_scenarios, payoff_schedule
from engine.runway import format_runway, project_balance_path, runway_for_portfolio
from engine.strategy import analyze_debt, compare_strategies

from insights.credit import credit_report
from insights.gamification import ArchetypeInputs, financial_archetype, gamification_profile, quest_journey
from insights.health import financial_health_score, generate_insights, health_label, rate_snapshot
from insights.networth import summarize_portfolio
from insights.payments import build_payments, payment_totals

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Demo portfolio (used until the user loads their own)
# ---------------------------------------------------------------------------
def _demo_portfolio() -> PortfolioData:
    accounts = AccountData(
        cash=[Account(id="chk", name="Checking", balance=8500.0)],
        investments=[Account(id="brk", name="Brokerage", balance=22000.0)],
        credit=[
            Account(id="cc1", name="Travel Card", balance=3200.0, interest_rate=24.99,
                    credit_limit=10000.0, minimum_payment=96.0),
            Account(id="cc2", name="Store Card", balance=650.0, interest_rate=29.99,
                    credit_limit=1500.0),
        ],
        loans=[Account(id="car", name="Auto Loan", balance=11000.0, interest_rate=6.5)],
    )
    today = date.today()
    events = [
        IncomeEvent(id="bonus", name="Annual Bonus", amount=5000.0,
                    date=date(today.year + (today.month >= 12), (today.month % 12) + 1, 15),
                    frequency="one-time"),
    ]
    return PortfolioData(accounts=accounts, income_events=events, monthly_expenses=3200.0)


def _portfolio() -> PortfolioData:
    if "portfolio" not in st.session_state:
        st.session_state["portfolio"] = _demo_portfolio()
    return st.session_state["portfolio"]


def _require_valid(name: str, result: ValidationResult) -> None:
    """Show warnings; refuse the upload when validation reports errors."""
    if not result.is_valid:
        raise ValueError(f"validation failed for {name}:\n{result.summary()}")
    if result.warnings:
        st.warning(f"{name}:\n{result.summary()}")


def _load_upload(upload) -> PortfolioData:
    """Dispatch on extension; CSV uploads only carry accounts."""
    suffix = Path(upload.name).suffix.lower()
    raw = upload.getvalue()
    if suffix == ".zip":
        _require_valid(upload.name, validate_bundle(io.BytesIO(raw)))
        return import_bundle(io.BytesIO(raw))
    if suffix == ".json":
        return parse_portfolio(json.loads(raw.decode("utf-8")))
    if suffix == ".csv":
        df = pd.read_csv(io.BytesIO(raw))
        _require_valid(upload.name, validate_accounts(df))
        current = _portfolio()
        return PortfolioData(
            accounts=frame_to_accounts(df),
            income_events=current.income_events,
            expenses=current.expenses,
            monthly_expenses=current.monthly_expenses,
        )
    raise ValueError(f"Unsupported file type: {suffix}")


# ---------------------------------------------------------------------------
# Chart helpers
# ---------------------------------------------------------------------------
def _plot_runway(path: pd.DataFrame, *, show_income: bool):
    if path.empty:
        st.info("No projection to plot.")
        return
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=path["label"], y=path["balance_without_income"],
                             mode="lines", name="Without income"))
    if show_income:
        fig.add_trace(go.Scatter(x=path["label"], y=path["balance_with_income"],
                                 mode="lines", name="With income"))
    fig.update_layout(yaxis_title="Balance ($)", margin=dict(t=30, b=10, l=10, r=10), height=320)
    st.plotly_chart(fig, use_container_width=True)


def _plot_allocation(summary):
    df = summary.to_dataframe()
    df = df[df["total"] > 0]
    if df.empty:
        return
    fig = px.pie(df, values="total", names="category", title="Allocation")
    st.plotly_chart(fig, use_container_width=True)


def _plot_schedule(schedule: pd.DataFrame, title: str):
    if schedule.empty:
        return
    fig = px.line(schedule, x="Period", y="Balance", title=title)
    st.plotly_chart(fig, use_container_width=True)


# ═══════════════════════════════════════════════════════════════════════════
# PAGE
# ═══════════════════════════════════════════════════════════════════════════
def render() -> None:
    st.set_page_config(page_title="Runway Ledger", layout="wide")
    st.title("Runway Ledger")
    st.caption("Runway, debt payoff, and credit projections from your own numbers.")

    data = _portfolio()

    # ═══════════════════════════════════════════════════════════════════════
    # SIDEBAR: Data and settings
    # ═══════════════════════════════════════════════════════════════════════
    with st.sidebar:
        st.header("Data")
        upload = st.file_uploader("Load portfolio (.json, .csv, .zip)", type=["json", "csv", "zip"])
        if upload is not None and st.button("Load file"):
            try:
                st.session_state["portfolio"] = _load_upload(upload)
                data = st.session_state["portfolio"]
                st.success(f"Loaded {upload.name}")
            except ValueError as e:
                logger.warning("Upload %s rejected: %s", upload.name, e)
                st.error(f"Could not load {upload.name}: {e}")

        st.header("Settings")
        expense_mode = st.radio("Expense mode", ["simple", "detailed"], horizontal=True)
        income_enabled = st.toggle("Include planned income", value=False)
        horizon = st.slider("Income horizon (months)", 1, 60, 12)
        extra_payment = st.number_input("Extra monthly debt payment", min_value=0.0, value=200.0, step=25.0)

    cleared = frozenset(st.session_state.get("cleared_payments", set()))
    cfg = ProjectionConfig(
        as_of_date=pd.Timestamp.today(),
        income_horizon_months=int(horizon),
        income_enabled=income_enabled,
        expense_mode=expense_mode,
        extra_payment=float(extra_payment),
        excluded_payment_ids=cleared,
    )

    # ═══════════════════════════════════════════════════════════════════════
    # EXPENSES
    # ═══════════════════════════════════════════════════════════════════════
    st.subheader("Monthly Expenses")
    if cfg.expense_mode == "simple":
        data.monthly_expenses = st.number_input(
            "Monthly expenses", min_value=0.0, value=float(data.monthly_expenses), step=100.0
        )
    else:
        data.expenses = seed_detailed_items(data.monthly_expenses, data.expenses)
        edited = st.data_editor(
            pd.DataFrame([e.model_dump() for e in data.expenses],
                         columns=["id", "name", "amount", "category", "frequency"]),
            num_rows="dynamic",
            use_container_width=True,
            column_config={
                "category": st.column_config.SelectboxColumn(options=list(EXPENSE_CATEGORIES)),
                "frequency": st.column_config.SelectboxColumn(options=["weekly", "monthly", "yearly"]),
            },
            hide_index=True,
        )
        try:
            data.expenses = frame_to_expenses(edited.dropna(subset=["name", "amount"]))
        except ValueError as e:
            st.error(f"Expense table has invalid rows: {e}")
        by_cat = expenses_by_category(data.expenses)
        if not by_cat.empty:
            st.plotly_chart(px.bar(by_cat, x="category", y="monthly_amount", title="By category"),
                            use_container_width=True)

    monthly_expenses = resolve_monthly_expenses(cfg, data.monthly_expenses, data.expenses)

    # ═══════════════════════════════════════════════════════════════════════
    # NET WORTH & RUNWAY
    # ═══════════════════════════════════════════════════════════════════════
    st.divider()
    summary = summarize_portfolio(data.accounts)
    rw = runway_for_portfolio(data.accounts, monthly_expenses, data.income_events, cfg)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Net Worth", format_currency(summary.net_worth))
    c2.metric("Total Assets", format_currency(summary.total_assets))
    c3.metric("Total Liabilities", format_currency(summary.total_liabilities))
    c4.metric(
        "Runway (months)",
        format_runway(rw.with_income_months if cfg.income_enabled else rw.months),
        delta=f"+{rw.additional_months_from_income:.1f} from income" if cfg.income_enabled else None,
    )

    left, right = st.columns([2, 1])
    with left:
        path = project_balance_path(summary.cash, monthly_expenses, data.income_events, cfg, rw.months)
        _plot_runway(path, show_income=cfg.income_enabled)
    with right:
        _plot_allocation(summary)

    # ═══════════════════════════════════════════════════════════════════════
    # DEBT
    # ═══════════════════════════════════════════════════════════════════════
    st.divider()
    st.subheader("Debt")
    credit = data.accounts.credit
    analysis = analyze_debt(credit, cfg.extra_payment, max_months=cfg.max_months)
    if analysis is None:
        st.info("No interest-bearing card balances.")
    else:
        c1, c2, c3 = st.columns(3)
        c1.metric("Card Debt", format_currency(analysis.total_debt))
        c2.metric("Annual Interest", format_currency(analysis.total_annual_interest))
        c3.metric("Debt Pressure", f"{analysis.pressure_score:.1f}", delta=analysis.pressure_level,
                  delta_color="off")
        comparison = compare_strategies(analysis.cards, cfg.extra_payment, max_months=cfg.max_months)
        st.dataframe(comparison, use_container_width=True, hide_index=True)
        if analysis.snowball_extra_cost > 0:
            st.caption(f"Snowball costs {format_currency(analysis.snowball_extra_cost)} more interest.")
        for note in analysis.notes.values():
            st.warning(note)

        card_names = {c.name: c for c in credit if c.effective_balance > 0 and c.interest_rate > 0}
        if card_names:
            pick = st.selectbox("Payoff calculator", list(card_names))
            acc = card_names[pick]
            custom = st.number_input("Custom monthly payment", min_value=0.0, value=0.0, step=25.0)
            scen = payoff_scenarios(acc, custom or None)
            for label, res in (("Minimum payment", scen.minimum), ("Custom payment", scen.custom)):
                if res is None:
                    continue
                if isinstance(res, PayoffResult):
                    st.write(f"**{label}:** {format_duration(res.months)} "
                             f"(debt-free by {res.payoff_date(cfg.as_of_date):%b %Y}), "
                             f"interest {format_currency(res.total_interest)}")
                else:
                    st.error(f"**{label}:** never pays off ({res.reason.replace('_', ' ')}).")
            if scen.interest_saved:
                st.success(f"Interest saved: {format_currency(scen.interest_saved)}")
            _plot_schedule(
                payoff_schedule(acc.effective_balance, acc.interest_rate, scen.minimum_payment),
                "Balance at minimum payment",
            )

    # ═══════════════════════════════════════════════════════════════════════
    # CREDIT
    # ═══════════════════════════════════════════════════════════════════════
    st.divider()
    st.subheader("Credit")
    report = credit_report(credit)
    if report is None:
        st.info("Add a credit card to estimate utilization.")
    else:
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Utilization", f"{report['utilization']:.1f}%", delta=report["utilization_band"],
                  delta_color="off")
        c2.metric("Estimated Score", report["estimated_score"], delta=report["score_category"],
                  delta_color="off")
        c3.metric("Available Credit", format_currency(report["available_credit"]))
        known = st.text_input("Known credit score (optional)")
        if known:
            err = validate_credit_score(known)
            if err:
                st.error(err)
            else:
                c4.metric("Reported Score", int(float(known)))
        st.dataframe(report["breakdown"].to_dataframe(), use_container_width=True, hide_index=True)
        impact = report["impact"]
        if impact is not None:
            st.info(
                f"Paying down {format_currency(impact.payoff_amount)} brings utilization to "
                f"{impact.target_utilization:.0f}% (about +{impact.score_increase} points)."
            )

    # ═══════════════════════════════════════════════════════════════════════
    # PROGRESS
    # ═══════════════════════════════════════════════════════════════════════
    st.divider()
    st.subheader("Progress")
    runway_months = rw.with_income_months if cfg.income_enabled else rw.months
    health = financial_health_score(summary, runway_months, credit)
    st.metric("Financial Health", f"{health}/100", delta=health_label(health), delta_color="off")
    for insight in generate_insights(summary, runway_months, monthly_expenses, credit):
        st.write(f"[{insight.priority}] **{insight.title}**: {insight.description}")

    payments = build_payments(data.accounts, cfg)
    if payments:
        st.markdown("**This month's payments**")
        selected = set(cleared)
        for p in payments:
            if st.checkbox(f"{p.name}: {format_currency(p.amount)}", value=p.is_paid, key=f"pay-{p.id}"):
                selected.add(p.id)
            else:
                selected.discard(p.id)
        st.session_state["cleared_payments"] = selected
        totals = payment_totals(payments)
        st.caption(f"Paid {format_currency(totals['paid'])}, remaining {format_currency(totals['remaining'])}")

    snapshots = st.session_state.setdefault("snapshots", [])
    profile = gamification_profile(summary.net_worth, runway_months, len(snapshots), summary.total_assets)
    c1, c2, c3 = st.columns(3)
    c1.metric("Level", profile.level)
    c2.metric("Points", profile.points)
    c3.metric("Rank", profile.rank)
    if profile.achievements:
        st.caption(" · ".join(profile.achievements))

    totals = payment_totals(payments)
    journey = quest_journey(
        summary.net_worth, runway_months, summary.total_assets, summary.total_liabilities,
        totals["paid_count"], totals["total_count"],
    )
    st.markdown(f"**Journey:** {journey.stage} ({journey.completed}/{len(journey.quests)} quests)")
    st.dataframe(journey.to_dataframe()[["title", "description", "progress", "is_complete"]],
                 use_container_width=True, hide_index=True)

    archetype = financial_archetype(ArchetypeInputs(
        total_assets=summary.total_assets,
        total_liabilities=summary.total_liabilities,
        runway_months=runway_months,
        monthly_expenses=monthly_expenses,
        cash_balance=summary.cash,
        investment_balance=summary.investments,
        account_count=summary.account_count,
    ))
    st.markdown(f"**{archetype.name}**: {archetype.description}")

    # ═══════════════════════════════════════════════════════════════════════
    # SNAPSHOTS & EXPORT
    # ═══════════════════════════════════════════════════════════════════════
    st.divider()
    st.subheader("Snapshots")
    name = st.text_input("Snapshot name", value=datetime.now().strftime("%Y-%m-%d"))
    if st.button("Save snapshot"):
        snapshots.append(Snapshot.capture(name, data.accounts, monthly_expenses,
                                          credit_score=report["estimated_score"] if report else None))
        logger.info("Saved snapshot %s", name)
    for snap in snapshots:
        snap_summary = summarize_portfolio(snap.accounts)
        snap_runway = snap_summary.cash / snap.monthly_expenses if snap.monthly_expenses > 0 else 0.0
        rating = rate_snapshot(snap_summary.total_assets, snap_summary.total_liabilities, snap_runway)
        with st.expander(f"{snap.name}: {rating.grade} ({rating.score}/100)"):
            st.dataframe(rating.to_dataframe(), use_container_width=True, hide_index=True)
            if st.button("Restore", key=f"restore-{snap.name}-{snap.created_at}"):
                data.accounts, data.monthly_expenses = snap.restore()
                st.rerun()

    with tempfile.TemporaryDirectory() as tmp:
        bundle = Path(tmp) / "runway-ledger-export.zip"
        export_bundle(bundle, data.accounts, data.income_events, data.expenses, data.monthly_expenses)
        st.download_button("Export data (.zip)", bundle.read_bytes(),
                           file_name=f"runway-ledger-export-{date.today().isoformat()}.zip")


def main() -> None:
    """Console entry point: launch the dashboard under streamlit."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", str(Path(__file__).resolve())]
    sys.exit(stcli.main())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    render()
