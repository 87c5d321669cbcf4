"""
Streamlit Frontend for Finance Tracker

The screens users interact with: sign in, the dashboard, the loan
calculator, alerts, and the admin panel.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Explicit confirmation before anything is deleted
3. Clear error messages in simple language
4. Visual feedback for all operations

The UI holds one FinanceApp per browser session and only ever talks
to it. Amounts are formatted here, never in the core.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

import streamlit as st

from finance_tracker.audit import configure_logging
from finance_tracker.config import get_settings
from finance_tracker.formatting import format_currency
from finance_tracker.models.transaction import (
    Transaction,
    TransactionDraft,
    TransactionStatus,
    TransactionType,
)
from finance_tracker.orchestrator import FinanceApp, create_app_components, create_storage
from finance_tracker.session import AuthenticationError
from finance_tracker.services.storage import StorageError
from finance_tracker.store import TransactionRejectedError


# Page configuration
st.set_page_config(
    page_title="Finance Tracker Pro",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .summary-card {
        padding: 16px;
        background-color: #1e293b;
        border-radius: 10px;
        border: 1px solid #334155;
        margin: 6px 0;
    }
    .summary-card h5 {
        color: #cbd5e1;
        margin: 0 0 8px 0;
    }
    .summary-value {
        font-size: 1.6em;
        font-weight: bold;
    }
    .alert-box {
        padding: 14px;
        background-color: rgba(51, 65, 85, 0.5);
        border-radius: 10px;
        border: 1px solid #475569;
        margin: 8px 0;
    }
    .channel-badge {
        float: right;
        font-size: 0.75em;
        padding: 2px 8px;
        border-radius: 6px;
        background-color: rgba(71, 85, 105, 0.5);
        color: #94a3b8;
    }
</style>
""", unsafe_allow_html=True)


SUMMARY_CARDS = [
    ("Total Credit", "total_credit", "#4ade80"),
    ("Total Debit", "total_debit", "#f87171"),
    ("Net Balance", "net_balance", None),
    ("Outstanding Loan/EMI", "outstanding_loan_emi", "#facc15"),
    ("Other Pending", "other_pending", "#818cf8"),
]


@st.cache_resource
def get_storage():
    """Shared storage backend (cached across sessions)."""
    settings = get_settings()
    configure_logging(debug=settings.app.debug_mode)
    return create_storage(settings.storage)


def get_app() -> FinanceApp:
    """Get this browser session's FinanceApp, creating it on first use."""
    if "finance_app" not in st.session_state:
        app = create_app_components(storage=get_storage())
        try:
            app.restore()
        except StorageError as e:
            st.error(f"Could not restore your session: {e}")
        st.session_state.finance_app = app
    return st.session_state.finance_app


def money(value) -> str:
    return format_currency(value, get_app().settings.currency_symbol)


def main():
    """Main application entry point."""
    app = get_app()

    if not app.is_authenticated:
        render_auth_page(app)
        return

    if st.session_state.get("page") == "admin" and app.is_admin:
        render_admin_page(app)
        return

    render_dashboard_page(app)


# =============================================================================
# AUTH
# =============================================================================

def render_auth_page(app: FinanceApp):
    """Render the sign-in / sign-up page."""
    if "auth_mode" not in st.session_state:
        st.session_state.auth_mode = "login"
    is_login = st.session_state.auth_mode == "login"

    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.title("Welcome Back!" if is_login else "Create Account")
        st.markdown(
            "Sign in to access your finances." if is_login
            else "Sign up to start tracking your money."
        )

        with st.form("auth_form"):
            email = st.text_input("Email", placeholder="you@example.com")
            password = st.text_input("Password", type="password")
            confirm_password = ""
            whatsapp_number = ""
            if not is_login:
                confirm_password = st.text_input("Confirm Password", type="password")
                whatsapp_number = st.text_input(
                    "WhatsApp Number (Optional)",
                    placeholder="+91 XXXXX XXXXX",
                    help="For reminders, once WhatsApp delivery is available",
                )
            submitted = st.form_submit_button(
                "🔑 Sign In" if is_login else "📝 Sign Up",
                type="primary",
            )

        if submitted:
            try:
                if is_login:
                    app.login(email, password)
                else:
                    app.signup(email, password, confirm_password, whatsapp_number)
                st.rerun()
            except AuthenticationError as e:
                st.error(str(e))
            except StorageError as e:
                st.error(f"Could not load your data: {e}")

        toggle_label = (
            "Don't have an account? Sign Up" if is_login
            else "Already have an account? Sign In"
        )
        if st.button(toggle_label):
            st.session_state.auth_mode = "signup" if is_login else "login"
            st.rerun()


# =============================================================================
# DASHBOARD
# =============================================================================

def render_dashboard_page(app: FinanceApp):
    """Render the main dashboard with its tabs."""
    header, admin_col, logout_col = st.columns([6, 1, 1])
    with header:
        st.title("💰 Finance Tracker Pro")
        st.caption(f"Signed in as {app.identity.email}")
    with admin_col:
        if app.is_admin and st.button("🛡️ Admin"):
            st.session_state.page = "admin"
            st.rerun()
    with logout_col:
        if st.button("🚪 Logout"):
            app.logout()
            st.session_state.page = None
            st.session_state.pop("editing_id", None)
            st.session_state.pop("confirm_delete_id", None)
            st.toast("You have been successfully logged out.")
            st.rerun()

    dashboard_tab, calculator_tab, alerts_tab = st.tabs(
        ["📊 Dashboard", "🧮 Loan Calculator", "🔔 Alerts"]
    )

    with dashboard_tab:
        with st.expander("➕ Add Transaction"):
            render_transaction_form(app, None)
        render_summary(app)
        render_transaction_table(app)

    with calculator_tab:
        render_loan_calculator(app)

    with alerts_tab:
        render_alerts(app)


def render_summary(app: FinanceApp):
    """Render the five summary cards."""
    summary = app.summary()
    columns = st.columns(len(SUMMARY_CARDS))

    for column, (title, attribute, color) in zip(columns, SUMMARY_CARDS):
        value = getattr(summary, attribute)
        if color is None:
            color = "#38bdf8" if value >= 0 else "#fb923c"
        with column:
            st.markdown(f"""
            <div class="summary-card">
                <h5>{title}</h5>
                <div class="summary-value" style="color: {color};">{money(value)}</div>
            </div>
            """, unsafe_allow_html=True)


def render_transaction_table(app: FinanceApp):
    """Render the transaction list with edit and delete actions."""
    st.subheader("Transactions")

    transactions = app.transactions
    if not transactions:
        st.info("No transactions yet. Add one to get started!")
        return

    header = st.columns([2, 3, 1.5, 2, 1.5, 3, 1, 1])
    for column, label in zip(header, ["Date", "Name", "Type", "Amount", "Status", "Notes", "", ""]):
        column.markdown(f"**{label}**")

    for tx in transactions:
        render_transaction_row(app, tx)

    editing_id = st.session_state.get("editing_id")
    if editing_id is not None:
        editing = app.get_transaction(editing_id)
        if editing is None:
            st.session_state.editing_id = None
        else:
            st.markdown("---")
            st.subheader(f"✏️ Edit Transaction: {editing.name}")
            render_transaction_form(app, editing)
            if st.button("Cancel Edit"):
                st.session_state.editing_id = None
                st.rerun()


def render_transaction_row(app: FinanceApp, tx: Transaction):
    cols = st.columns([2, 3, 1.5, 2, 1.5, 3, 1, 1])
    cols[0].write(tx.date.strftime("%d %b %Y"))
    cols[1].write(tx.name)
    cols[2].write(tx.type.value)
    cols[3].write(money(tx.amount))
    cols[4].write("🟢 Paid" if tx.status == TransactionStatus.PAID else "🟡 Pending")
    cols[5].write(tx.notes or "")

    if cols[6].button("✏️", key=f"edit_{tx.id}", help="Edit"):
        st.session_state.editing_id = tx.id
        st.rerun()
    if cols[7].button("🗑️", key=f"delete_{tx.id}", help="Delete"):
        st.session_state.confirm_delete_id = tx.id
        st.rerun()

    if st.session_state.get("confirm_delete_id") == tx.id:
        st.warning(f"Are you sure you want to delete \"{tx.name}\"?")
        yes, no = st.columns(2)
        if yes.button("Yes, delete", key=f"confirm_delete_{tx.id}", type="primary"):
            try:
                app.remove_transaction(tx.id)
                st.toast("Transaction has been removed.")
            except StorageError as e:
                st.error(f"Failed to delete: {e}")
            st.session_state.confirm_delete_id = None
            st.rerun()
        if no.button("Cancel", key=f"cancel_delete_{tx.id}"):
            st.session_state.confirm_delete_id = None
            st.rerun()


def render_transaction_form(app: FinanceApp, initial: Optional[Transaction]):
    """Render the add/edit form. `initial` is the record being edited."""
    form_key = f"tx_form_{initial.id}" if initial else "tx_form_new"
    draft = initial.to_draft() if initial else TransactionDraft(date=date.today())
    types = list(TransactionType)
    statuses = list(TransactionStatus)

    # Outside the form so the loan fields appear as soon as the type changes
    tx_type = st.selectbox(
        "Type",
        options=types,
        index=types.index(draft.type),
        format_func=lambda t: t.value,
        key=f"{form_key}_type",
    )

    with st.form(form_key, clear_on_submit=initial is None):
        name = st.text_input("Name", value=draft.name or "", placeholder="e.g., Groceries, Salary")
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input(
                "Amount",
                value=float(draft.amount) if draft.amount is not None else None,
                min_value=0.0,
                step=100.0,
                format="%.2f",
                placeholder="0.00",
            )
            tx_date = st.date_input("Date", value=draft.date)
        with col2:
            status = st.selectbox(
                "Status",
                options=statuses,
                index=statuses.index(draft.status),
                format_func=lambda s: s.value,
            )

        interest_rate = None
        loan_term = None
        if tx_type.is_loan:
            col3, col4 = st.columns(2)
            with col3:
                interest_rate = st.number_input(
                    "Interest Rate (% p.a.)",
                    value=float(draft.interest_rate) if draft.interest_rate is not None else None,
                    min_value=0.0,
                    step=0.1,
                    placeholder="e.g., 8.5",
                )
            with col4:
                loan_term = st.number_input(
                    "Loan Term (Years)",
                    value=float(draft.loan_term) if draft.loan_term is not None else None,
                    min_value=0.0,
                    step=1.0,
                    placeholder="e.g., 5",
                )

        notes = st.text_area(
            "Notes/Description",
            value=draft.notes or "",
            placeholder="Optional notes, e.g., loan details, payment schedule",
        )
        submitted = st.form_submit_button(
            "✏️ Update Transaction" if initial else "➕ Add Transaction",
            type="primary",
        )

    if not submitted:
        return

    payload = {
        "id": initial.id if initial else None,
        "name": name,
        "type": tx_type,
        "amount": Decimal(str(amount)) if amount is not None else None,
        "date": tx_date,
        "status": status,
        "notes": notes or None,
        "interest_rate": Decimal(str(interest_rate)) if interest_rate else None,
        "loan_term": Decimal(str(loan_term)) if loan_term else None,
    }
    try:
        if initial:
            app.update_transaction(payload)
            st.session_state.editing_id = None
            st.toast(f"Transaction \"{name}\" updated.")
        else:
            app.add_transaction(payload)
            st.toast(f"Transaction \"{name}\" added.")
        st.rerun()
    except TransactionRejectedError as e:
        st.error(str(e))
    except StorageError as e:
        st.error(f"Failed to save: {e}")


# =============================================================================
# LOAN CALCULATOR
# =============================================================================

def render_loan_calculator(app: FinanceApp):
    """Render the EMI calculator; results update on every input change."""
    settings = app.settings
    st.subheader("🧮 Loan EMI Calculator")
    st.markdown("Estimate your monthly installments and total interest.")

    col1, col2, col3 = st.columns(3)
    with col1:
        principal = st.number_input(
            "Loan Amount",
            value=settings.default_loan_amount,
            min_value=0.0,
            step=1000.0,
        )
    with col2:
        rate = st.slider(
            "Annual Interest Rate (%)",
            min_value=0.0,
            max_value=30.0,
            value=min(settings.default_interest_rate, 30.0),
            step=0.1,
        )
    with col3:
        term = st.slider(
            "Loan Tenure (Years)",
            min_value=0.0,
            max_value=30.0,
            value=min(settings.default_loan_term_years, 30.0),
            step=0.5,
        )

    result = app.calculate_loan(principal, rate, term)

    res1, res2, res3 = st.columns(3)
    res1.metric("Monthly EMI", money(result.monthly_payment))
    res2.metric("Total Interest", money(result.total_interest))
    res3.metric("Total Payment", money(result.total_payment))

    schedule = app.loan_schedule(principal, rate, term)
    if schedule:
        with st.expander("📅 Amortization Schedule"):
            st.dataframe(
                [
                    {
                        "Month": row.month,
                        "Payment": money(row.payment),
                        "Principal": money(row.principal),
                        "Interest": money(row.interest),
                        "Balance": money(row.balance),
                    }
                    for row in schedule
                ],
                hide_index=True,
                use_container_width=True,
            )


# =============================================================================
# ALERTS
# =============================================================================

def render_alerts(app: FinanceApp):
    """Render the example alerts."""
    st.subheader("🔔 Alerts & Notifications")
    st.caption(
        "Stay updated with your financial reminders. Some alerts can be sent via "
        "WhatsApp if enabled. (Delivery is not connected yet.)"
    )

    alerts = app.alerts()
    if not alerts:
        st.info("No active alerts.")
        return

    for alert in alerts:
        icon = "⚠️" if alert.is_warning else "✅"
        st.markdown(f"""
        <div class="alert-box">
            <span class="channel-badge">💬 {alert.channel.value}</span>
            <h4>{icon} {alert.title}</h4>
            <p>{alert.description}</p>
            <small>Date: {alert.date.isoformat()}</small>
        </div>
        """, unsafe_allow_html=True)


# =============================================================================
# ADMIN
# =============================================================================

def render_admin_page(app: FinanceApp):
    """Render the admin dashboard."""
    title_col, back_col = st.columns([6, 1])
    with title_col:
        st.title("🛡️ Admin Dashboard")
    with back_col:
        if st.button("⬅️ Back to App"):
            st.session_state.page = None
            st.rerun()

    try:
        stats, events = app.admin_dashboard()
    except PermissionError as e:
        st.error(str(e))
        return

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Registered Users", f"{stats.total_registered:,}", help="All time registered users")
    col2.metric("Daily Active Users (DAU)", f"{stats.daily_active:,}", help="Active in last 24 hours")
    col3.metric("New Users Today", f"{stats.new_users_today:,}", help="Signed up today")
    col4.metric("Monthly Growth Rate", f"{stats.monthly_growth_percent:g}%", help="Compared to last month")

    st.markdown("---")
    st.subheader("Recent Activity")
    if not events:
        st.info("No activity recorded yet.")
    else:
        st.dataframe(
            [
                {
                    "Time": event.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                    "Event": event.event_type.value,
                    "Severity": event.severity.value,
                    "Description": event.description,
                }
                for event in events
            ],
            hide_index=True,
            use_container_width=True,
        )

    st.caption("Note: user statistics on this panel are example data.")


if __name__ == "__main__":
    main()
