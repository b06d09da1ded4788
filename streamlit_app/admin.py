"""Streamlit admin panel for the shared lunch order."""

from decimal import Decimal

import streamlit as st

from shared_lunch.core.config import settings
from shared_lunch.schemas.settings import OrderSettings
from shared_lunch.services.order_service import get_dish_totals, get_user_totals
from shared_lunch.services.settings_service import InvalidCloseAtError, get_order_settings, save_order_settings
from shared_lunch.services.settlement import round_half_away_from_zero, settle
from shared_lunch.utils.time import local_today
from streamlit_app.common import get_session, now_string

st.set_page_config(page_title="Shared lunch admin", layout="wide")
st.title("Shared lunch / Admin")
st.caption(f"Last refresh: {now_string()}")

today = local_today()

with get_session() as db:
    current = get_order_settings(db)

    st.subheader("Order settings")
    with st.form("order_settings"):
        discount = st.number_input(
            "Discount (%)", min_value=0.0, max_value=100.0, value=float(current.discount_percent), step=0.5
        )
        fee = st.number_input("Delivery fee", min_value=0.0, value=float(current.delivery_fee), step=10.0)
        close_at = st.text_input("Closing time (HH:MM, empty to disable)", value=current.close_at or "")
        if st.form_submit_button("Save settings"):
            try:
                current = save_order_settings(
                    db,
                    OrderSettings(
                        discount_percent=Decimal(str(discount)),
                        delivery_fee=Decimal(str(fee)),
                        close_at=close_at.strip() or None,
                    ),
                )
                st.success("Settings saved; the bot picks them up on its next check.")
            except InvalidCloseAtError:
                st.error("Closing time must look like 13:30.")

    settlement = settle(
        get_user_totals(db, today),
        discount_percent=current.discount_percent,
        delivery_fee=current.delivery_fee,
    )

    st.subheader(f"Settlement for {today.isoformat()}")
    summary = settlement.summary
    cols = st.columns(4)
    cols[0].metric("Dishes", f"{float(summary.base_total):.2f} {settings.currency_symbol}")
    cols[1].metric("Discount", f"-{summary.discount_amount} {settings.currency_symbol}")
    cols[2].metric("Delivery", f"+{float(summary.delivery_fee):.2f} {settings.currency_symbol}")
    cols[3].metric("To pay", f"{float(summary.final_total):.2f} {settings.currency_symbol}")

    if settlement.lines:
        st.dataframe(
            [
                {
                    "user": line.user_id,
                    "dishes": float(line.base_total),
                    "discount": line.discount_share,
                    "delivery": round(float(line.delivery_share), 2),
                    "total": round(float(line.final_total), 2),
                    "message amount": round_half_away_from_zero(line.final_total),
                }
                for line in settlement.lines
            ],
            use_container_width=True,
        )
    else:
        st.info("No orders yet today.")

    st.subheader("Kitchen summary")
    st.write([{"dish": row.name, "qty": row.quantity, "amount": row.amount} for row in get_dish_totals(db, today)])
