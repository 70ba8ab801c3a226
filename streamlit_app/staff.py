"""Streamlit staff board: weekly menu overview and order fulfilment."""

import streamlit as st

from streamlit_app.common import format_vnd, get_session, now_string
from weekly_orders.services.menu_service import list_offerings, toggle_offering_available
from weekly_orders.services.order_service import delete_order, list_orders, update_order_status
from weekly_orders.services.order_status import ORDER_STATUSES, StatusTransitionError
from weekly_orders.utils.week import DAYS_OF_WEEK, current_week_identifier

st.set_page_config(page_title="Staff", layout="wide")
st.title("Staff / Orders")
st.caption(f"Last refresh: {now_string()}")

with get_session() as db:
    st.subheader("Orders")
    status_filter = st.selectbox("Status", ["all", *ORDER_STATUSES])
    orders = list_orders(db, status=None if status_filter == "all" else status_filter)
    if not orders:
        st.info("No orders yet.")

    for order in orders:
        with st.expander(f"{order.order_number} · {order.customer_name} · {order.status} · {format_vnd(order.total_amount)}"):
            st.write(f"📞 {order.phone}")
            st.write(f"📍 {', '.join(part for part in (order.address, order.ward, order.district, order.province) if part)}")
            st.write(f"🕐 {order.delivery_date.strftime('%d/%m/%Y')} {order.delivery_time}")
            if order.notes:
                st.write(f"📝 {order.notes}")
            st.table(
                [
                    {
                        "dish": item.name,
                        "size": item.size_name,
                        "qty": item.quantity,
                        "total": format_vnd(item.line_total),
                    }
                    for item in order.items
                ]
            )
            new_status = st.selectbox(
                "Set status",
                ORDER_STATUSES,
                index=ORDER_STATUSES.index(order.status),
                key=f"status_{order.id}",
            )
            col_save, col_delete = st.columns(2)
            if col_save.button("Save status", key=f"save_{order.id}") and new_status != order.status:
                try:
                    update_order_status(db, order, new_status)
                    st.success(f"{order.order_number} → {new_status}")
                except StatusTransitionError as exc:
                    st.error(str(exc))
            if col_delete.button("Delete", key=f"delete_{order.id}"):
                delete_order(db, order)
                st.rerun()

    week_id = st.text_input("Week", value=current_week_identifier())
    st.subheader(f"Menu of week {week_id}")
    offerings = list_offerings(db, week_id=week_id)
    for day in DAYS_OF_WEEK:
        day_rows = [offering for offering in offerings if offering.day == day]
        if not day_rows:
            continue
        st.markdown(f"**{day}**")
        for offering in day_rows:
            label = f"{'⭐ ' if offering.is_featured else ''}{offering.name} ({offering.week_id or 'all weeks'})"
            available = st.checkbox(label, value=offering.is_available, key=f"offering_{offering.id}")
            if available != offering.is_available:
                toggle_offering_available(db, offering)
