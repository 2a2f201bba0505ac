"""Streamlit UI for WanderAI - plan, customize, save and share itineraries.

Run with: streamlit run ui/app.py
Open a shared link with: ?share=<token>
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from datetime import date, timedelta  # noqa: E402
from typing import Any  # noqa: E402

import httpx  # noqa: E402
import streamlit as st  # noqa: E402

from ui.helpers import (  # noqa: E402
    BUDGET_OPTIONS,
    INTEREST_OPTIONS,
    build_trip_request,
    category_color,
    category_icon,
    change_day_activity,
    collect_form_errors,
    commit_day_activities,
    create_share_link,
    delete_itinerary,
    form_defaults,
    format_interests,
    generate_itinerary,
    get_day_activities,
    list_itineraries,
    open_share_link,
    parse_destinations,
    regenerate_itinerary,
    save_itinerary,
    share_token_from_url,
    update_day_notes,
)
from wanderai.utils.currency import CURRENCY_SYMBOLS  # noqa: E402

# Configuration
BACKEND_URL = "http://localhost:8000"

# Page config
st.set_page_config(
    page_title="WanderAI",
    page_icon="✈️",
    layout="wide",
)

# Initialize session state
for key, default in {
    "itinerary": None,
    "shared": None,
    "share_link": None,
    "editing": False,
    "managing": set(),
    "form_errors": {},
    "error": None,
}.items():
    if key not in st.session_state:
        st.session_state[key] = default


def _show_http_error(e: httpx.HTTPError) -> None:
    detail = str(e)
    if isinstance(e, httpx.HTTPStatusError):
        try:
            detail = e.response.json().get("detail", detail)
        except ValueError:
            pass
    st.session_state.error = str(detail)


def _set_itinerary(itinerary: dict[str, Any] | None) -> None:
    st.session_state.itinerary = itinerary
    st.session_state.share_link = None
    st.session_state.managing = set()


# Shared link: ?share=<token>
share_param = st.query_params.get("share")
if share_param and st.session_state.shared is None:
    try:
        resolved = open_share_link(BACKEND_URL, share_param)
        st.session_state.shared = resolved.get("itinerary") if resolved["view"] == "shared" else {}
    except httpx.HTTPError as e:
        _show_http_error(e)
        st.session_state.shared = {}

st.title("✈️ WanderAI")
st.markdown("*Personalized day-by-day travel itineraries*")
st.divider()

# =============================================================================
# SIDEBAR - SAVED ITINERARIES + OPEN SHARED LINK
# =============================================================================
with st.sidebar:
    st.subheader("💾 Saved Itineraries")
    try:
        saved = list_itineraries(BACKEND_URL)
    except httpx.HTTPError as e:
        saved = []
        st.caption(f"_Could not load saved itineraries: {e}_")

    if not saved:
        st.caption("_No saved itineraries yet_")

    for item in saved:
        st.markdown(f"**{item['destination']}**")
        st.caption(
            f"{item['startDate']} → {item['endDate']} · {item['preferences']['budget']} · "
            f"{format_interests(item['preferences'].get('interests', []))}"
        )
        col_open, col_delete = st.columns(2)
        if col_open.button("Open", key=f"open-{item['id']}", use_container_width=True):
            _set_itinerary(item)
            st.session_state.editing = False
            st.rerun()
        if col_delete.button("Delete", key=f"delete-{item['id']}", use_container_width=True):
            try:
                delete_itinerary(BACKEND_URL, item["id"])
                if st.session_state.itinerary and st.session_state.itinerary["id"] == item["id"]:
                    _set_itinerary(None)
            except httpx.HTTPError as e:
                _show_http_error(e)
            st.rerun()

    st.divider()
    st.subheader("🔗 Open Shared Link")
    shared_url = st.text_input("Shared link", placeholder="http://.../share/<token>")
    if st.button("Preview", use_container_width=True) and shared_url:
        token = share_token_from_url(shared_url)
        if token is None:
            st.session_state.shared = {}
        else:
            try:
                resolved = open_share_link(BACKEND_URL, token)
                st.session_state.shared = (
                    resolved.get("itinerary") if resolved["view"] == "shared" else {}
                )
            except httpx.HTTPError as e:
                _show_http_error(e)
        st.rerun()


def render_activity(activity: dict[str, Any]) -> None:
    """Render one activity card."""
    category = activity.get("category", "")
    badge = f":{category_color(category)}[{category or 'Activity'}]"
    st.markdown(f"{category_icon(category)} **{activity['time']}** · {activity['title']} {badge}")
    details = [part for part in (activity.get("location"), activity.get("costEstimate")) if part]
    if details:
        st.caption(" · ".join(details))
    if activity.get("description"):
        st.write(activity["description"])
    if activity.get("tips"):
        st.caption(f"💡 {activity['tips']}")


def render_shared(itinerary: dict[str, Any]) -> None:
    """Read-only preview of a shared itinerary."""
    st.subheader(f"🌍 Shared trip: {itinerary['destination']}")
    col1, col2, col3 = st.columns(3)
    col1.metric("Days", len(itinerary["days"]))
    col2.metric("Budget", itinerary["preferences"]["budget"])
    col3.metric("Interests", len(itinerary["preferences"].get("interests", [])))
    st.caption(f"Estimated total: {itinerary.get('totalBudget', '')}")

    for day in itinerary["days"]:
        with st.expander(f"Day {day['day']} · {day['date']}", expanded=day["day"] == 1):
            for activity in day["activities"]:
                if activity.get("selected") is not False:
                    render_activity(activity)
            if not day["activities"]:
                st.caption("_Activity details are not included in this link_")

    if st.button("✨ Plan your own trip", type="primary"):
        st.session_state.shared = None
        st.query_params.clear()
        st.rerun()


def render_day(itinerary: dict[str, Any], day: dict[str, Any]) -> None:
    """Day card with customize/done and notes."""
    itinerary_id = itinerary["id"]
    number = day["day"]
    managing = number in st.session_state.managing

    with st.expander(f"Day {number} · {day['date']}", expanded=number == 1):
        st.caption(f"Estimated cost: {day.get('totalEstimatedCost', '')}")

        activities = get_day_activities(BACKEND_URL, itinerary_id, number, manage=managing)
        for activity in activities:
            if managing:
                included = activity.get("selected") is not False
                toggled = st.checkbox(
                    "Include",
                    value=included,
                    key=f"include-{itinerary_id}-{number}-{activity['id']}",
                )
                if toggled != included:
                    updated = change_day_activity(
                        BACKEND_URL, itinerary_id, number, {"activity": activity}
                    )
                    _set_itinerary(updated)
                    st.session_state.managing = {number}
                    st.rerun()
            render_activity(activity)
            st.divider()

        if managing:
            with st.form(f"add-{itinerary_id}-{number}"):
                st.markdown("**Add an activity**")
                title = st.text_input("Title")
                time_range = st.text_input("Time", value="10:00 AM - 12:00 PM")
                location = st.text_input("Location")
                category = st.selectbox("Category", ["Culture", "Food", "Nature", "Adventure", "Shopping"])
                if st.form_submit_button("Add") and title.strip():
                    updated = change_day_activity(
                        BACKEND_URL,
                        itinerary_id,
                        number,
                        {
                            "activity": {
                                "time": time_range,
                                "title": title.strip(),
                                "location": location,
                                "category": category,
                            }
                        },
                    )
                    _set_itinerary(updated)
                    st.session_state.managing = {number}
                    st.rerun()

            if st.button("✅ Done", key=f"done-{itinerary_id}-{number}"):
                _set_itinerary(commit_day_activities(BACKEND_URL, itinerary_id, number))
                st.rerun()
        elif st.button("🛠️ Customize", key=f"customize-{itinerary_id}-{number}"):
            st.session_state.managing = {number}
            st.rerun()

        notes = st.text_area(
            "Notes", value=day.get("notes") or "", key=f"notes-{itinerary_id}-{number}"
        )
        if st.button("Save notes", key=f"save-notes-{itinerary_id}-{number}"):
            _set_itinerary(update_day_notes(BACKEND_URL, itinerary_id, number, notes or None))
            st.rerun()


def render_form(defaults: dict[str, Any] | None) -> None:
    """Trip form; regenerates in place when editing a saved itinerary."""
    defaults = defaults or {}
    today = date.today()

    with st.form("trip_form"):
        destinations_raw = st.text_input(
            "Destinations *",
            value=", ".join(defaults.get("destinations", [])),
            help="Comma-separated, in travel order",
        )
        col_date1, col_date2 = st.columns(2)
        start_date = col_date1.date_input(
            "Start Date *", value=defaults.get("start_date", today + timedelta(days=30))
        )
        end_date = col_date2.date_input(
            "End Date *", value=defaults.get("end_date", today + timedelta(days=33))
        )
        budget = st.selectbox(
            "Budget *",
            options=BUDGET_OPTIONS,
            index=BUDGET_OPTIONS.index(defaults["budget"]) if "budget" in defaults else None,
        )
        interests = st.multiselect(
            "Interests *", options=INTEREST_OPTIONS, default=defaults.get("interests", [])
        )
        currencies = list(CURRENCY_SYMBOLS)
        currency = st.selectbox(
            "Currency",
            options=currencies,
            index=currencies.index(defaults.get("currency", "USD")),
        )

        label = "🔄 Regenerate" if st.session_state.editing else "🚀 Plan Trip"
        submitted = st.form_submit_button(label, type="primary", use_container_width=True)

    if not submitted:
        return

    destinations = parse_destinations(destinations_raw)
    errors = collect_form_errors(destinations, start_date, end_date, interests, budget)
    st.session_state.form_errors = errors
    if errors:
        return

    trip_request = build_trip_request(
        destinations, start_date, end_date, budget, interests, currency
    )
    st.session_state.error = None
    with st.spinner("Planning your trip..."):
        try:
            if st.session_state.editing:
                itinerary = regenerate_itinerary(
                    BACKEND_URL, st.session_state.itinerary["id"], trip_request
                )
            else:
                itinerary = save_itinerary(
                    BACKEND_URL, generate_itinerary(BACKEND_URL, trip_request)
                )
        except httpx.HTTPError as e:
            _show_http_error(e)
            return

    _set_itinerary(itinerary)
    st.session_state.editing = False
    st.rerun()


# =============================================================================
# MAIN - SHARED PREVIEW, ITINERARY OR FORM
# =============================================================================
if st.session_state.error:
    st.error(f"❌ {st.session_state.error}")

if st.session_state.shared:
    render_shared(st.session_state.shared)
elif st.session_state.itinerary and not st.session_state.editing:
    itinerary = st.session_state.itinerary
    prefs = itinerary["preferences"]

    st.subheader(f"🗺️ {itinerary['destination']}")
    st.caption(
        f"{itinerary['startDate']} → {itinerary['endDate']} · {prefs['budget']} · "
        f"{format_interests(prefs.get('interests', []))} · Total: {itinerary.get('totalBudget', '')}"
    )

    col_edit, col_share, col_new = st.columns(3)
    if col_edit.button("✏️ Edit trip", use_container_width=True):
        st.session_state.editing = True
        st.rerun()
    if col_share.button("🔗 Share", use_container_width=True):
        try:
            st.session_state.share_link = create_share_link(BACKEND_URL, itinerary)
        except httpx.HTTPError as e:
            _show_http_error(e)
    if col_new.button("➕ New trip", use_container_width=True):
        _set_itinerary(None)
        st.rerun()

    if st.session_state.share_link:
        st.code(st.session_state.share_link["url"], language=None)
        st.text(st.session_state.share_link["text"])

    for day in itinerary["days"]:
        render_day(itinerary, day)
else:
    if st.session_state.shared == {}:
        st.warning("That shared link could not be opened. Plan a new trip instead.")

    st.subheader("📋 Plan a Trip")
    defaults = (
        form_defaults(st.session_state.itinerary)
        if st.session_state.editing and st.session_state.itinerary
        else None
    )
    render_form(defaults)

    for message in st.session_state.form_errors.values():
        st.error(message)
