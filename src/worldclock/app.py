"""World Clock — Streamlit app with tracked clocks and a day/night map."""

import html
import logging
from datetime import datetime

import streamlit as st
from dotenv import load_dotenv
from pytz import UnknownTimeZoneError, utc
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from worldclock.clock import (  # noqa: E402
    DEFAULT_TIME_ZONES,
    DEFAULT_TZ,
    POPULAR_TIME_ZONES,
    add_time_zone,
    format_date_for_timezone,
    format_time_difference,
    format_time_for_timezone,
    get_time_difference,
    is_daytime_in_timezone,
    is_known_timezone,
    remove_time_zone,
    search_time_zones,
    toggle_favorite,
)
from worldclock.i18n import t  # noqa: E402
from worldclock.locator import TimeZoneLookupError, candidate_for_point  # noqa: E402
from worldclock.models import GeoPoint, LocationCandidate  # noqa: E402
from worldclock.renderers.plotly_2d import render_world_map  # noqa: E402
from worldclock.terminator import compute_terminator  # noqa: E402

log = logging.getLogger(__name__)

# Beyond this distance a map click adds the zone under the point instead
_NEAREST_MAX_KM = 750.0

# --- Browser language and timezone (via streamlit-js-eval) ---
# Both JS calls return None on the first run; the rerun they trigger fills
# them in, so session_state is only written once a value is available.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

if "local_tz" not in st.session_state:
    _browser_tz: str | None = streamlit_js_eval(
        js_expressions="Intl.DateTimeFormat().resolvedOptions().timeZone",
        key="_tz_detect",
        height=0,
    )
    if _browser_tz is not None:
        st.session_state.local_tz = _browser_tz

_lang: str = st.session_state.get("lang", "en")
_local_tz: str = st.session_state.get("local_tz", DEFAULT_TZ)
if not is_known_timezone(_local_tz):
    log.warning("Unknown browser timezone %r, using %s", _local_tz, DEFAULT_TZ)
    _local_tz = DEFAULT_TZ

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="◐",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# --- Session state initialization ---
if "zones" not in st.session_state:
    st.session_state.zones = DEFAULT_TIME_ZONES
if "format_24h" not in st.session_state:
    st.session_state.format_24h = False
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None

st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0d1b35 !important;
        color: #e8d5a3;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    .clock-card {
        border-top: 1px solid rgba(201,169,110,0.18);
        padding: 0.8rem 0.4rem;
    }
    .clock-time { font-size: 1.8rem; color: #f0e0b0; }
    .clock-meta { font-size: 0.85rem; color: #aaaaaa; }
    .map-note { font-size: 0.75rem; color: #778899; text-align: center; }
    </style>
    """,
    unsafe_allow_html=True,
)


def _clock_card(zone: LocationCandidate, now: datetime) -> None:
    """One tracked clock: local time, date, offset from the browser zone."""
    try:
        time_str = format_time_for_timezone(now, zone.timezone, st.session_state.format_24h)
        date_str = format_date_for_timezone(now, zone.timezone)
        diff = get_time_difference(_local_tz, zone.timezone, now)
        daytime = is_daytime_in_timezone(now, zone.timezone)
    except UnknownTimeZoneError:
        log.warning("Unknown timezone on tracked clock %s: %s", zone.id, zone.timezone)
        return

    diff_str = t("same_time", _lang) if diff == 0 else format_time_difference(diff)
    icon = "☀" if daytime else "☾"
    star = "★ " if zone.favorite else ""
    st.markdown(
        f"<div class='clock-card'>"
        f"<div class='clock-meta'>{star}{html.escape(zone.city)}, {html.escape(zone.country)}"
        f" · {html.escape(zone.offset)}</div>"
        f"<div class='clock-time'>{time_str} {icon}</div>"
        f"<div class='clock-meta'>{date_str} · {diff_str}</div>"
        f"</div>",
        unsafe_allow_html=True,
    )
    c1, c2 = st.columns(2)
    with c1:
        if st.button(t("btn_favorite", _lang), key=f"fav_{zone.id}"):
            st.session_state.zones = toggle_favorite(st.session_state.zones, zone.id)
            st.rerun()
    with c2:
        if st.button(t("btn_remove", _lang), key=f"rm_{zone.id}"):
            st.session_state.zones = remove_time_zone(st.session_state.zones, zone.id)
            st.rerun()


# Re-runs every second: the tick source for clocks and the terminator.
@st.fragment(run_every="1s")
def _live_view() -> None:
    now = datetime.now(utc)
    st.markdown(
        f"<div class='clock-meta'>{t('local_time', _lang)}: "
        f"{format_time_for_timezone(now, _local_tz, st.session_state.format_24h)}"
        f" ({html.escape(_local_tz)})</div>",
        unsafe_allow_html=True,
    )

    st.subheader(t("section_map", _lang))
    curve = compute_terminator(now)
    fig = render_world_map(curve, st.session_state.zones, at=now)
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})
    st.markdown(f"<div class='map-note'>{t('map_note', _lang)}</div>", unsafe_allow_html=True)

    st.subheader(t("section_clocks", _lang))
    zones = sorted(st.session_state.zones, key=lambda z: not z.favorite)
    cols = st.columns(3)
    for i, zone in enumerate(zones):
        with cols[i % 3]:
            _clock_card(zone, now)


_live_view()

st.session_state.format_24h = st.toggle(
    t("label_24h", _lang), value=st.session_state.format_24h
)

# --- Add by search ---
query = st.text_input(t("label_search", _lang))
if query:
    matches = search_time_zones(query)
    if not matches:
        st.caption(t("no_results", _lang))
    for match in matches:
        if st.button(f"{t('btn_add', _lang)} {match.city}, {match.country}", key=f"add_{match.id}"):
            st.session_state.error_msg = None
            st.session_state.zones = add_time_zone(st.session_state.zones, match)
            st.rerun()

# --- Add by map coordinate ---
col_lat, col_lng, col_btn = st.columns([2, 2, 2])
with col_lat:
    lat = st.number_input(t("label_lat", _lang), min_value=-90.0, max_value=90.0, value=0.0)
with col_lng:
    lng = st.number_input(t("label_lng", _lang), min_value=-180.0, max_value=180.0, value=0.0)
with col_btn:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    locate = st.button(t("btn_locate", _lang), key="locate_btn")

if locate:
    st.session_state.error_msg = None
    try:
        entry = candidate_for_point(
            GeoPoint(lat=lat, lng=lng), POPULAR_TIME_ZONES, max_distance_km=_NEAREST_MAX_KM
        )
        st.session_state.zones = add_time_zone(st.session_state.zones, entry)
    except TimeZoneLookupError as e:
        st.session_state.error_msg = t("error_timezone", _lang).format(error=html.escape(str(e)))
    st.rerun()

if st.session_state.error_msg:
    st.markdown(
        f"<div class='clock-card' style='border:1px solid #ff6b6b; color:#ff9999;'>"
        f"{st.session_state.error_msg}</div>",
        unsafe_allow_html=True,
    )
