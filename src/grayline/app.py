"""grayline — Streamlit app with a live day/night terminator over a world map.

    uv run streamlit run src/grayline/app.py
"""

import datetime

import streamlit as st
import structlog
from dotenv import load_dotenv
from pytz import utc
from skyfield.errors import EphemerisRangeError

load_dotenv()

from grayline.compute import run  # noqa: E402
from grayline.config import Settings, load_settings  # noqa: E402
from grayline.display import format_subsolar, format_utc_clock  # noqa: E402
from grayline.ephemeris import Ephemeris, load_ephemeris  # noqa: E402
from grayline.log import setup_logging  # noqa: E402
from grayline.renderers.plotly_map import render_plotly_map  # noqa: E402

log = structlog.get_logger(__name__)


@st.cache_resource
def _settings() -> Settings:
    settings = load_settings()
    setup_logging(settings.log_level)
    return settings


@st.cache_resource
def _ephemeris() -> Ephemeris:
    return load_ephemeris(_settings())


settings = _settings()

st.set_page_config(
    page_title="grayline",
    page_icon="◐",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# --- Dark fullscreen theme CSS ---
st.markdown(
    """
    <style>
    /* Full background */
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #050a1a !important;
    }
    /* Hide header/toolbar */
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    [data-testid="stMainBlockContainer"] {
        padding-top: 1rem !important;
    }
    /* Readouts */
    .readout {
        color: #d0d8e8;
        font-family: 'Menlo', 'Monaco', monospace;
        font-size: 0.95rem;
        letter-spacing: 0.05em;
        white-space: pre;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Session state initialization ---
if "figure" not in st.session_state:
    st.session_state.figure = None
if "subsolar_text" not in st.session_state:
    st.session_state.subsolar_text = ""


@st.fragment(run_every=datetime.timedelta(seconds=settings.clock_seconds))
def _clock() -> None:
    now = datetime.datetime.now(utc)
    st.markdown(
        f"<div class='readout'>{format_utc_clock(now)} UTC</div>", unsafe_allow_html=True
    )


@st.fragment(run_every=datetime.timedelta(seconds=settings.refresh_seconds))
def _overlay() -> None:
    try:
        overlay = run(_ephemeris(), settings.bands)
    except EphemerisRangeError:
        # Keep the previous figure until the next tick
        log.warning("overlay_refresh_failed", exc_info=True)
    else:
        st.session_state.figure = render_plotly_map(overlay, night_color=settings.night_color)
        st.session_state.subsolar_text = format_subsolar(overlay.subsolar.lat, overlay.subsolar.lon)

    if st.session_state.subsolar_text:
        st.markdown(
            f"<div class='readout'>{st.session_state.subsolar_text}</div>",
            unsafe_allow_html=True,
        )
    if st.session_state.figure is not None:
        st.plotly_chart(
            st.session_state.figure,
            width="stretch",
            config={"scrollZoom": True, "displayModeBar": False},
        )


_clock()
_overlay()
