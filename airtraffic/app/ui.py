import streamlit as st

from airtraffic.catalog import get_report, reports
from airtraffic.errors import ClassificationError, ConfigurationError, RepositoryError
from airtraffic.load import Repository
from airtraffic.visualize import build_figure

# --- Page Configuration ---
st.set_page_config(
    page_title="Air Traffic Reports",
    page_icon="✈️",
    layout="wide",
    initial_sidebar_state="expanded",
)

CATEGORIES = {
    "Flights": "flight",
    "Planes": "plane",
    "Airports": "airport",
    "Carriers": "carrier",
}

# --- Helper Functions ---

@st.cache_resource
def load_repository():
    """Builds the repository once; its lookup caches live as long as the app."""
    return Repository()


@st.cache_data
def run_report(name, year, limit, origin, destination, carrier, radius):
    """Runs a report with caching, keyed by its parameters."""
    return get_report(name).run(load_repository(), year=year, limit=limit, origin=origin,
                                destination=destination, carrier=carrier, radius=radius)


# --- Data Loading ---
try:
    repository = load_repository()
except (ConfigurationError, RepositoryError) as exc:
    st.error(f"Flight data could not be loaded: {exc}")
    st.stop()


# --- Sidebar Navigation ---
st.sidebar.title("Navigation")
page = st.sidebar.radio("Go to", list(CATEGORIES))

available = reports(CATEGORIES[page])
descriptions = {entry.description: entry for entry in available}
selected = descriptions[st.sidebar.selectbox("Report", list(descriptions))]

# --- Report Parameters ---
st.title(f"✈️ {selected.description}")

params = dict(year=None, limit=None, origin=None, destination=None, carrier=None, radius=None)
columns = st.columns(3)
for index, name in enumerate(selected.parameters):
    with columns[index % 3]:
        if name == 'year':
            params['year'] = st.selectbox("Year", repository.flight_years[::-1])
        elif name == 'limit':
            params['limit'] = st.number_input("Rows (0 for all)", min_value=0, max_value=1000, value=10)
        elif name == 'radius':
            params['radius'] = st.number_input("Radius (miles)", min_value=1.0, value=100.0)
        else:
            params[name] = st.text_input(name.title()).strip() or None

# --- Main App ---
if st.button("Run Report"):
    try:
        with st.spinner("Scanning data..."):
            frame = run_report(selected.name, **params)
    except ClassificationError as exc:
        st.error(f"Data error: {exc}")
    except ValueError as exc:
        st.warning(str(exc))
    else:
        if frame.empty:
            st.info("No results.")
        else:
            st.dataframe(frame, use_container_width=True)
            if len(frame.select_dtypes(include='number').columns) > 0:
                st.plotly_chart(build_figure(frame, selected.description), use_container_width=True)
