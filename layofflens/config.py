"""
LayoffLens — Configuration: paths, constants, static lookup tables.
"""
import logging
import os
import sys
from pathlib import Path
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Paths — override with LAYOFFLENS_DATA_DIR env var for cloud deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("LAYOFFLENS_DATA_DIR", str(Path.home() / "LayoffLens")))
DATA_DIR = _data_dir
DB_PATH = Path(os.environ.get("LAYOFFLENS_DB_PATH", str(_data_dir / "layoffs.db")))
DEFAULT_CSV_PATH = Path(os.environ.get("LAYOFFLENS_CSV", str(_data_dir / "layoffs.csv")))
REPORTS_FOLDER = DATA_DIR / "reports"

# ---------------------------------------------------------------------------
# Import job
# ---------------------------------------------------------------------------
BATCH_SIZE = int(os.environ.get("LAYOFFLENS_BATCH_SIZE", "100"))
BATCH_DELAY_SECONDS = float(os.environ.get("LAYOFFLENS_BATCH_DELAY", "0.1"))
MAX_ERRORS_SHOWN = 10
PROGRESS_EVERY = 500

LOG_LEVEL = os.environ.get("LAYOFFLENS_LOG_LEVEL", "INFO")

# ---------------------------------------------------------------------------
# Column mapping from raw layoffs CSV → internal names (others ignored)
# ---------------------------------------------------------------------------
COLUMN_MAP = MappingProxyType({
    "Company": "company",
    "Location HQ": "location",
    "# Laid Off": "count",
    "Date": "date",
    "Industry": "sector",
    "Source": "source_url",
})

HEADER_COMPANY = "Company"
UNKNOWN = "Unknown"

# ---------------------------------------------------------------------------
# Aggregation constants
# ---------------------------------------------------------------------------
TREND_WINDOW_DAYS = 30
TREND_THRESHOLD_PCT = 10.0
DISTRIBUTION_TOP_N = 8
TIME_SERIES_MONTHS = 12
INTENSITY_SCALE = 1000
TOP_COUNTRIES = 10

# API bounds; larger values overflow SQLite INTEGER / OFFSET
MAX_PAGE = 1_000_000
MAX_COUNT = 2**63 - 1

# Sector chart palette (12 entries, order matters for the hash)
SECTOR_PALETTE = (
    "#3B82F6", "#10B981", "#F59E0B", "#EF4444",
    "#8B5CF6", "#06B6D4", "#84CC16", "#F97316",
    "#EC4899", "#14B8A6", "#F472B6", "#A78BFA",
)

# ---------------------------------------------------------------------------
# City coordinates for the map (insertion order = substring match priority)
# ---------------------------------------------------------------------------
CITY_COORDINATES = MappingProxyType({
    # USA
    "SF Bay Area": (37.7749, -122.4194, "United States"),
    "New York City": (40.7128, -74.0060, "United States"),
    "Seattle": (47.6062, -122.3321, "United States"),
    "Austin": (30.2672, -97.7431, "United States"),
    "Los Angeles": (34.0522, -118.2437, "United States"),
    "Boston": (42.3601, -71.0589, "United States"),
    "Chicago": (41.8781, -87.6298, "United States"),
    "Denver": (39.7392, -104.9903, "United States"),
    "Atlanta": (33.7490, -84.3880, "United States"),
    "Dallas": (32.7767, -96.7970, "United States"),
    "Miami": (25.7617, -80.1918, "United States"),
    "Portland": (45.5152, -122.6784, "United States"),
    "Phoenix": (33.4484, -112.0740, "United States"),
    "San Diego": (32.7157, -117.1611, "United States"),
    "Detroit": (42.3314, -83.0458, "United States"),
    "Minneapolis": (44.9778, -93.2650, "United States"),
    "Raleigh": (35.7796, -78.6382, "United States"),
    "Sacramento": (38.5816, -121.4944, "United States"),
    "Salt Lake City": (40.7608, -111.8910, "United States"),
    "Orlando": (28.5383, -81.3792, "United States"),
    "Baltimore": (39.2904, -76.6122, "United States"),
    "Wilmington": (34.2257, -77.9447, "United States"),
    # Canada
    "Toronto": (43.6532, -79.3832, "Canada"),
    "Vancouver": (49.2827, -123.1207, "Canada"),
    "Montreal": (45.5017, -73.5673, "Canada"),
    "Quebec": (46.8139, -71.2080, "Canada"),
    # Europe
    "London": (51.5074, -0.1278, "United Kingdom"),
    "Berlin": (52.5200, 13.4050, "Germany"),
    "Paris": (48.8566, 2.3522, "France"),
    "Amsterdam": (52.3676, 4.9041, "Netherlands"),
    "Stockholm": (59.3293, 18.0686, "Sweden"),
    "Dublin": (53.3498, -6.2603, "Ireland"),
    "Zurich": (47.3769, 8.5417, "Switzerland"),
    # Asia
    "Bengaluru": (12.9716, 77.5946, "India"),
    "Mumbai": (19.0760, 72.8777, "India"),
    "New Delhi": (28.6139, 77.2090, "India"),
    "Hyderabad": (17.3850, 78.4867, "India"),
    "Gurugram": (28.4595, 77.0266, "India"),
    "Singapore": (1.3521, 103.8198, "Singapore"),
    "Tokyo": (35.6762, 139.6503, "Japan"),
    "Beijing": (39.9042, 116.4074, "China"),
    "Tel Aviv": (32.0853, 34.7818, "Israel"),
    # Australia
    "Sydney": (-33.8688, 151.2093, "Australia"),
    "Melbourne": (-37.8136, 144.9631, "Australia"),
    # Africa
    "Lagos": (6.5244, 3.3792, "Nigeria"),
    "Cape Town": (-33.9249, 18.4241, "South Africa"),
})

# ---------------------------------------------------------------------------
# Location display names + flags: key → (display name, flag)
# Keys are lowercase; insertion order = partial match priority.
# ---------------------------------------------------------------------------
_US, _IN, _GB, _CA = "🇺🇸", "🇮🇳", "🇬🇧", "🇨🇦"

LOCATION_LABELS = MappingProxyType({
    # United States
    "united states": ("United States", _US),
    "usa": ("United States", _US),
    "us": ("United States", _US),
    "america": ("United States", _US),
    "new york": ("New York, US", _US),
    "new york city": ("New York, US", _US),
    "nyc": ("New York, US", _US),
    "san francisco": ("San Francisco, US", _US),
    "sf": ("San Francisco, US", _US),
    "sf bay area": ("SF Bay Area, US", _US),
    "bay area": ("Bay Area, US", _US),
    "los angeles": ("Los Angeles, US", _US),
    "la": ("Los Angeles, US", _US),
    "chicago": ("Chicago, US", _US),
    "boston": ("Boston, US", _US),
    "seattle": ("Seattle, US", _US),
    "austin": ("Austin, US", _US),
    "denver": ("Denver, US", _US),
    "atlanta": ("Atlanta, US", _US),
    "miami": ("Miami, US", _US),
    "dallas": ("Dallas, US", _US),
    "houston": ("Houston, US", _US),
    "philadelphia": ("Philadelphia, US", _US),
    "philly": ("Philadelphia, US", _US),
    "detroit": ("Detroit, US", _US),
    "pittsburgh": ("Pittsburgh, US", _US),
    "cleveland": ("Cleveland, US", _US),
    "columbus": ("Columbus, US", _US),
    "indianapolis": ("Indianapolis, US", _US),
    "milwaukee": ("Milwaukee, US", _US),
    "kansas city": ("Kansas City, US", _US),
    "st. louis": ("St. Louis, US", _US),
    "minneapolis": ("Minneapolis, US", _US),
    "portland": ("Portland, US", _US),
    "washington": ("Washington, US", _US),
    "dc": ("Washington DC, US", _US),
    "raleigh": ("Raleigh, US", _US),
    "phoenix": ("Phoenix, US", _US),
    "las vegas": ("Las Vegas, US", _US),
    "san diego": ("San Diego, US", _US),
    "sacramento": ("Sacramento, US", _US),
    # India
    "india": ("India", _IN),
    "bangalore": ("Bangalore, India", _IN),
    "bengaluru": ("Bengaluru, India", _IN),
    "mumbai": ("Mumbai, India", _IN),
    "delhi": ("Delhi, India", _IN),
    "hyderabad": ("Hyderabad, India", _IN),
    "pune": ("Pune, India", _IN),
    "chennai": ("Chennai, India", _IN),
    "gurugram": ("Gurugram, India", _IN),
    "noida": ("Noida, India", _IN),
    # United Kingdom
    "united kingdom": ("United Kingdom", _GB),
    "uk": ("United Kingdom", _GB),
    "london": ("London, UK", _GB),
    "manchester": ("Manchester, UK", _GB),
    "edinburgh": ("Edinburgh, UK", _GB),
    "cambridge": ("Cambridge, UK", _GB),
    # Canada
    "canada": ("Canada", _CA),
    "toronto": ("Toronto, Canada", _CA),
    "vancouver": ("Vancouver, Canada", _CA),
    "montreal": ("Montreal, Canada", _CA),
    "ottawa": ("Ottawa, Canada", _CA),
    # Rest of the world
    "germany": ("Germany", "🇩🇪"),
    "berlin": ("Berlin, Germany", "🇩🇪"),
    "munich": ("Munich, Germany", "🇩🇪"),
    "hamburg": ("Hamburg, Germany", "🇩🇪"),
    "france": ("France", "🇫🇷"),
    "paris": ("Paris, France", "🇫🇷"),
    "lyon": ("Lyon, France", "🇫🇷"),
    "sweden": ("Sweden", "🇸🇪"),
    "stockholm": ("Stockholm, Sweden", "🇸🇪"),
    "malmo": ("Malmo, Sweden", "🇸🇪"),
    "japan": ("Japan", "🇯🇵"),
    "tokyo": ("Tokyo, Japan", "🇯🇵"),
    "osaka": ("Osaka, Japan", "🇯🇵"),
    "china": ("China", "🇨🇳"),
    "beijing": ("Beijing, China", "🇨🇳"),
    "shanghai": ("Shanghai, China", "🇨🇳"),
    "shenzhen": ("Shenzhen, China", "🇨🇳"),
    "australia": ("Australia", "🇦🇺"),
    "sydney": ("Sydney, Australia", "🇦🇺"),
    "melbourne": ("Melbourne, Australia", "🇦🇺"),
    "netherlands": ("Netherlands", "🇳🇱"),
    "amsterdam": ("Amsterdam, Netherlands", "🇳🇱"),
    "israel": ("Israel", "🇮🇱"),
    "tel aviv": ("Tel Aviv, Israel", "🇮🇱"),
    "singapore": ("Singapore", "🇸🇬"),
    "brazil": ("Brazil", "🇧🇷"),
    "sao paulo": ("Sao Paulo, Brazil", "🇧🇷"),
    "mexico": ("Mexico", "🇲🇽"),
    "ireland": ("Ireland", "🇮🇪"),
    "dublin": ("Dublin, Ireland", "🇮🇪"),
    "spain": ("Spain", "🇪🇸"),
    "madrid": ("Madrid, Spain", "🇪🇸"),
    "italy": ("Italy", "🇮🇹"),
    "milan": ("Milan, Italy", "🇮🇹"),
    "south korea": ("South Korea", "🇰🇷"),
    "seoul": ("Seoul, South Korea", "🇰🇷"),
    "remote": ("Remote", "🌐"),
    "worldwide": ("Worldwide", "🌍"),
    "global": ("Global", "🌍"),
    "non-us": ("International", "🌍"),
    "international": ("International", "🌍"),
    "europe": ("Europe", "🇪🇺"),
    "asia": ("Asia", "🌏"),
    "africa": ("Africa", "🌍"),
    "south america": ("South America", "🌎"),
    "north america": ("North America", "🌎"),
    "oceania": ("Oceania", "🌏"),
})

DEFAULT_FLAG = "🌐"
INTERNATIONAL_FLAG = "🌍"

# ---------------------------------------------------------------------------
# Sector icons (lowercase keys, first partial match wins)
# ---------------------------------------------------------------------------
SECTOR_ICONS = MappingProxyType({
    "technology": "💻",
    "tech": "💻",
    "software": "💻",
    "ai": "🤖",
    "fintech": "💰",
    "finance": "💰",
    "banking": "🏦",
    "healthcare": "🏥",
    "biotech": "🧬",
    "pharmaceutical": "💊",
    "retail": "🛍️",
    "e-commerce": "🛒",
    "automotive": "🚗",
    "transportation": "🚛",
    "energy": "⚡",
    "oil": "🛢️",
    "renewable": "🌱",
    "manufacturing": "🏭",
    "construction": "🏗️",
    "real estate": "🏠",
    "media": "📺",
    "entertainment": "🎬",
    "gaming": "🎮",
    "education": "📚",
    "consulting": "👔",
    "marketing": "📊",
    "advertising": "📢",
    "telecommunications": "📱",
    "aerospace": "✈️",
    "food": "🍕",
    "hospitality": "🏨",
    "travel": "✈️",
    "crypto": "₿",
    "blockchain": "⛓️",
    "logistics": "📦",
    "hr": "👥",
    "security": "🛡️",
    "other": "🏢",
})

DEFAULT_SECTOR_ICON = "🏢"


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

_logging_configured = False


def configure_logging(level: str | None = None) -> None:
    """Install a single stdout handler on the root logger (idempotent)."""
    global _logging_configured
    if _logging_configured:
        return

    log_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(log_level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        root.addHandler(handler)
    _logging_configured = True
