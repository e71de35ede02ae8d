"""Internal constants shared across the library."""

DEFAULT_BASE_URL = "http://localhost:8000"
USER_AGENT = "pyvehicles"

#: Fixed key under which the auth token is persisted.
TOKEN_KEY = "token"

# ------------------------------------------------------------------
# REST endpoints
# ------------------------------------------------------------------

AUTH_PATH = "/api/auth/"
REGISTER_PATH = "/api/create/"
PROFILE_PATH = "/api/profile/"

BRANDS_PATH = "/api/brands/"
SEGMENTS_PATH = "/api/segments/"
VEHICLES_PATH = "/api/vehicles/"


def detail_path(collection_path: str, entity_id: int) -> str:
    """Return the detail endpoint for *entity_id* under *collection_path*.

    ``detail_path("/api/brands/", 3)`` is ``"/api/brands/3/"``.
    """
    return f"{collection_path}{int(entity_id)}/"
