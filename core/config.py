import os
from dotenv import load_dotenv

# Load .env file
load_dotenv()

class Settings:
    # Google Geocoding API (structured provider)
    GOOGLE_MAPS_API_KEY: str = os.getenv("GOOGLE_MAPS_API_KEY", "")
    GOOGLE_GEOCODE_URL: str = os.getenv(
        "GOOGLE_GEOCODE_URL",
        "https://maps.googleapis.com/maps/api/geocode/json"
    )
    GEOCODING_LANGUAGE: str = os.getenv("GEOCODING_LANGUAGE", "en")
    GEOCODING_REGION: str = os.getenv("GEOCODING_REGION", "in")
    GEOCODING_TIMEOUT: float = float(os.getenv("GEOCODING_TIMEOUT", "5"))

    # OpenStreetMap Nominatim (free-text provider)
    NOMINATIM_DOMAIN: str = os.getenv("NOMINATIM_DOMAIN", "nominatim.openstreetmap.org")
    NOMINATIM_USER_AGENT: str = os.getenv("NOMINATIM_USER_AGENT", "LocalVendorHub/1.0")

    # Location directory (states → districts → cities → pincodes)
    LOCATION_API_URL: str = os.getenv("LOCATION_API_URL", "https://api.localsoch.com")
    LOCATION_API_TIMEOUT: float = float(os.getenv("LOCATION_API_TIMEOUT", "10"))

    # Nearby search
    DEFAULT_SEARCH_RADIUS_KM: float = float(os.getenv("DEFAULT_SEARCH_RADIUS_KM", "10"))

    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

settings = Settings()
