"""
Startup script for deployment
Handles:
- Configuration sanity checks
- Uvicorn server launch
"""

import os
import sys

from core.config import settings


def check_configuration():
    """Report which geocoding providers will be used"""
    if settings.GOOGLE_MAPS_API_KEY:
        print("✓ Google Geocoding enabled (Nominatim as fallback)")
        return True

    print("⚠️  WARNING: GOOGLE_MAPS_API_KEY not found in environment")
    print("⚠️  Reverse geocoding will use OpenStreetMap Nominatim only")
    return False


def main():
    """Main startup sequence"""
    print("=" * 60)
    print("🚀 Local Vendor Hub Location API - Startup")
    print("=" * 60)

    print("\n[1/2] Checking configuration...")
    check_configuration()

    print("\n[2/2] Starting uvicorn server...")
    print("=" * 60)

    port = int(os.getenv("PORT", "8000"))

    import uvicorn

    try:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=port,
            log_level="info",
            access_log=True
        )
    except KeyboardInterrupt:
        print("\n⏹️  Shutting down...")
        sys.exit(0)


if __name__ == "__main__":
    main()
