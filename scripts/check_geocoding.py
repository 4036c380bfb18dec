"""
Live check of the reverse geocoding providers against a few known points.

Hits the real Google / Nominatim endpoints, so run it by hand:
    python scripts/check_geocoding.py

Optional args:
  --point 18.5204,73.8567  # Check a single lat,lon instead of the built-in list
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import settings
from services.geocoding import GeocodingService, format_distance, calculate_distance
from services.geocoding.providers import NominatimGeocoder

POINTS = [
    ("Pune, Shaniwar Wada", 18.5195, 73.8553),
    ("Mumbai, CST", 18.9398, 72.8355),
    ("Wagholi outskirts", 18.5808, 73.9787),
    ("Arabian Sea", 15.0, 65.0),
]


async def check_service(points):
    print("\nTesting configured provider chain...")
    service = GeocodingService()
    print(f"  - Providers: {[p.name for p in service.providers]}")
    print(f"  - Timeout: {service.timeout}s")

    for label, lat, lon in points:
        location = await service.reverse_geocode(lat, lon)
        marker = "✓" if location.provider != "gps" else "⚠️ "
        print(f"{marker} {label} [{location.provider}]")
        print(f"    address: {location.formatted_address}")
        print(f"    city/state/pin: {location.city or '-'} / {location.state or '-'} / {location.postal_code or '-'}")


async def check_nominatim_only():
    print("\nTesting Nominatim fallback alone...")
    service = GeocodingService(providers=[NominatimGeocoder()])
    location = await service.reverse_geocode(POINTS[0][1], POINTS[0][2])
    print(f"✓ {location.formatted_address} [{location.provider}]")


def check_distance():
    km = calculate_distance(POINTS[0][1], POINTS[0][2], POINTS[1][1], POINTS[1][2])
    print(f"\n✓ Pune to Mumbai: {format_distance(km)}")


async def main(points):
    if not settings.GOOGLE_MAPS_API_KEY:
        print("⚠️  GOOGLE_MAPS_API_KEY not set in .env, only Nominatim will be queried")

    await check_service(points)
    await check_nominatim_only()
    check_distance()


if __name__ == "__main__":
    print("=" * 60)
    print("GEOCODING PROVIDER CHECK")
    print("=" * 60)

    parser = argparse.ArgumentParser(description="Check reverse geocoding providers")
    parser.add_argument("--point", help="lat,lon to check instead of the built-in list")
    args = parser.parse_args()

    points = POINTS
    if args.point:
        lat, lon = (float(v) for v in args.point.split(","))
        points = [(args.point, lat, lon)]

    asyncio.run(main(points))

    print("\n" + "=" * 60)
    print("CHECK COMPLETE")
    print("=" * 60)
