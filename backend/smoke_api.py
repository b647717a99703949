#!/usr/bin/env python3
"""
Manual smoke run for a running Tripcraft server (python run_server.py).
Not collected by pytest; see tests/ for the automated suite.
"""

import json
import os
import sys

import requests

# API base URL
BASE_URL = os.getenv("TRIPCRAFT_URL", "http://localhost:8000")
TOKEN = os.getenv("TRIPCRAFT_TOKEN", "")


def _headers():
    headers = {"Content-Type": "application/json"}
    if TOKEN:
        headers["Authorization"] = f"Bearer {TOKEN}"
    return headers


def check_health():
    print("Checking health endpoint...")
    response = requests.get(f"{BASE_URL}/health")
    print(f"Status: {response.status_code}")
    print(f"Response: {response.json()}")
    print()


def check_options():
    print("Checking options endpoint...")
    response = requests.get(f"{BASE_URL}/itineraries/options")
    data = response.json()
    print(f"Status: {response.status_code}")
    print(f"  Interests: {', '.join(o['label'] for o in data.get('interests', []))}")
    print(f"  Cuisines: {len(data.get('cuisines', []))}, categories: {len(data.get('categories', []))}")
    print()


def check_generate():
    """Generate an itinerary and print a summary. Returns the new id, if any."""
    print("Checking itinerary generation...")

    request = {
        "city": "Riyadh",
        "duration": 3,
        "interests": ["Historical", "Cultural"],
        "budget": "Medium",
        "travelersType": "Couple",
        "foodPreferences": {"cuisines": ["saudi", "lebanese"], "categories": ["fine_dining"]},
    }
    print(f"Request: {json.dumps(request, indent=2)}")
    print()

    try:
        response = requests.post(f"{BASE_URL}/itineraries/generate", json=request, headers=_headers())
    except requests.exceptions.ConnectionError:
        print("❌ Could not connect to the API server")
        print("Make sure the server is running: python run_server.py")
        return None

    print(f"Status: {response.status_code}")
    if response.status_code != 201:
        print("❌ Error generating itinerary")
        print(f"Response: {response.text}")
        return None

    result = response.json()
    itinerary = result.get("data", {})
    print("✅ Itinerary generated successfully!")
    print(f"  Name: {itinerary.get('name')}")
    print(f"  Fallback generator: {itinerary.get('usingFallbackGenerator')}")
    print(f"  Temporary: {itinerary.get('isTemporary')} (expires {itinerary.get('expiresAt')})")
    print(f"  Hotel: {itinerary.get('hotel', {}).get('place')}")
    for day in itinerary.get("days", []):
        print(f"  Day {day['day']}: {day['morning']['activity']} / {day['lunch']['restaurant']} / "
              f"{day['afternoon']['activity']} / {day['dinner']['restaurant']}")

    print("\n📝 Processing Logs:")
    for log in result.get("logs", []):
        print(f"  {log.get('stage', 'Unknown')}: {log.get('message', '')}")
    print()
    return itinerary.get("id")


def check_save(itinerary_id):
    if not TOKEN:
        print("Skipping save: set TRIPCRAFT_TOKEN to a valid JWT")
        return
    print("Checking save...")
    response = requests.post(f"{BASE_URL}/itineraries/{itinerary_id}/save", headers=_headers())
    print(f"Status: {response.status_code}")
    print(f"Saved as: {response.json().get('data', {}).get('id')}")
    print()


if __name__ == "__main__":
    print("🚀 Tripcraft API smoke run")
    print("=" * 50)

    try:
        check_health()
        check_options()
        new_id = check_generate()
        if new_id:
            check_save(new_id)
        print("✅ Smoke run completed!")
        print("\n💡 Visit http://localhost:8000/docs for interactive API documentation")
    except KeyboardInterrupt:
        print("\n⏹️ Interrupted by user")
        sys.exit(1)
    except requests.exceptions.RequestException as e:
        print(f"\n❌ Smoke run error: {e}")
        sys.exit(1)
