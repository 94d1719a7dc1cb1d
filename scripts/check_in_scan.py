"""
Send a scanned code to a running check-in API, the way the scanner page does.

    python scripts/check_in_scan.py 3 9f86d081884c7d659a2feaa0c55ad015 --token <jwt>
"""
import argparse
import os
import requests


def check_in_scan(event_id, qr_code, token, base_url):
    headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}

    try:
        response = requests.post(
            f"{base_url}/registrations/check-in",
            json={"qrCode": qr_code, "eventId": event_id},
            headers=headers,
            timeout=10,
        )
    except requests.exceptions.ConnectionError as e:
        print(f"❌ Could not connect to {base_url}. Is the Flask server running?")
        print(f"Details: {e}")
        return 1

    data = response.json() if response.content else {}

    print(f"🔍 Check-in for event {event_id}:")
    print("=" * 40)

    if response.status_code == 200:
        print(f"✅ {data['name']} checked in")
        print(f"   Email: {data['email']}")
        print(f"   Participants: {data['participants']}")
        print(f"   Checked in at: {data['checkedInAt']}")
        return 0

    print(f"❌ Check-in failed ({response.status_code}): {data.get('error') or data.get('msg')}")
    if data.get("reason") == "event_mismatch":
        print("   This ticket belongs to a different event")
    if data.get("debug"):
        print(f"   Debug: {data['debug']}")
    return 1


def main():
    parser = argparse.ArgumentParser(description="Check in a scanned code")
    parser.add_argument("event_id", type=int, help="Event being scanned for")
    parser.add_argument("qr_code", help="Raw scanned text: a code, URL or JSON ticket")
    parser.add_argument("--token", default=os.getenv("API_TOKEN"), help="Organizer JWT")
    parser.add_argument(
        "--base-url",
        default=os.getenv("API_BASE_URL", "http://127.0.0.1:5001/api"),
        help="API base URL (default: %(default)s)",
    )
    args = parser.parse_args()

    if not args.token:
        parser.error("an organizer token is required (--token or API_TOKEN)")

    return check_in_scan(args.event_id, args.qr_code, args.token, args.base_url)


if __name__ == "__main__":
    raise SystemExit(main())
