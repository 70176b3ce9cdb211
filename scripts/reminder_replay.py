"""
Send a sample reminder request to a running dispatcher.

Useful for checking the endpoint end to end (set MAILGUN_DRY_RUN=true or
MAILGUN_TEST_MODE=true on the server to avoid delivering real email).

Usage:
    python scripts/reminder_replay.py [--action activate] [--email a@b.com] [--preflight]
"""

import argparse
import json
import sys

import httpx

from app.constants.actions import SUPPORTED_ACTIONS

PREFLIGHT_HEADERS = {
    "Origin": "http://localhost:3000",
    "Access-Control-Request-Method": "POST",
    "Access-Control-Request-Headers": "Content-Type",
}


def send_preflight(base_url: str) -> bool:
    """Send a CORS pre-flight and print the Access-Control headers returned."""
    with httpx.Client(timeout=10.0) as client:
        response = client.options(f"{base_url}/addReminder", headers=PREFLIGHT_HEADERS)

    print(f"Pre-flight status: {response.status_code}")
    for name, value in response.headers.items():
        if name.lower().startswith("access-control-") or name.lower() == "allow":
            print(f"   {name}: {value}")
    return response.status_code == 204


def send_reminder(action: str, email: str, base_url: str) -> bool:
    """POST a reminder request and print the response."""
    url = f"{base_url}/addReminder"
    payload = {"action": action, "email": email}

    print(f"Sending reminder request to: {url}")
    print(f"   Payload: {json.dumps(payload)}")

    try:
        with httpx.Client(timeout=10.0) as client:
            response = client.post(url, json=payload)
    except httpx.HTTPError as e:
        print(f"Error sending request: {e}")
        return False

    print(f"   Status: {response.status_code}")
    print(f"   Body: {response.text}")
    return response.status_code == 201


def main():
    """CLI entrypoint."""
    parser = argparse.ArgumentParser(description="Send a sample reminder request")
    parser.add_argument("--action", choices=SUPPORTED_ACTIONS, default="activate")
    parser.add_argument("--email", default="test@example.com", help="Recipient address")
    parser.add_argument("--url", default="http://localhost:8000", help="Dispatcher base URL")
    parser.add_argument("--preflight", action="store_true", help="Send a CORS pre-flight only")
    args = parser.parse_args()

    if args.preflight:
        ok = send_preflight(args.url)
    else:
        ok = send_reminder(args.action, args.email, args.url)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
