#!/usr/bin/env python3
"""
Booking and deposit checkout flow script.

DO NOT ADD BUSINESS LOGIC HERE.
This script only orchestrates API calls.
All rules live in the backend.

Usage:
    python scripts/flow_book_and_checkout.py --package-id december --dual 2
    python scripts/flow_book_and_checkout.py --package-id december --quad 4 --payment-method bank_transfer

Flow:
    1. Fetch the package
    2. Quote the spot selection
    3. Validate each wizard step up to payment
    4. Create the Stripe checkout session
"""

import argparse
import json
import sys

import httpx

BASE_URL = "http://localhost:8000"


def api_request(method: str, endpoint: str, data: dict | None = None) -> dict:
    """Make API request."""
    url = f"{BASE_URL}{endpoint}"

    if method == "GET":
        response = httpx.get(url, timeout=10.0, follow_redirects=True)
    elif method == "POST":
        response = httpx.post(url, json=data or {}, timeout=30.0, follow_redirects=True)
    else:
        raise ValueError(f"Unknown method: {method}")

    return {"status": response.status_code, "data": response.json() if response.text else {}}


def print_step(step: int, title: str):
    """Print step header."""
    print(f"\n{'='*60}")
    print(f"STEP {step}: {title}")
    print("="*60)


def print_result(result: dict, fields: list[str] | None = None):
    """Print result, optionally filtering fields."""
    if result["status"] >= 400:
        print(f"ERROR ({result['status']}): {json.dumps(result['data'], indent=2)}")
        return False

    print(f"Status: {result['status']}")
    if fields:
        filtered = {k: result["data"].get(k) for k in fields if k in result["data"]}
        print(json.dumps(filtered, indent=2))
    else:
        print(json.dumps(result["data"], indent=2))
    return True


def build_draft(args: argparse.Namespace) -> dict:
    """Sample wizard state with placeholder adult participants."""
    count = args.dual + args.triple + args.quad
    participants = [
        {
            "firstName": "Guest",
            "lastName": f"Number{i + 1}",
            "dateOfBirth": "1985-06-15",
            "phone": "555-010-0100",
            "gender": "female" if i % 2 else "male",
            "nationality": "US",
            "hasPassport": "yes",
            "passportNationality": "US",
        }
        for i in range(count)
    ]
    return {
        "spots": {"dual": args.dual, "triple": args.triple, "quad": args.quad},
        "participants": participants,
        "buyerInfo": {
            "firstName": "Guest",
            "lastName": "Number1",
            "email": args.email,
            "confirmEmail": args.email,
            "phone": "555-010-0100",
        },
        "paymentMethod": args.payment_method,
        "termsAccepted": True,
    }


def main():
    parser = argparse.ArgumentParser(description="Booking and deposit checkout flow")
    parser.add_argument("--package-id", required=True, help="Package id")
    parser.add_argument("--dual", type=int, default=0, help="Dual room spots")
    parser.add_argument("--triple", type=int, default=0, help="Triple room spots")
    parser.add_argument("--quad", type=int, default=0, help="Quad room spots")
    parser.add_argument("--payment-method", default="stripe", choices=["stripe", "bank_transfer"])
    parser.add_argument("--email", default="buyer@example.com", help="Buyer email")
    args = parser.parse_args()

    # Step 1: Fetch the package
    print_step(1, "Fetch package")
    package_result = api_request("GET", f"/api/v1/packages/{args.package_id}")
    if not print_result(package_result, ["id", "name", "status", "bookable"]):
        sys.exit(1)
    package = package_result["data"]
    if not package.get("bookable"):
        print(f"ERROR: {package['name']} is not open for booking")
        sys.exit(1)

    # Step 2: Quote
    print_step(2, "Quote spot selection")
    quote_result = api_request("POST", "/api/v1/bookings/quote", {
        "packageId": args.package_id,
        "spots": {"dual": args.dual, "triple": args.triple, "quad": args.quad},
        "paymentMethod": args.payment_method,
    })
    if not print_result(quote_result, ["display", "installments"]):
        sys.exit(1)

    # Step 3: Validate wizard steps
    draft = build_draft(args)
    print_step(3, "Validate wizard steps")
    for step in range(1, 5):
        validate_result = api_request("POST", "/api/v1/bookings/validate", {"step": step, "draft": draft})
        if validate_result["status"] >= 400 or not validate_result["data"].get("valid"):
            print_result(validate_result)
            sys.exit(1)
        print(f"  Step {step}: valid")

    # Step 4: Checkout session
    print_step(4, "Create checkout session")
    checkout_result = api_request("POST", "/api/v1/payments/checkout-session", {
        "packageName": package["name"],
        "packageId": args.package_id,
        "spots": draft["spots"],
        "buyerInfo": draft["buyerInfo"],
        "participants": [
            {"firstName": p["firstName"], "lastName": p["lastName"]} for p in draft["participants"]
        ],
        "participantCount": len(draft["participants"]),
        "paymentMethod": args.payment_method,
    })
    if not print_result(checkout_result, ["sessionId", "url"]):
        sys.exit(1)

    print("\n" + "="*60)
    print(f"Open to pay the deposit: {checkout_result['data']['url']}")
    print("="*60)


if __name__ == "__main__":
    main()
