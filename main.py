"""CLI entry point for the Expensify partner client."""

import argparse
import sys
from pathlib import Path

import pydantic

from expensify_partner import (
    DistanceTransaction,
    ExpenseTransaction,
    ExpensifyClient,
    ExpensifyError,
    ExpensifySettings,
    ReceiptFetch,
    ReceiptUpload,
)


def _add_partner_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--sso", required=True, help="SSO token from the sso command")
    parser.add_argument(
        "--partner-user-id", required=True, help="Partner user ID (usually an email)"
    )
    parser.add_argument("--comment", default=None, help="Transaction comment")


def _add_expense_arguments(parser: argparse.ArgumentParser, merchant_required: bool = True):
    parser.add_argument("--created", required=True, help="Transaction date (YYYY-MM-DD)")
    parser.add_argument("--merchant", required=merchant_required, help="Merchant name")
    parser.add_argument(
        "--amount", type=int, default=None, help="Amount in cents, e.g. 2299 for 22.99"
    )
    parser.add_argument("--currency", default=None, help="ISO 4217 currency code")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Expensify partner API client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Credentials are read from the environment or a .env file:
  EXPENSIFY_PARTNER_PASSWORD, EXPENSIFY_PARTNER_NAME,
  EXPENSIFY_AES_KEY, EXPENSIFY_AES_IV

Examples:
  python main.py sso --user-secret test1324
  python main.py auth-url --sso 675sd98769sd69sd --partner-user-id testuser@test.com
  python main.py create-expense --sso ... --partner-user-id ... \\
      --created 2015-04-07 --merchant "Tire Emporium" --amount 2299 --currency USD
  python main.py create-distance --sso ... --partner-user-id ... \\
      --created 2015-04-07 --distance 1.2 --units Mi
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sso = subparsers.add_parser("sso", help="Generate an SSO token")
    sso.add_argument("--user-secret", required=True, help="Expensify partner user secret")

    auth_url = subparsers.add_parser("auth-url", help="Build the Auth redirect URL")
    auth_url.add_argument("--sso", required=True, help="SSO token")
    auth_url.add_argument("--partner-user-id", required=True, help="Partner user ID")
    auth_url.add_argument("--exit-to", default=None, help="URL to redirect the user to")

    expense = subparsers.add_parser("create-expense", help="Create an expense")
    _add_partner_arguments(expense)
    _add_expense_arguments(expense)

    distance = subparsers.add_parser("create-distance", help="Create a mileage expense")
    _add_partner_arguments(distance)
    distance.add_argument("--created", required=True, help="Date of the trip (YYYY-MM-DD)")
    distance.add_argument("--distance", type=float, required=True, help="Distance travelled")
    distance.add_argument("--units", choices=["Mi", "Km"], default="Mi", help="Distance units")

    upload = subparsers.add_parser("upload-receipt", help="Create an expense with a receipt file")
    _add_partner_arguments(upload)
    _add_expense_arguments(upload, merchant_required=False)
    upload.add_argument("--file", type=Path, required=True, help="Receipt image or PDF")
    upload.add_argument(
        "--content-type", default="application/octet-stream", help="MIME type of the receipt"
    )

    fetch = subparsers.add_parser("fetch-receipt", help="Create an expense from a receipt URL")
    _add_partner_arguments(fetch)
    _add_expense_arguments(fetch, merchant_required=False)
    fetch.add_argument("--receipt-url", required=True, help="Location of the receipt image")

    return parser


def run(args: argparse.Namespace, client: ExpensifyClient) -> str:
    """Execute a parsed command and return what should be printed."""
    partner_fields = {}
    if args.command not in ("sso", "auth-url"):
        partner_fields = {
            "sso": args.sso,
            "partner_user_id": args.partner_user_id,
            "comment": args.comment,
        }

    if args.command == "sso":
        return client.authenticate(args.user_secret)

    elif args.command == "auth-url":
        return client.authorize_url(args.sso, args.partner_user_id, args.exit_to)

    elif args.command == "create-distance":
        return client.create_distance_transaction(
            DistanceTransaction(
                created=args.created,
                distance=args.distance,
                units=args.units,
                **partner_fields,
            )
        )

    expense_fields = {
        "created": args.created,
        "merchant": args.merchant,
        "amount": args.amount,
        "currency": args.currency,
        **partner_fields,
    }

    if args.command == "create-expense":
        return client.create_transaction(ExpenseTransaction(**expense_fields))

    elif args.command == "upload-receipt":
        return client.upload_receipt(
            ReceiptUpload.from_path(args.file, content_type=args.content_type, **expense_fields)
        )

    elif args.command == "fetch-receipt":
        return client.fetch_receipt(ReceiptFetch(receipt_url=args.receipt_url, **expense_fields))

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        with ExpensifyClient(ExpensifySettings()) as client:
            output = run(args, client)
    except (ExpensifyError, OSError, pydantic.ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
