#!/usr/bin/env python3
"""
Account maintenance for the Cure It SQLite database.

This script DOES NOT read or reveal any existing passwords.  It sets a
new password hash (PBKDF2‑HMAC‑SHA256, format ``salthex$hashhex``) or a
new role for the account with the given email.

Usage:
    cure-it-manage --db ./cure_it.db set-password --email admin@cureit.app
    cure-it-manage --db ./cure_it.db set-role --email someone@example.com --role admin

If --password is omitted, you will be prompted to enter it securely.
Exit codes: 0 on success, 1 for a missing database or empty password,
2 for an unknown email.
"""

import argparse
import getpass
import os
import sys
from typing import List, Optional

from cure_it_api.app.core.config import settings
from cure_it_api.app.core.db import get_database_path
from cure_it_api.app.core.security import hash_password
from cure_it_api.app.schemas.user import Role
from cure_it_api.app.storage.sqlite import SQLiteStorage


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Maintain Cure It accounts (SQLite backend).")
    ap.add_argument(
        "--db",
        default=get_database_path(settings.database_url),
        help="Path to SQLite DB file (defaults to DATABASE_URL)",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    pw = sub.add_parser("set-password", help="Replace an account's password")
    pw.add_argument("--email", required=True, help="Account email to update")
    pw.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")

    role = sub.add_parser("set-role", help="Change an account's role")
    role.add_argument("--email", required=True, help="Account email to update")
    role.add_argument("--role", required=True, choices=[r.value for r in Role])
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        return 1

    storage = SQLiteStorage(args.db)
    user = storage.get_user_by_email(args.email)
    if user is None:
        print(f"[!] No user found with email: {args.email}", file=sys.stderr)
        return 2

    if args.command == "set-password":
        new_password = args.password or getpass.getpass("Enter NEW password: ")
        if not new_password:
            print("[!] Empty password is not allowed.", file=sys.stderr)
            return 1
        storage.update_user(user.id, {"password": hash_password(new_password)})
        print(f"[+] Password updated for user: {args.email}")
    else:
        storage.update_user(user.id, {"role": args.role})
        print(f"[+] Role for {args.email} set to {args.role}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
