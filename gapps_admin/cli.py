"""Command-line front-end for Google Apps domain, user and group administration.

Thin argparse wrapper around the Provisioning facade; results are printed as JSON.
"""
from __future__ import annotations
import argparse
import json
import logging
import os
import sys

from .config import load_settings
from .core.directory import Provisioning, VendorError
from .core.directory.exceptions import DirectoryError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Google Apps directory admin helper")
    parser.add_argument("--domain", default=os.environ.get("GAPPS_DOMAIN"))
    parser.add_argument("--secret-file", default=os.environ.get("GAPPS_CLIENT_SECRET_FILE"),
                        help="OAuth client secret JSON file")
    parser.add_argument("--token-file", default=os.environ.get("GAPPS_TOKEN_FILE"),
                        help="Token cache file (default: ~/.google_auth.json)")
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("language", help="Domain default language")
    sub.add_parser("org-name", help="Domain organization name")
    sub.add_parser("license", help="License usage summary")

    su = sub.add_parser("users", help="List all users")
    su.add_argument("--custom-field-mask")
    su.add_argument("--customer")
    su.add_argument("--order-by", choices=["email", "familyName", "givenName"])
    su.add_argument("--query")
    su.add_argument("--sort-order", choices=["ASCENDING", "DESCENDING"])
    su.add_argument("--view-type", choices=["admin_view", "domain_public"])

    sg = sub.add_parser("user", help="Show one user")
    sg.add_argument("--email", required=True)

    sub.add_parser("groups", help="List all groups")

    sgi = sub.add_parser("group", help="Show one group")
    sgi.add_argument("--group", required=True)

    smg = sub.add_parser("member-groups", help="Groups a member belongs to")
    smg.add_argument("--member", required=True)

    sms = sub.add_parser("members", help="List the members of a group")
    sms.add_argument("--group", required=True)

    sm = sub.add_parser("member", help="Show one group membership")
    sm.add_argument("--group", required=True)
    sm.add_argument("--member", required=True)

    sa = sub.add_parser("add-member", help="Add a member to a group")
    sa.add_argument("--group", required=True)
    sa.add_argument("--member", required=True)
    sa.add_argument("--role", default="MEMBER")

    sup = sub.add_parser("update-member", help="Change a member's role")
    sup.add_argument("--group", required=True)
    sup.add_argument("--member", required=True)
    sup.add_argument("--role", required=True)

    sr = sub.add_parser("remove-member", help="Remove a member from a group")
    sr.add_argument("--group", required=True)
    sr.add_argument("--member", required=True)

    return parser


def run_command(admin: Provisioning, args: argparse.Namespace):
    """Dispatch a parsed sub-command to the matching Provisioning call."""
    if args.cmd == "language":
        return admin.get_default_language()
    if args.cmd == "org-name":
        return admin.get_organization_name()
    if args.cmd == "license":
        return admin.get_license_info()
    if args.cmd == "users":
        return admin.get_all_users(
            custom_field_mask=args.custom_field_mask,
            customer=args.customer,
            order_by=args.order_by,
            query=args.query,
            sort_order=args.sort_order,
            view_type=args.view_type,
        )
    if args.cmd == "user":
        return admin.get_user(args.email)
    if args.cmd == "groups":
        return admin.get_all_groups()
    if args.cmd == "group":
        return admin.get_group_info(args.group)
    if args.cmd == "member-groups":
        return admin.get_member_groups(args.member)
    if args.cmd == "members":
        return admin.get_group_members(args.group)
    if args.cmd == "member":
        return admin.get_group_member(args.group, args.member)
    if args.cmd == "add-member":
        return admin.add_member_to_group(args.group, args.member, args.role)
    if args.cmd == "update-member":
        return admin.update_group_membership(args.group, args.member, args.role)
    if args.cmd == "remove-member":
        return admin.delete_group_membership(args.group, args.member)
    raise ValueError(f"Unknown command: {args.cmd}")


def main(argv: list[str] | None = None) -> None:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_settings(args.domain, args.secret_file, args.token_file)
        admin = Provisioning.connect(config)
        result = run_command(admin, args)
    except DirectoryError as e:
        print(f"[{args.cmd}] Error: {e}", file=sys.stderr)
        sys.exit(1)

    if isinstance(result, VendorError):
        print(f"[{args.cmd}] Error: [{result.code}] {result.message}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
