#!/usr/bin/env python3
"""
Snowsight command line.

Thin wrapper over `SnowsightClient`: prints the raw payload of one call.
The Snowsight session cookie is read from SNOWSIGHT_AUTH_TOKEN.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from snowsight.client import SnowsightClient
from snowsight.config import load_config
from snowsight.transport.telemetry import CONSOLE_LOGGER_NAME


def configure_logging(level: str, verbose: bool = False) -> None:
    """Operator log to stderr at `level`; console channel always shown, without decoration."""
    logging.basicConfig(
        level=level if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    console = logging.getLogger(CONSOLE_LOGGER_NAME)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    console.addHandler(handler)
    # The console handler is the only sink for this channel, verbose or not.
    console.propagate = False
    console.setLevel(logging.WARNING)


def _session_client(args: argparse.Namespace) -> SnowsightClient:
    token = (os.getenv("SNOWSIGHT_AUTH_TOKEN", "") or "").strip()
    if not token:
        raise SystemExit("SNOWSIGHT_AUTH_TOKEN is not set")
    return SnowsightClient(
        account_url=args.account_url,
        app_server_url=args.app_server_url,
        user_name=args.user,
        snowsight_token=token,
    )


def run(args: argparse.Namespace) -> str:
    if args.command == "discover":
        return SnowsightClient(account_url="").account_app_endpoints(args.account_name)
    if args.command == "client-id":
        return SnowsightClient(account_url=args.account_url, app_server_url=args.app_server_url).snowsight_client_id()

    client = _session_client(args)
    if args.command == "worksheets":
        return client.list_worksheets(args.org_id)
    if args.command == "dashboards":
        return client.list_dashboards(args.org_id)
    if args.command == "folders":
        return client.list_folders(args.org_id)
    if args.command == "query-details":
        return client.query_details(args.query_id, args.role)
    if args.command == "query-profile":
        return client.query_profile(args.query_id, args.role, args.retry)
    raise SystemExit(f"Unknown command: {args.command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Call the Snowsight REST surface",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Resolve app server and account URLs
  python main.py discover myorg-myaccount

  # List worksheets (session cookie from a previous login)
  export SNOWSIGHT_AUTH_TOKEN='user-...=...; Path=/; HttpOnly; Secure'
  python main.py worksheets --app-server-url https://apps-api.c1.us-west-2.aws.app.snowflake.com \\
      --account-url https://myaccount.snowflakecomputing.com --user JDOE --org-id 123456
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show the full request log on stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("discover", help="Resolve app endpoints for an account name")
    p.add_argument("account_name")

    p = sub.add_parser("client-id", help="Fetch the OAuth start page carrying the Snowsight client id")
    p.add_argument("--app-server-url", required=True)
    p.add_argument("--account-url", required=True)

    def _session_args(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--app-server-url", required=True)
        sp.add_argument("--account-url", required=True)
        sp.add_argument("--user", required=True, help="Login name the session belongs to")

    for name, help_text in (
        ("worksheets", "List worksheets"),
        ("dashboards", "List dashboards"),
        ("folders", "List folders"),
    ):
        p = sub.add_parser(name, help=help_text)
        _session_args(p)
        p.add_argument("--org-id", required=True)

    p = sub.add_parser("query-details", help="Query monitoring details")
    _session_args(p)
    p.add_argument("query_id")
    p.add_argument("--role", help="Role to run the lookup as")

    p = sub.add_parser("query-profile", help="Query plan data")
    _session_args(p)
    p.add_argument("query_id")
    p.add_argument("--role", help="Role to run the lookup as")
    p.add_argument("--retry", type=int, help="Job retry attempt rank")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(load_config().log_level, args.verbose)

    result = run(args)
    if not result:
        print("No result (see log for details)", file=sys.stderr)
        return 1
    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
