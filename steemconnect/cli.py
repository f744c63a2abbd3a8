import json
import sys

from dotenv import load_dotenv
from loguru import logger

from steemconnect.config import EndpointConfig
from steemconnect.errors import ConfigurationError, IdentityProviderError
from steemconnect.provider import Provider


def _print_json(data):
    print(json.dumps(data, indent=2, sort_keys=True))


def run_command(provider: Provider, args) -> int:
    if args.command == "authorize-url":
        scopes = args.scopes.split(",") if args.scopes else None
        url, state = provider.get_authorization_url(state=args.state, scopes=scopes)
        print(url)
        print(f"state: {state}", file=sys.stderr)
        return 0

    if args.command == "exchange":
        token = provider.parse_return(args.code)
        if token is None:
            print("❌ No authorization code", file=sys.stderr)
            return 1
        _print_json(dict(token))
        return 0

    if args.command == "refresh":
        token = provider.refresh_token_string(args.refresh_token)
        if token is None:
            print("❌ No refresh token", file=sys.stderr)
            return 1
        _print_json(dict(token))
        return 0

    bearer = {"access_token": args.access_token, "token_type": "bearer"}
    if args.command == "me":
        _print_json(provider.get_resource_owner(bearer).to_dict())
    elif args.command == "revoke":
        provider.revoke_token(bearer)
        print("🗑️ Token revoked.")
    return 0


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="steemconnect",
        description="SteemConnect OAuth2 helper. Reads STEEMCONNECT_* settings from the environment or .env.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    authorize = sub.add_parser("authorize-url", help="Print the authorization URL")
    authorize.add_argument("--state", default=None, help="State to embed in the URL")
    authorize.add_argument(
        "--scopes", default=None, help="Comma separated scopes, e.g. login,vote"
    )

    exchange = sub.add_parser("exchange", help="Exchange an authorization code")
    exchange.add_argument("code", help="Code received on the return URL")

    refresh = sub.add_parser("refresh", help="Refresh an access token")
    refresh.add_argument("refresh_token", help="Refresh token string")

    me = sub.add_parser("me", help="Show the account behind an access token")
    me.add_argument("access_token")

    revoke = sub.add_parser("revoke", help="Revoke an access token")
    revoke.add_argument("access_token")
    return parser


def main(argv=None):
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        provider = Provider(EndpointConfig.from_env())
    except ConfigurationError as error:
        print(f"❌ {error}", file=sys.stderr)
        sys.exit(2)

    try:
        code = run_command(provider, args)
    except IdentityProviderError as error:
        logger.debug(f"Provider response: {error.response_body}")
        print(f"❌ SteemConnect error: {error.message}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
