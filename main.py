"""
main.py - Command-line entry point for vinted_scraper.

  python main.py search "https://www.vinted.fr/catalog?search_text=nike&brand[]=53"
  python main.py user 123456
  python main.py item 987654
  python main.py boost https://www.vinted.fr/items/987654 50

Proxies are read from VINTED_PROXIES (semicolon-separated) and
VINTED_PROXY_LIST_URL, the log level from LOG_LEVEL.
"""
import argparse
import json
import sys

from vinted_scraper import Vinted, VintedError
from vinted_scraper.config import ClientConfig
from vinted_scraper.logger import setup_logging, get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query the Vinted API")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("search", help="Run a catalog search from a website URL")
    p.add_argument("url")

    p = sub.add_parser("user", help="Fetch a user by id")
    p.add_argument("id", type=int)

    p = sub.add_parser("item", help="Fetch an item by id")
    p.add_argument("id", type=int)

    p = sub.add_parser("boost", help="Send anonymous views to an item page")
    p.add_argument("url")
    p.add_argument("count", type=int)

    return parser


def run(args, client: Vinted):
    if args.command == "search":
        return client.search(args.url)
    if args.command == "user":
        return client.fetch_user(args.id)
    if args.command == "item":
        return client.fetch_item(args.id)

    result = client.boost_item(args.url, args.count)
    confirmed = result.wait()
    return {
        "requested":       result.requested,
        "dispatched":      result.dispatched,
        "confirmed":       confirmed,
        "failed_attempts": result.failed_attempts,
    }


def main(argv=None) -> int:
    args   = build_parser().parse_args(argv)
    config = ClientConfig.from_env()
    setup_logging(config.log_level)
    log    = get_logger("main")

    with Vinted(config=config) as client:
        try:
            payload = run(args, client)
        except VintedError as e:
            log.error(f"{args.command} failed: {e}")
            return 1

    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
