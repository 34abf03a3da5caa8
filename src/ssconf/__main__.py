"""CLI entry point for ssconf.

Fetches an online config from a pinned server, or prints the pin of a
certificate file so operators can publish it alongside the config URL.

Examples:
    ```bash
    python -m ssconf fetch https://config.example.com/sip008.json \\
        --cert-fingerprint IA3K+nZ8hFDs5kSHnAYqDN9SJA/gW7frKEYRw67z7C4=
    python -m ssconf fetch https://config.example.com/sip008.json \\
        --cert-fingerprint IA3K+nZ8hFDs5kSHnAYqDN9SJA/gW7frKEYRw67z7C4= --json
    python -m ssconf fingerprint /etc/ssl/certs/config.example.com.pem
    ```
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from ssconf.core.exceptions import ConfigurationError, FetchValidationError
from ssconf.core.logger import Logger, setup_logging
from ssconf.fetcher import PinnedFetcher
from ssconf.models.request import FetchConfigRequest
from ssconf.models.result import FetchConfigResult
from ssconf.utils.tls import compute_certificate_fingerprint, load_certificate_der


logger = Logger("cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="ssconf",
        description="Certificate-pinned SIP008 online config fetcher",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level (default: WARNING)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    fetch = commands.add_parser("fetch", help="Fetch an online config from a pinned server")
    fetch.add_argument("url", help="https URL of the SIP008 document")
    fetch.add_argument(
        "--cert-fingerprint",
        required=True,
        help="Base64 SHA-256 fingerprint of the server's leaf certificate",
    )
    fetch.add_argument("--method", default="GET", help="HTTP method (default: GET)")
    fetch.add_argument("--config", type=Path, help="Fetcher config YAML path")
    fetch.add_argument("--json", action="store_true", help="Print the result as JSON")
    fetch.add_argument(
        "--show-passwords",
        action="store_true",
        help="Print server passwords and plugin options instead of masking them",
    )

    fingerprint = commands.add_parser(
        "fingerprint", help="Print the pin of a PEM or DER certificate file"
    )
    fingerprint.add_argument("cert_file", type=Path, help="Certificate file")

    return parser.parse_args(argv)


def render_result(result: FetchConfigResult, *, show_passwords: bool = False) -> str:
    """Human-readable rendering of a fetch result."""
    lines = [f"status: {result.http_status_code}"]
    if result.is_redirect:
        lines.append(f"redirect: {result.redirect_url}")
        return "\n".join(lines)

    lines.append(f"proxies: {len(result.proxies)}")
    for proxy in result.proxies:
        entry = proxy.to_dict(include_password=show_passwords)
        label = f" ({proxy.remarks})" if proxy.remarks else ""
        lines.append(
            f"- {proxy.server}:{proxy.server_port} {proxy.method} "
            f"password={entry['password']}{label}"
        )
        if proxy.plugin:
            lines.append(f"  plugin: {proxy.plugin} {entry.get('plugin_opts', '')}".rstrip())
    return "\n".join(lines)


async def run_fetch(args: argparse.Namespace) -> int:
    """Run the ``fetch`` command. Returns the process exit code."""
    try:
        fetcher = PinnedFetcher.from_yaml(args.config) if args.config else PinnedFetcher()
    except (ConfigurationError, FileNotFoundError) as e:
        logger.error("config_load_failed", error=str(e))
        return 1

    try:
        request = FetchConfigRequest(
            url=args.url,
            certificate_fingerprint=args.cert_fingerprint,
            method=args.method,
        )
    except (TypeError, ValueError) as e:
        logger.error("invalid_request", error=str(e))
        return 1

    try:
        result = await fetcher.fetch(request)
    except FetchValidationError as e:
        logger.error("online_config_fetch_failed", error=str(e), kind=type(e).__name__)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(include_passwords=args.show_passwords), indent=2))
    else:
        print(render_result(result, show_passwords=args.show_passwords))
    return 0


def run_fingerprint(args: argparse.Namespace) -> int:
    """Run the ``fingerprint`` command. Returns the process exit code."""
    try:
        der = load_certificate_der(args.cert_file)
    except (OSError, ValueError) as e:
        logger.error("certificate_load_failed", path=str(args.cert_file), error=str(e))
        return 1
    print(compute_certificate_fingerprint(der))
    return 0


async def main(argv: list[str] | None = None) -> int:
    """Main entry point: parse args, configure logging, dispatch the command."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.command == "fingerprint":
            return run_fingerprint(args)
        return await run_fetch(args)
    except KeyboardInterrupt:
        logger.info("interrupted")
        return 130


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
