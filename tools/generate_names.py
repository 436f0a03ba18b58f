"""Print a generated name set as JSON.

Mirrors the outputs of a Bicep naming module so pipelines can feed the names
into parameter files or ``az deployment`` calls.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any

# Support both running from workspace root and tools directory
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.name_service import generate_names, list_private_dns_zones  # noqa: E402
from core.naming_config import ENVIRONMENTS, REGION_FULL_NAMES, ConfigurationError  # noqa: E402

logger = logging.getLogger("generate_names")


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate compliant Azure resource names.")
    parser.add_argument(
        "--region",
        dest="region_abbreviation",
        choices=sorted(REGION_FULL_NAMES),
        help="Region short code.",
    )
    parser.add_argument("--environment", choices=ENVIRONMENTS, help="Deployment environment.")
    parser.add_argument("--workload", dest="workload_name", help="Workload name (2-10 characters).")
    parser.add_argument("--suffix", dest="unique_suffix", default="", help="Optional unique suffix (up to 13 characters).")
    parser.add_argument("--prefix", dest="org_prefix", default="", help="Optional organisation prefix (up to 5 characters).")
    parser.add_argument("--instance", type=int, default=1, help="Instance number between 1 and 999.")
    parser.add_argument(
        "--cloud",
        default=os.environ.get("NAMING_DEFAULT_CLOUD"),
        help="Cloud used for private DNS zone suffixes. Defaults to $NAMING_DEFAULT_CLOUD or AzureCloud.",
    )
    parser.add_argument(
        "--resource-type",
        dest="resource_types",
        action="append",
        help="Restrict output to this resource-type key. May be repeated.",
    )
    parser.add_argument("--category", help="Restrict output to a rule category (e.g. networking).")
    parser.add_argument(
        "--dns-zones-only",
        action="store_true",
        help="Only print the private DNS zone names for --cloud.",
    )
    parser.add_argument("--names-only", action="store_true", help="Print only the name mapping.")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (0 for compact output).")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging on stderr.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = get_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr)

    try:
        if args.dns_zones_only:
            output: Any = list_private_dns_zones(args.cloud)
        else:
            if not args.region_abbreviation or not args.environment or not args.workload_name:
                parser.error("--region, --environment and --workload are required.")
            payload = {
                "region_abbreviation": args.region_abbreviation,
                "environment": args.environment,
                "workload_name": args.workload_name,
                "unique_suffix": args.unique_suffix,
                "org_prefix": args.org_prefix,
                "instance": args.instance,
                "cloud": args.cloud,
                "resource_types": args.resource_types,
                "category": args.category,
            }
            logger.debug("Generating names for %s", payload)
            result = generate_names(payload)
            output = result.names.to_dict() if args.names_only else result.to_dict()
    except ConfigurationError as exc:
        logger.debug("Rejected naming input", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(output, indent=args.indent or None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
