"""
__main__.py  –  Command-line access to the resources

  python -m powerbi_resources list-types
  python -m powerbi_resources import powerbi_workspace_access "Sales/a@contoso.com"
  python -m powerbi_resources read   powerbi_gateway <gateway-id> --set gateway_id=<gateway-id>
  python -m powerbi_resources delete powerbi_workspace_access "Sales/a@contoso.com"

Credentials are read from the environment (see ``powerbi_resources.config``).
The resulting state is printed as JSON on stdout.
"""

import argparse
import json
import sys

import requests

from .errors import PowerBIResourceError
from .provider import Provider
from .resources import RESOURCE_TYPES, ResourceData


def _parse_assignments(pairs: list[str]) -> dict[str, str]:
    values: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {pair!r}")
        values[key.strip()] = value
    return values


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="powerbi_resources", description=__doc__.split("\n\n")[0])
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list-types", help="list the supported resource types")

    for name, help_text in (
        ("read",   "refresh the state of an existing resource"),
        ("import", "adopt a remote object given only its resource ID"),
        ("delete", "delete a resource"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("type", help="resource type, e.g. powerbi_workspace_access")
        cmd.add_argument("id", help="resource ID")
        if name != "import":
            cmd.add_argument(
                "--set", dest="values", action="append", default=[], metavar="KEY=VALUE",
                help="known state attribute (repeatable)",
            )
    return parser


def run(args: argparse.Namespace, provider: Provider) -> ResourceData | None:
    resource = provider.resource(args.type)
    if args.command == "import":
        return resource.import_state(args.id)

    data = ResourceData(resource.schema, args.id, _parse_assignments(args.values))
    if args.command == "read":
        resource.read(data)
    else:
        resource.delete(data)
    return data


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "list-types":
        for resource_type in RESOURCE_TYPES:
            print(resource_type.type_name)
        return 0

    print(f"=== {args.command} {args.type}  {args.id} ===", file=sys.stderr)
    try:
        provider = Provider.from_settings()
        data = run(args, provider)
    except (PowerBIResourceError, requests.RequestException, KeyError, argparse.ArgumentTypeError) as exc:
        print(f"ERROR – {exc}", file=sys.stderr)
        return 1

    if args.command != "delete" and not data.exists:
        print("  Resource does not exist remotely", file=sys.stderr)
    print(json.dumps(data.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
