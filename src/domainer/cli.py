#!/usr/bin/env python3
"""
CLI tool for managing domainer options and domain mappings.

Usage:
    python -m domainer.cli options
    python -m domainer.cli get www_rule
    python -m domainer.cli set force_https true
    python -m domainer.cli domains
    python -m domainer.cli add-domain example.com --blog-id 2 --primary
    python -m domainer.cli remove-domain example.com
    python -m domainer.cli serve
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

import yaml

from .config import Config, load_config
from .domains.types import WWW_RULES, Domain
from .errors import DomainerError
from .logging_config import setup_logging
from .registry.registry import ConfigRegistry, SaveScope
from .storage import create_storage

logger = logging.getLogger(__name__)


def print_json(data: Any, indent: int = 2) -> None:
    """Print JSON."""
    print(json.dumps(data, indent=indent, default=str))


def parse_value(raw: str) -> Any:
    """Parse a command-line value as YAML, so ``true``, ``3`` and ``[a, b]`` work."""
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw


def open_registry(config: Config) -> ConfigRegistry:
    registry = ConfigRegistry(create_storage(config.storage), strict=config.registry.strict)
    registry.load()
    return registry


def cmd_options(args, registry: ConfigRegistry) -> int:
    """Show every option with its default."""
    defaults = registry.get_defaults()
    values = registry.all_options()
    if args.json:
        print_json({"options": values, "defaults": defaults})
        return 0

    width = max(len(name) for name in defaults) if defaults else 0
    for name in registry.option_names():
        marker = "" if values.get(name) == defaults[name] else "  (changed)"
        print(f"{name.ljust(width)}  {json.dumps(values.get(name))}{marker}")
    return 0


def cmd_get(args, registry: ConfigRegistry) -> int:
    """Print a single option value."""
    if not registry.has(args.name):
        print(f"Error: option not supported: {args.name}", file=sys.stderr)
        return 1
    print_json(registry.get(args.name))
    return 0


def cmd_set(args, registry: ConfigRegistry) -> int:
    """Set an option value and save."""
    spec = registry.spec(args.name)
    if spec is None:
        print(f"Error: option not supported: {args.name}", file=sys.stderr)
        return 1

    value = spec.coerce(parse_value(args.value))
    registry.set(spec.name, value)
    registry.save(SaveScope.OPTIONS)
    print(f"{spec.name} = {json.dumps(value)}")
    return 0


def cmd_domains(args, registry: ConfigRegistry) -> int:
    """List mapped domains."""
    domains = registry.domains() if args.site is None else registry.find_domains(args.site)
    if args.json:
        print_json([d.dump() for d in domains])
        return 0

    if not domains:
        print("No domains mapped")
        return 0

    for domain in domains:
        flags = []
        if domain.primary:
            flags.append("primary")
        if domain.is_alias:
            flags.append("alias")
        if not domain.active:
            flags.append("inactive")
        if domain.secure:
            flags.append("https")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        print(f"{domain.name}  site={domain.blog_id}  www={domain.www}{suffix}")
    return 0


def cmd_add_domain(args, registry: ConfigRegistry) -> int:
    """Map a domain and save."""
    domain = Domain(
        name=args.name,
        blog_id=args.blog_id,
        primary=args.primary,
        active=not args.inactive,
        redirect=not args.alias,
        www=args.www,
        secure=args.secure,
    )
    if not domain.name:
        print(f"Error: invalid domain name: {args.name}", file=sys.stderr)
        return 1

    try:
        registry.add_domain(domain, replace=args.replace)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    registry.save(SaveScope.DOMAINS)
    print(f"Mapped {domain.name} to site {domain.blog_id}")
    return 0


def cmd_remove_domain(args, registry: ConfigRegistry) -> int:
    """Unmap a domain and save."""
    if not registry.remove_domain(args.name):
        print(f"Error: domain not found: {args.name}", file=sys.stderr)
        return 1

    registry.save(SaveScope.DOMAINS)
    print(f"Removed {Domain.sanitize(args.name)}")
    return 0


def cmd_serve(args, config: Config) -> int:
    """Run the management API."""
    import uvicorn

    from .main import create_app

    uvicorn.run(
        create_app(config),
        host=args.host or config.server.host,
        port=args.port or config.server.port,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="domainer",
        description="Manage domainer options and domain mappings",
    )
    parser.add_argument("--config", "-c", help="Path to config file (YAML or JSON)")
    parser.add_argument("--log-level", help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("options", help="List options")
    p.add_argument("--json", action="store_true", help="Output JSON")

    p = subparsers.add_parser("get", help="Get an option value")
    p.add_argument("name")

    p = subparsers.add_parser("set", help="Set an option value and save")
    p.add_argument("name")
    p.add_argument("value", help="Value, parsed as YAML (true, 3, [a, b])")

    p = subparsers.add_parser("domains", help="List mapped domains")
    p.add_argument("--site", type=int, help="Only domains of this site")
    p.add_argument("--json", action="store_true", help="Output JSON")

    p = subparsers.add_parser("add-domain", help="Map a domain and save")
    p.add_argument("name")
    p.add_argument("--blog-id", type=int, required=True, help="Site to map to")
    p.add_argument("--primary", action="store_true", help="Make this the site's primary domain")
    p.add_argument("--alias", action="store_true", help="Serve as an alias instead of redirecting")
    p.add_argument("--inactive", action="store_true", help="Register without serving")
    p.add_argument("--www", choices=WWW_RULES, default="auto", help="www preference")
    p.add_argument("--secure", action="store_true", help="Serve over https")
    p.add_argument("--replace", action="store_true", help="Replace an existing mapping")

    p = subparsers.add_parser("remove-domain", help="Unmap a domain and save")
    p.add_argument("name")

    p = subparsers.add_parser("serve", help="Run the management API")
    p.add_argument("--host")
    p.add_argument("--port", type=int)

    return parser


COMMANDS = {
    "options": cmd_options,
    "get": cmd_get,
    "set": cmd_set,
    "domains": cmd_domains,
    "add-domain": cmd_add_domain,
    "remove-domain": cmd_remove_domain,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        print(f"Error: cannot load config: {e}", file=sys.stderr)
        return 2

    setup_logging(args.log_level or config.logging.level)

    if args.command == "serve":
        return cmd_serve(args, config)

    try:
        registry = open_registry(config)
        return COMMANDS[args.command](args, registry)
    except DomainerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
