"""Catalog listing command handler."""

from __future__ import annotations

import argparse
import sys

from ..catalog import build_catalog
from ..config import settings
from ..control import write_catalog_dump


def cmd_list(args: argparse.Namespace) -> int:
    """Print every metric name, or write the catalog dump file."""
    catalog = build_catalog(settings)

    if args.output:
        write_catalog_dump(catalog, args.output)
        return 0

    width = max(len(name) for name in catalog)
    for descriptor in catalog.values():
        sys.stdout.write(f"{descriptor.name:<{width}}  {descriptor.description}\n")
    return 0
