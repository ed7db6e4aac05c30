#!/usr/bin/env python3
"""
check_vat.py — EU VAT number checker (VIES)

Features
- Input normalization (spaces and punctuation removed, uppercased)
- SOAP checkVat request against the European Commission VIES service
- SOAP Fault reporting (INVALID_INPUT, MS_UNAVAILABLE, ...)
- 1 second pause after each answered request (~60 checks per minute)
- Clear CLI output, or tab-separated rows with --raw

Environment (.env)
  VIES_ENDPOINT=...            # default: the official EC endpoint
  VIES_RATE_LIMIT_SECONDS=1.0
  VIES_SOCKET_TIMEOUT=10

Usage
  python check_vat.py NL123456789B01 [BE0123456789 ...] [--raw] [-v]
  python check_vat.py --file vat_numbers.txt
"""

from __future__ import annotations

import logging
import os
import socket
from typing import List, Optional, Tuple

import click
from dotenv import load_dotenv

from vies.client import RATE_LIMIT_SECONDS, VIES_ENDPOINT, check_vat
from vies.models import ServiceResponse

# --------------------------
# Utilities
# --------------------------


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise click.BadParameter(f"{name} must be a number, got {value!r}")


def read_vat_file(path: str) -> List[str]:
    """One VAT number per line; blank lines and '#' comments skipped."""
    with open(path, "r", encoding="utf-8") as fh:
        lines = [line.strip() for line in fh]
    return [line for line in lines if line and not line.startswith("#")]


def format_raw(vat_number: str, result: ServiceResponse) -> str:
    """Input followed by the five result fields, tab-separated."""
    cells = [vat_number]
    for value in result.as_row():
        if isinstance(value, bool):
            value = "true" if value else "false"
        cells.append(" ".join(value.split()))
    return "\t".join(cells)


def print_result(vat_number: str, result: ServiceResponse) -> None:
    """Print one check in a formatted block."""
    print("\n================ VAT Check =================")
    print(f"🔢 VAT number:      {vat_number}")
    if not result.ok:
        print(f"❌ Error:           {result.error}")
        print("============================================\n")
        return

    print(f"📅 Request date:    {result.request_date or '-'}")
    icon = "✅" if result.valid else "🚫"
    print(f"{icon} Valid:           {'yes' if result.valid else 'no'}")
    print(f"🏢 Name:            {result.name or '-'}")
    address_lines = [a.strip() for a in result.address.splitlines() if a.strip()]
    if address_lines:
        print(f"📍 Address:         {address_lines[0]}")
        for extra in address_lines[1:]:
            print(f"                   {extra}")
    else:
        print("📍 Address:         -")
    print("============================================\n")


# --------------------------
# CLI
# --------------------------


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("vat_numbers", nargs=-1)
@click.option(
    "--file",
    "vat_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Read VAT numbers from a file, one per line.",
)
@click.option("--raw", is_flag=True, help="Print tab-separated rows instead of blocks.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(
    vat_numbers: Tuple[str, ...],
    vat_file: Optional[str],
    raw: bool,
    verbose: bool,
) -> None:
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    endpoint = os.getenv("VIES_ENDPOINT") or VIES_ENDPOINT
    delay = _float_env("VIES_RATE_LIMIT_SECONDS", RATE_LIMIT_SECONDS)
    # Keep HTTP from hanging forever
    socket.setdefaulttimeout(_float_env("VIES_SOCKET_TIMEOUT", 10.0))

    todo = list(vat_numbers)
    if vat_file:
        todo.extend(read_vat_file(vat_file))

    if not todo:
        print("\n❌ Error: give at least one VAT_NUMBER or --file")
        raise SystemExit(2)

    all_valid = True
    for vat_number in todo:
        result = check_vat(vat_number, endpoint=endpoint, delay=delay)
        all_valid = all_valid and result.ok and result.valid
        if raw:
            print(format_raw(vat_number, result))
        else:
            print_result(vat_number, result)

    raise SystemExit(0 if all_valid else 1)


if __name__ == "__main__":
    main()
