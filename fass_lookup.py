#!/usr/bin/env python3
"""
FASS Medication Lookup
Quick reference for common Swedish medications, with a FASS.se search link
for everything else.

Usage:
    fass-lookup <medication_name>
    fass-lookup paracetamol
    fass-lookup "alvedon 500mg"
"""

import argparse
import logging
import sys

from fass_medications import MEDICATIONS, NotFound, build_search_url, resolve

logger = logging.getLogger(__name__)

DISCLAIMER = (
    "*This is informational only. Always consult healthcare professionals for medical advice.*",
    "*Sources: FASS.se, Läkemedelsverket*",
)


def format_otc(status, short=False):
    """Render an OtcStatus for display; `short` is the compact form used by --list."""
    if status.kind == 'otc':
        return 'Yes' if short else 'Yes (receptfritt)'
    if status.kind == 'rx':
        return 'No (Rx)' if short else 'No (receptbelagt)'
    if status.kind == 'conditional':
        return status.note
    raise ValueError(f"Unknown OTC status: {status.kind!r}")


def format_medication(med):
    return "\n".join([
        f"### {med.key.title()} ({', '.join(med.brands)})",
        "",
        f"**Use:** {med.use}",
        f"**Dosage:** {med.dose}",
        f"**OTC:** {format_otc(med.otc)}",
        f"**ATC Code:** {med.atc}",
        f"**Warnings:** {med.warnings}",
    ])


def render_report(query, result):
    """Build the markdown report for a query and its resolved Medication or NotFound."""
    output = [f"## Swedish Medication Lookup: {query}\n"]

    if isinstance(result, NotFound):
        output.append(f'No quick info available for "{query}" in local database.')
        if result.suggestions:
            output.append(f"Did you mean: {', '.join(result.suggestions)}?")
    else:
        output.append(format_medication(result))
    output.append("")

    # Always provide FASS link
    output.append("### Full Information on FASS")
    output.append(f"🔗 {build_search_url(query)}")
    output.append("")
    output.append("---")
    output.extend(DISCLAIMER)

    return "\n".join(output)


def lookup_medication(query):
    return render_report(query, resolve(query))


def help_text():
    lines = [
        "🇸🇪 Swedish Medications - FASS Lookup",
        "",
        "Usage: fass-lookup <medication_name>",
        "       fass-lookup paracetamol",
        "       fass-lookup Alvedon",
        '       fass-lookup "alvedon 500mg"',
        "",
        "Options:",
        "  -h, --help     Show this help message",
        "  -l, --list     List all medications in quick-lookup",
        "",
        "Available medications in quick-lookup:",
    ]
    lines.extend(f"  - {med.key} ({', '.join(med.brands)})" for med in MEDICATIONS)
    lines.append("")
    lines.append("For medications not listed, a FASS.se search link is provided.")
    return "\n".join(lines)


def list_text():
    lines = ["Available medications:", ""]
    for med in MEDICATIONS:
        lines.append(f"{med.key} ({', '.join(med.brands)})")
        lines.append(f"  Use: {med.use}")
        lines.append(f"  OTC: {format_otc(med.otc, short=True)}")
        lines.append("")
    return "\n".join(lines)


def build_argparser():
    p = argparse.ArgumentParser(
        prog="fass-lookup",
        description="Look up common Swedish medications and link to FASS.se.",
        add_help=False,
        allow_abbrev=False,
    )
    p.add_argument("query", nargs="*", help="Medication name (substance or brand)")
    p.add_argument("-h", "--help", action="store_true", dest="show_help")
    p.add_argument("-l", "--list", action="store_true", dest="show_list")
    return p


def main(argv=None):
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    args = build_argparser().parse_intermixed_args(argv)

    if args.show_help or not (args.query or args.show_list):
        print(help_text())
        return 0

    if args.show_list:
        print(list_text())
        return 0

    # Undecodable argv bytes arrive as surrogates; show them as U+FFFD
    query = " ".join(args.query).encode("utf-8", "surrogateescape").decode("utf-8", "replace")
    logger.debug("Looking up %r", query)
    print(lookup_medication(query))
    return 0


if __name__ == "__main__":
    sys.exit(main())
