"""
claimcheck — command-line host.

Usage:
    claimcheck verify "Added dark mode support" src/theme.css   # exit 1 on LIE
    claimcheck verify "Fixed the bug" src/app.js --kind script --json
    claimcheck extract "I implemented error handling. Tests pass."
    claimcheck patterns --kind stylesheet
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from claimcheck.config import settings
from claimcheck.detector import resolve_content_kind, verify_claim
from claimcheck.extractor import claim_extractor
from claimcheck.files import group_by_kind, load_files
from claimcheck.logging import setup_logging
from claimcheck.models import CONTENT_KINDS, GENERIC
from claimcheck.patterns import describe_patterns
from claimcheck.schemas.verify import AnalysisResponse, ClaimOut

EXIT_OK = 0
EXIT_LIE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claimcheck",
        description="Verify claims about code against the code itself",
    )
    parser.add_argument(
        "--log-level", default=None,
        help="Log level for diagnostics on stderr (default: CLAIMCHECK_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--version", action="version", version=f"claimcheck {settings.CORE_VERSION}",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    verify = sub.add_parser("verify", help="Verify one claim against files")
    verify.add_argument("claim", help="The claim text")
    verify.add_argument("files", nargs="+", help="Files to check the claim against")
    verify.add_argument(
        "--kind", choices=list(CONTENT_KINDS) + [GENERIC], default=None,
        help="Content kind to check against (default: classified from the claim)",
    )
    verify.add_argument("--json", action="store_true", help="Output JSON only")

    extract = sub.add_parser("extract", help="Extract claims from assistant text")
    extract.add_argument("text", help="Assistant message text")
    extract.add_argument("--json", action="store_true", help="Output JSON only")

    patterns = sub.add_parser("patterns", help="List the pattern library")
    patterns.add_argument("--kind", choices=list(CONTENT_KINDS), default=None)

    return parser


def _cmd_verify(args) -> int:
    files = load_files(args.files)
    kind = resolve_content_kind(args.claim, args.kind, files=files)
    result = verify_claim(args.claim, files, content_kind=kind)

    if args.json:
        print(AnalysisResponse.from_result(result, content_kind=kind).model_dump_json(indent=2))
    else:
        counts = {k: len(v) for k, v in group_by_kind(files).items()}
        print(f"Claim:      {args.claim}")
        print(f"Checked as: {kind} ({counts.get(kind, 0)} of {len(files)} file(s))")
        print(f"Verdict:    {result.verdict.upper()}  confidence={result.confidence:.2f}")
        print()
        for e in result.evidence:
            print(f"  [{e.severity:<6}] {e.category:<22} {e.file}: {e.description}")
        print()
        print(result.summary)

    return EXIT_LIE if result.is_lie else EXIT_OK


def _cmd_extract(args) -> int:
    claims = claim_extractor.extract_claims(args.text)
    if args.json:
        print(json.dumps([ClaimOut.model_validate(c).model_dump() for c in claims], indent=2))
        return EXIT_OK

    if not claims:
        print("No claims found.")
    for c in claims:
        print(f"- [{c.content_kind}/{c.action}] {c.target} ({c.confidence:.2f}): {c.text}")
    return EXIT_OK


def _cmd_patterns(args) -> int:
    for p in describe_patterns(args.kind):
        print(f"{p['content_kind']:<11} {p['category']:<26} {p['name']:<28} {p['weight']:.1f}  {p['description']}")
    return EXIT_OK


COMMANDS = {
    "verify": _cmd_verify,
    "extract": _cmd_extract,
    "patterns": _cmd_patterns,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level)
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
