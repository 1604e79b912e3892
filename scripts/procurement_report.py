#!/usr/bin/env python3
"""Print procurement statistics and per-identification summaries.

Usage:
    python scripts/procurement_report.py                     # all summaries
    python scripts/procurement_report.py --stage planning    # only chains that stopped at planning
    python scripts/procurement_report.py --json              # machine-readable output
"""
import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.api.schemas.procurement import CHAIN_STAGES
from app.core.errors import ProcurementError
from app.db.session import SessionLocal
from app.services.procurement_service import ProcurementService


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Report procurement progress: statistics by stage, division and status, then one line per identification.",
        epilog="Example: python scripts/procurement_report.py --stage publicationTender",
    )
    p.add_argument("--stage", choices=CHAIN_STAGES, default=None, help="Only list identifications at this stage")
    p.add_argument("--json", action="store_true", help="Print a JSON document instead of text")
    return p.parse_args()


def _print_counts(title: str, counts: dict[str, int]) -> None:
    print(f"{title}:")
    for key, n in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])):
        print(f"  {key:<24} {n}")


def main() -> int:
    args = parse_args()

    db = SessionLocal()
    try:
        service = ProcurementService(db)
        stats = service.compute_statistics()
        if args.stage:
            summaries = service.filter_by_stage(args.stage)
        else:
            summaries = service.build_all_summaries()
    except ProcurementError as exc:
        print(f"[ERROR] {exc.message}", file=sys.stderr)
        return 1
    finally:
        db.close()

    if args.json:
        doc = {
            "statistics": stats.model_dump(mode="json"),
            "summaries": [s.model_dump(mode="json") for s in summaries],
        }
        print(json.dumps(doc, indent=2))
        return 0

    print(f"Total identifications: {stats.total_items}")
    _print_counts("By stage", stats.by_stage)
    _print_counts("By division", stats.by_division)
    _print_counts("By status", stats.by_status)
    print()
    print(f"{'ID':>5}  {'STAGE':<18} {'STATUS':<12} {'BUDGET':>12}  TITLE")
    for s in summaries:
        budget = "" if s.budget is None else f"{s.budget:,}"
        print(f"{s.id:>5}  {s.stage:<18} {s.status or '':<12} {budget:>12}  {s.tender_title or '(no title)'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
