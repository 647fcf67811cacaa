import argparse
import dataclasses
import json
import sys
from pathlib import Path

from .config import get_settings
from .errors import InvalidArgument
from .exporters import export_rows, write_csv, write_json, write_jsonl
from .logging_utils import configure_logging
from .repository import FileRepository, RemoteRepository
from .stats import AssessmentStatistics
from .store import ResultSet


def build_parser():
    parser = argparse.ArgumentParser(
        description="Search municipal property assessments from the CSV export or the open-data API",
    )
    parser.add_argument(
        "--source",
        choices=["file", "remote"],
        default="file",
        help="Where assessments come from",
    )
    parser.add_argument("--csv", default=None, help="Path to the CSV export (file source)")
    parser.add_argument("--api-url", default=None, help="Resource URL (remote source)")
    parser.add_argument("--account", default=None, help="Account number")
    parser.add_argument("--neighbourhood", default=None, help="Neighbourhood name or part of it")
    parser.add_argument("--assessment-class", default=None, help="Assessment class, e.g. RESIDENTIAL")
    parser.add_argument("--address", default=None, help="Address, e.g. '104 street nw'")
    parser.add_argument("--min", dest="min_value", default=None, help="Minimum assessed value")
    parser.add_argument("--max", dest="max_value", default=None, help="Maximum assessed value")
    parser.add_argument(
        "--all",
        action="store_true",
        help="Return every assessment (remote: first page only)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print n/min/max/range/mean/median of the results",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=1000,
        help="Maximum number of rows to print or write",
    )
    parser.add_argument(
        "--format",
        choices=["jsonl", "json", "csv"],
        default="jsonl",
        help="Output format",
    )
    parser.add_argument("--output", default=None, help="Write results to a file instead of stdout")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, etc.)")
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit log records as JSON lines on stderr",
    )
    return parser


def _has_filters(args) -> bool:
    values = [
        args.account,
        args.neighbourhood,
        args.assessment_class,
        args.address,
        args.min_value,
        args.max_value,
    ]
    return any(v is not None and str(v).strip() for v in values)


def _key_only(args) -> bool:
    others = [
        args.neighbourhood,
        args.assessment_class,
        args.address,
        args.min_value,
        args.max_value,
    ]
    return bool(args.account and args.account.strip()) and not any(
        v is not None and str(v).strip() for v in others
    )


def run_query(repo, args) -> ResultSet:
    if args.all:
        return repo.get_all()
    if _key_only(args):
        record = repo.get_by_key(args.account)
        return ResultSet.of([record] if record is not None else [])
    return repo.multi_filter(
        account_number=args.account,
        neighbourhood=args.neighbourhood,
        assessment_class=args.assessment_class,
        address=args.address,
        min_value=args.min_value,
        max_value=args.max_value,
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.all and not _has_filters(args):
        parser.error("give at least one filter, or --all")
    if args.limit < 1:
        parser.error("--limit must be positive")

    settings = get_settings()
    if args.api_url:
        settings = dataclasses.replace(settings, api_url=args.api_url)
    configure_logging(args.log_level or settings.log_level, json_lines=args.log_json)

    if args.source == "file":
        repo = FileRepository(path=args.csv, settings=settings)
    else:
        repo = RemoteRepository(settings=settings)

    try:
        results = run_query(repo, args)
    except InvalidArgument as exc:
        parser.error(str(exc))
    finally:
        repo.close()

    rows = results.to_dicts()[: args.limit]
    if args.output:
        export_rows(rows, args.format, Path(args.output))
    elif args.format == "jsonl":
        write_jsonl(rows, sys.stdout)
    elif args.format == "json":
        write_json(rows, sys.stdout)
    else:
        write_csv(rows, sys.stdout)

    if args.stats:
        stats = None
        if results:
            stats = AssessmentStatistics.from_results(results.sorted_by_value()).summary()
        print(json.dumps({"stats": stats}))

    summary = {
        "source": repo.source,
        "results": results.size,
        "displayed": len(rows),
        "cached": repo.size,
    }
    print(json.dumps(summary))
    return 0


def _safe_main():
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:
        print(json.dumps({"error": str(exc)}))
        raise SystemExit(1)


if __name__ == "__main__":
    _safe_main()
