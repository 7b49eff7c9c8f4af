import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import colorlog
import pandas as pd
import yaml

from tabular_insights.core.values import value_text
from tabular_insights.profiling import (
    ProfileLimits,
    build_summary,
    build_summary_text,
    find_relevant_aggregation,
    infer_column_types,
    load_limits,
)
from tabular_insights.profiling.models import DataSummary

OUTPUT_FORMATS = ["text", "json"]

try:
    # Prefer package-defined version
    from tabular_insights import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover
    _PACKAGE_VERSION = None  # type: ignore[assignment]
    try:
        # Fallback to installed package metadata
        from importlib.metadata import version as _pkg_version, PackageNotFoundError

        _PACKAGE_VERSION = _pkg_version("tabular-insights")  # type: ignore[assignment]
    except PackageNotFoundError:
        _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def read_rows(path: Path) -> List[Dict[str, Any]]:
    """Read records from a CSV file or a JSON array of objects.

    CSV cells are read as strings (empty cells stay ""), leaving type
    inference to the profiler.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be parsed into records.
    """
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    if path.suffix.lower() == ".json":
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Failed to read JSON file {path}: {e}") from e
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise ValueError(f"JSON file {path} must contain an array of objects")
        return data

    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    except pd.errors.EmptyDataError:
        return []
    except (OSError, pd.errors.ParserError) as e:
        raise ValueError(f"Failed to read CSV file {path}: {e}") from e
    return df.to_dict(orient="records")


def _resolve_limits(args: argparse.Namespace) -> ProfileLimits:
    limits_path = getattr(args, "limits_config", None)
    if not limits_path:
        return ProfileLimits()
    return load_limits(Path(limits_path))


def _load_summary(args: argparse.Namespace) -> Optional[DataSummary]:
    """Read the input and build its summary; log and return None on bad input."""
    input_path = Path(args.input)
    try:
        limits = _resolve_limits(args)
        rows = read_rows(input_path)
    except FileNotFoundError as e:
        logging.error("%s", e)
        return None
    except (ValueError, OSError, yaml.YAMLError) as e:
        logging.error("Failed to load %s: %s", input_path, e)
        return None
    logging.info("Read %d rows from %s", len(rows), input_path)
    return build_summary(rows, limits=limits)


def cmd_profile(args: argparse.Namespace) -> int:
    """Profile a dataset and print (or save) its digest or JSON summary.

    Returns:
        0 on success
        2 if the input or limits file could not be read, or the output not written
    """
    summary = _load_summary(args)
    if summary is None:
        return 2

    output_format = getattr(args, "format", None) or "text"
    content = summary.to_json() if output_format == "json" else build_summary_text(summary)

    output = getattr(args, "output", None)
    if output:
        output_path = Path(output)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            logging.error("Failed writing summary to %s: %s", output_path, e)
            return 2
        logging.info("Summary saved: %s", output_path)
    else:
        print(content)
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    """Print the pre-computed aggregation that best matches a query.

    Returns:
        0 if an aggregation matched
        1 if no aggregation matched
        2 if the input could not be read
    """
    summary = _load_summary(args)
    if summary is None:
        return 2

    match = find_relevant_aggregation(summary, args.query)
    if match is None:
        logging.warning("No pre-computed aggregation matches query: %r", args.query)
        return 1

    print(match.description)
    for row in match.data:
        print(f"  {value_text(row[match.group_by])}: {value_text(row[match.metric])}")
    return 0


def cmd_infer(args: argparse.Namespace) -> int:
    """Print the inferred type of every column."""
    input_path = Path(args.input)
    try:
        rows = read_rows(input_path)
    except FileNotFoundError as e:
        logging.error("%s", e)
        return 2
    except (ValueError, OSError) as e:
        logging.error("Failed to load %s: %s", input_path, e)
        return 2

    if not rows:
        logging.warning("No rows in %s; nothing to infer.", input_path)
        return 1
    for column, column_type in infer_column_types(rows).items():
        print(f"{column}: {column_type.value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tabular-insights",
        description=f"Tabular Insights (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_profile = sub.add_parser("profile", help="Profile a CSV/JSON dataset")
    p_profile.add_argument("input", help="Path to a CSV file or a JSON array of records")
    p_profile.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output the text digest (default) or the full JSON summary",
    )
    p_profile.add_argument(
        "--output",
        default=None,
        help="Write the output to this file instead of stdout",
    )
    p_profile.add_argument(
        "--limits-config",
        default=None,
        help="Path to a profile limits YAML (see config/profile_limits.yaml)",
    )
    p_profile.set_defaults(func=cmd_profile)

    p_query = sub.add_parser(
        "query", help="Find the pre-computed aggregation that best answers a query"
    )
    p_query.add_argument("input", help="Path to a CSV file or a JSON array of records")
    p_query.add_argument("query", help='Free-text query, e.g. "total revenue by region"')
    p_query.add_argument(
        "--limits-config",
        default=None,
        help="Path to a profile limits YAML (see config/profile_limits.yaml)",
    )
    p_query.set_defaults(func=cmd_query)

    p_infer = sub.add_parser("infer", help="Print the inferred type of every column")
    p_infer.add_argument("input", help="Path to a CSV file or a JSON array of records")
    p_infer.set_defaults(func=cmd_infer)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
