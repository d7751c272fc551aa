from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from db_distiller.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from db_distiller.excel.columns import create_column_mapping
from db_distiller.logging.error_log import ErrorLogBuffer
from db_distiller.logging.init import enable_debug, log_summary, setup_logging
from db_distiller.models.config_models import CANONICAL_STATUSES
from db_distiller.services.orchestrator import ProcessingError, distill_all, scan_workbooks
from db_distiller.services.processor import ProcessingFailedError, process_workbook
from db_distiller.services.session import UnknownStatusError
from db_distiller.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (DISTILLER_OWNER) and the YAML config
- Expand workbook arguments (directories -> .xlsx/.xls files)
- Distill each workbook into <stem>-distilled.html
- Log SUMMARY line, flush error log, return exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="db-distiller",
        description="Distill a sponsored-agreements workbook into a filtered print document",
    )
    p.add_argument("workbooks", nargs="*", type=Path, help="Workbook files or directories")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    p.add_argument(
        "--status",
        action="append",
        dest="statuses",
        metavar="LABEL",
        help=f"Status label to include (repeatable). One of: {', '.join(CANONICAL_STATUSES)}",
    )
    group = p.add_mutually_exclusive_group()
    group.add_argument("--all-statuses", action="store_true", help="Select every status label")
    group.add_argument("--no-status-filter", action="store_true", help="Disable the status stage")
    p.add_argument("--output-dir", type=Path, default=None, help="Directory for distilled HTML")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data", action="store_true", help="Print headers, column mapping & first records then exit"
    )
    return p.parse_args(argv)


def _selected_statuses(args: argparse.Namespace) -> list[str] | None:
    if args.all_statuses:
        return list(CANONICAL_STATUSES)
    if args.no_status_filter:
        return []
    return args.statuses  # None -> config default


def _inspect_data(workbooks: list[Path]) -> int:
    if not workbooks:
        print("inspect: no workbooks")
        return EXIT_SUCCESS_ALL
    for f in workbooks:
        print(f"FILE: {f.name}")
        try:
            data = process_workbook(f)
        except ProcessingFailedError as e:
            print(f"  read_error: {e}")
            continue
        print(f"  headers={data.headers}")
        print(f"  mapping={create_column_mapping(data.headers)}")
        print(f"  records={data.total_records} warnings={len(data.warnings)}")
        for record in data.records[:3]:
            print("    sample_record=", record.to_dict())
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # NOTE: 空リスト [] が与えられた場合に sys.argv[1:] を混入させない (None のときのみ読む)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        enable_debug()

    # .env を読み込み DISTILLER_OWNER を環境変数へ (既存値より優先)
    load_dotenv(dotenv_path=Path(".env"), override=True)
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        workbooks = scan_workbooks(args.workbooks)
    except ProcessingError as e:
        logger.error(f"{e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(workbooks)

    logger.info(f"owner={cfg.owner} workbooks={len(workbooks)}")
    error_log = ErrorLogBuffer()
    try:
        result = distill_all(
            workbooks,
            cfg,
            selected_statuses=_selected_statuses(args),
            output_dir=args.output_dir,
            error_log=error_log,
        )
    except UnknownStatusError as e:
        logger.error(f"status: {e}")
        return EXIT_FATAL
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    # render_summary_line は "SUMMARY " 付き; log_summary がラベルを付けるので除去
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
