#!/usr/bin/env python3
"""Build tag reports (HTML and/or Excel) from GTM container export files.

Reads every `*.json` container export in the exports folder and writes
`<publicId>.html` per container and/or one `containers.xlsx` workbook with a
sheet per container. Without arguments it reads `exports/` and writes to
`output/`.
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from dataclasses import replace

SRC_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from exporters.base import ReportEmitter  # noqa: E402
from exporters.html_exporter import HtmlReportEmitter  # noqa: E402
from exporters.workbook_exporter import WorkbookReportEmitter  # noqa: E402
from managers.workflow_manager import ReportWorkflowManager, RunSummary  # noqa: E402
from utils.config import (  # noqa: E402
    DEFAULT_REPORT_CONFIG,
    REPORT_CONFIG_ENV_VAR,
    SUPPORTED_FORMATS,
    ReportConfig,
    load_report_config,
)
from utils.lookups import AD_NETWORK_SOURCES  # noqa: E402


def build_emitters(config: ReportConfig) -> list[ReportEmitter]:
    """Instantiate one emitter per configured format."""
    emitters: list[ReportEmitter] = []
    for report_format in config.formats:
        if report_format == "html":
            options = replace(
                HtmlReportEmitter.default_row_options,
                ad_network_source=config.ad_network_source,
            )
            emitters.append(HtmlReportEmitter(config.output_dir, options))
        else:
            options = replace(
                WorkbookReportEmitter.default_row_options,
                ad_network_source=config.ad_network_source,
            )
            emitters.append(
                WorkbookReportEmitter(config.output_dir, options, filename=config.workbook_filename)
            )
    return emitters


def export_container_reports(config: ReportConfig) -> RunSummary:
    """Run the report workflow described by `config`."""
    workflow = ReportWorkflowManager(build_emitters(config))
    return workflow.run(config.exports_dir, config.output_dir)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate tag reports from GTM container export JSON files.",
    )
    parser.add_argument(
        "--exports-dir",
        help="Folder containing container export *.json files (default: exports)",
    )
    parser.add_argument(
        "--output-dir",
        help="Folder to write reports to (default: output)",
    )
    parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=SUPPORTED_FORMATS,
        help="Report format; repeat for several. Default: html and xlsx.",
    )
    parser.add_argument(
        "--workbook-filename",
        help="Workbook file name for the xlsx format (default: containers.xlsx)",
    )
    parser.add_argument(
        "--ad-network-source",
        choices=AD_NETWORK_SOURCES,
        help="Tag field used to detect the ad network (default: name_or_type)",
    )
    parser.add_argument(
        "--config-path",
        help=(
            f"Path to a report configuration YAML. Defaults to {DEFAULT_REPORT_CONFIG} "
            f"when present, else JSON from {REPORT_CONFIG_ENV_VAR}."
        ),
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = parse_args(argv)

    try:
        config = load_report_config(args.config_path).with_overrides(
            exports_dir=args.exports_dir,
            output_dir=args.output_dir,
            formats=args.formats,
            workbook_filename=args.workbook_filename,
            ad_network_source=args.ad_network_source,
        )
        export_container_reports(config)
    except Exception as error:
        print(f"Error: {error}", file=sys.stderr)
        raise


if __name__ == "__main__":
    main()
