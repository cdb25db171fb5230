#!/usr/bin/env python3
"""
AXIS Audit - Command Line Entry Point

Runs the full-application audit against a deployed instance, once per
device, prints the reports and exits non-zero when a hard gate fails.
"""

import asyncio
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config.settings import AuditConfig, load_config, DEFAULT_CONFIG_PATH
from .core.browser.manager import BrowserManager
from .reporting.emitter import ReportEmitter
from .reporting.models import RunReport
from .runner import AuditResult, run_full_audit

logger = logging.getLogger(__name__)


def configure_logging(log_file: Optional[str] = 'axis_audit_session.log') -> None:
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def print_banner():
    """Print the audit banner."""
    print("""
╔══════════════════════════════════════════════════════════════╗
║                    🔍 AXIS Audit - Bug Sweep                  ║
║                                                              ║
║  🎯 Probes every page, button and form                        ║
║  📸 Screenshots for every bug found                          ║
║  📄 JSON report for orchestrators                            ║
╚══════════════════════════════════════════════════════════════╝
    """)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Audit a deployed application end-to-end')
    parser.add_argument('base_url', nargs='?', help='Application root URL (overrides config)')
    parser.add_argument('--config', default=DEFAULT_CONFIG_PATH, help='YAML configuration file')
    parser.add_argument('--device', action='append', dest='devices', default=None,
                        help='Emulate a device (repeatable), e.g. "iPhone 12"')
    parser.add_argument('--headed', action='store_true', help='Show the browser window')
    parser.add_argument('--skip-login', action='store_true', help='Audit without authenticating')
    parser.add_argument('--skip-security', action='store_true', help='Skip the unauthenticated security checks')
    parser.add_argument('--json-output', help='Write the JSON report to this path')
    parser.add_argument('--no-log-file', action='store_true', help='Log to stdout only')
    return parser


def apply_args(config: AuditConfig, args: argparse.Namespace) -> AuditConfig:
    if args.base_url:
        config.base_url = args.base_url.rstrip('/')
    if args.devices:
        config.browser.devices = args.devices
    if args.headed:
        config.browser.headless = False
    if args.json_output:
        config.json_output = args.json_output
    return config


async def run_audits(config: AuditConfig, login: bool = True, security: bool = True) -> List[AuditResult]:
    """One audit per configured device (desktop when none); a failing device doesn't stop the rest."""
    devices = config.browser.devices or [None]
    results = []

    async with BrowserManager(config.browser) as browser:
        for device in devices:
            page = None
            try:
                page = await browser.new_page(device)
                results.append(await run_full_audit(page, config, login=login, device=device,
                                                    security=security))
            except Exception as e:
                logger.error(f"❌ Audit on {device or 'desktop'} failed: {e}")
                agent = f"{config.agent}-{device}" if device else config.agent
                results.append(AuditResult(report=RunReport.from_bugs([], agent=agent),
                                           device=device, error=str(e)))
            finally:
                if page is not None:
                    try:
                        await browser.close_page(page)
                    except Exception as e:
                        logger.warning(f"Error closing page: {e}")

    return results


def json_output_path(path: str, device: Optional[str] = None) -> str:
    """Per-device report path: ``audit.json`` becomes ``audit-iPhone_12.json``."""
    if not device:
        return path
    output = Path(path)
    return str(output.with_name(f"{output.stem}-{device.replace(' ', '_')}{output.suffix}"))


def emit_results(results: List[AuditResult], config: AuditConfig, emitter: ReportEmitter) -> None:
    for result in results:
        title = f"AUDIT COMPLETE ({result.device})" if result.device else "AUDIT COMPLETE"
        if result.error:
            print(f"\n💥 {title}: run failed before finishing - {result.error}")
        emitter.emit(result.report, title)

        print(f"\n📈 Endpoint Summary ({len(result.api_summary)} endpoints):")
        for endpoint, stats in result.api_summary.items():
            print(f"   {endpoint}: {stats['count']} calls, "
                  f"Methods: [{', '.join(stats['methods'])}], "
                  f"Status: [{', '.join(str(s) for s in stats['statuses'])}]")

        if config.json_output:
            emitter.write_json(result.report, json_output_path(config.json_output, result.device))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(None if args.no_log_file else 'axis_audit_session.log')
    print_banner()

    config = apply_args(load_config(args.config), args)

    try:
        results = asyncio.run(run_audits(config, login=not args.skip_login,
                                         security=not args.skip_security))
    except KeyboardInterrupt:
        print("\n⏹️ Audit interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Audit failed: {e}")
        return 2

    emit_results(results, config, ReportEmitter())

    crashed = [r for r in results if r.error]
    if crashed:
        print(f"\n💥 {len(crashed)} run(s) failed before finishing")
        return 2

    failed = [r for r in results if not r.passed]
    if failed:
        print(f"\n❌ Hard gate failed on {len(failed)} run(s): critical bugs or 5xx API responses")
        return 1

    print("\n✅ All hard gates passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
