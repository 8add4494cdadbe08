"""
CLI entrypoint for the seller listing engine.

This script performs the following steps:
- loads .env (session context), configs/engine.yaml
- creates a per-session output folder under outputs/
- loads the geography and industry taxonomies concurrently
- optionally runs taxonomy searches and logs the matches
- replays a recorded form answers file through the form handlers
- assembles and validates the submission payload, saves it to JSON
- submits it through the mock submission service (skipped with --dry-run)
"""

import argparse
import asyncio
import json
import logging
import uuid
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv
from opik import opik_context, track

from application import ListingEngine, SessionContext
from application.constants import LOG_FILENAME, OUTPUT_ROOT, PAYLOAD_FILENAME
from domain.errors import ListingError
from domain.taxonomy.models import FlatEntry
from infrastructure.config import EngineConfig, load_engine_config, load_form_answers
from infrastructure.constants import ENGINE_FILE
from infrastructure.io import ensure_exists, write_json
from infrastructure.observability import configure_logging, get_log_context, make_session_tag, set_log_context
from infrastructure.services import MockSubmissionService, StaticTaxonomyService

logger = logging.getLogger(__name__)


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Assemble and submit a seller listing")
    p.add_argument(
        "--form",
        type=str,
        required=True,
        help="Path to a recorded form answers YAML file",
    )
    p.add_argument(
        "--config",
        type=str,
        default=str(ENGINE_FILE),
        help="Path to engine.yaml (default: configs/engine.yaml)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=".env",
        help="Path to .env file with SELLER_TOKEN/SELLER_ROLE/SELLER_ID (default: .env)",
    )
    p.add_argument("--search-geo", type=str, default=None, help="Log geography entries matching this term")
    p.add_argument("--search-industry", type=str, default=None, help="Log industry entries matching this term")
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the assembled payload instead of submitting it.",
    )
    p.add_argument(
        "--console-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level",
    )
    p.add_argument(
        "--file-level",
        type=str,
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="File log level",
    )
    return p.parse_args()


def _log_matches(label: str, term: str, matches: list[FlatEntry]) -> None:
    if not matches:
        logger.info("%s search %r: No results found.", label, term)
        return
    logger.info("%s search %r: %d match(es)", label, term, len(matches))
    for entry in matches:
        logger.info("  %-12s %s", entry.id, entry.path)


async def _run(args: argparse.Namespace, cfg: EngineConfig, context: SessionContext, run_dir: Path) -> int:
    engine = await ListingEngine.initialize(
        context=context,
        taxonomy_service=StaticTaxonomyService.from_config(cfg),
        config=cfg,
    )

    if args.search_geo is not None:
        _log_matches("Geography", args.search_geo, engine.search_geography(args.search_geo))
    if args.search_industry is not None:
        _log_matches("Industry", args.search_industry, engine.search_industry(args.search_industry))

    form = engine.form_from_answers(load_form_answers(Path(args.form)))
    logger.info(
        "Selections: geography=%r industries=%r",
        engine.selected_geography_label(form),
        engine.selected_industry_label(form),
    )

    payload = engine.assemble(form)
    payload_path = write_json(run_dir / PAYLOAD_FILENAME, payload.to_wire())
    logger.info("Saved payload to %s", payload_path)

    opik_context.update_current_span(
        metadata={
            **get_log_context(),
            "geography_selections": len(form.geography),
            "industry_selections": len(form.industry),
            "dry_run": bool(args.dry_run),
        },
    )

    if args.dry_run:
        print(json.dumps(payload.to_wire(), ensure_ascii=False, indent=2))
        return 0

    receipt = await engine.submit(form, MockSubmissionService())
    logger.info("%s (deal_id=%s)", receipt.message, receipt.deal_id)
    return 0


@track(
    name="Listing.submit",
    type="general",
    metadata={"task": "seller_listing"},
    capture_input=False,
    capture_output=False,
    flush=True,
)
def main() -> int:
    args = _parse_args()

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=True)

    config_path = Path(args.config)
    ensure_exists(config_path, "engine.yaml")
    ensure_exists(Path(args.form), "form answers file")

    cfg = load_engine_config(config_path)

    # ---- Per-session output folder ----
    session_id = f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"
    run_dir = OUTPUT_ROOT / session_id
    run_dir.mkdir(parents=True, exist_ok=True)

    log_path = run_dir / LOG_FILENAME
    configure_logging(
        log_file=log_path,
        console_level=getattr(logging, args.console_level),
        file_level=getattr(logging, args.file_level),
    )

    context = SessionContext.from_env()
    set_log_context(session_id=session_id, seller_id=context.user_id)
    logger.info("Starting session: %s (tag=%s)", session_id, make_session_tag(session_id))

    try:
        code = asyncio.run(_run(args, cfg, context, run_dir))
    except ListingError as e:
        logger.error("%s: %s", type(e).__name__, e)
        code = 1

    logger.info("Detailed log: %s", log_path)
    return code


if __name__ == "__main__":
    raise SystemExit(main())
