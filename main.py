#!/usr/bin/env python3
"""
SiteOps - Admin console backend (CSV import / export)
=====================================================

Single-command run:  python main.py

CLI (through Flask):
    flask --app main import-csv employee staff.csv --company c1
    flask --app main export-template site site_template.csv

See config.py for all environment-variable tunables.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click
from flask import Flask, jsonify

import config
from api import api_bp
from api.routes_import import EXTENSION_KEY
from db import DocumentStore, init_db
from import_engine.csv_parser import CsvFormatError
from import_engine.export import failed_rows_csv, template_csv
from import_engine.field_map import ImportConfig
from import_engine.report import progress_percent
from schema import get_config, load_configs
from services.import_service import ImportSession, ImportStateError


def setup_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def create_app(
    db_url: Optional[str] = None,
    configs: Optional[dict[str, ImportConfig]] = None,
    store: Optional[DocumentStore] = None,
) -> Flask:
    """Flask application factory."""

    setup_logging()
    app = Flask(__name__)
    app.secret_key = config.SECRET
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_MB * 1024 * 1024

    # ── Import configs ──────────────────────────────────────────────
    if configs is None:
        configs = load_configs(config.IMPORT_CONFIGS_PATH or None)

    # ── Initialise document store ───────────────────────────────────
    if store is None:
        init_db(db_url or config.DB_URL)
        store = DocumentStore()

    app.extensions[EXTENSION_KEY] = {"configs": configs, "store": store}

    # ── Register blueprints / CLI ───────────────────────────────────
    app.register_blueprint(api_bp)
    _register_cli(app)

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "internal server error"}), 500

    return app


def _register_cli(app: Flask) -> None:

    def _entity_config(entity: str) -> ImportConfig:
        cfg = get_config(app.extensions[EXTENSION_KEY]["configs"], entity)
        if cfg is None:
            raise click.BadParameter(f"unknown entity type {entity!r}", param_hint="ENTITY")
        return cfg

    @app.cli.command("import-csv")
    @click.argument("entity")
    @click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @click.option("--company", "company_id", required=True, help="Target company id.")
    @click.option("--dry-run", is_flag=True, help="Validate only; write nothing.")
    @click.option("--chunk-size", type=int, default=None, help="Rows per atomic batch.")
    @click.option("--failed-out", type=click.Path(dir_okay=False, path_type=Path), default=None,
                  help="Write rows that failed to save to this CSV.")
    def import_csv_command(entity, csv_path, company_id, dry_run, chunk_size, failed_out):
        """Import CSV_PATH into ENTITY for one company."""
        cfg = _entity_config(entity)
        session = ImportSession(cfg, company_id, app.extensions[EXTENSION_KEY]["store"])

        try:
            v = session.load_file(csv_path.read_bytes())
        except CsvFormatError as exc:
            raise click.ClickException(str(exc))

        click.echo(f"  {v.total_count} rows: {v.new_count} new, "
                   f"{v.update_count} update, {v.error_count} error")
        for row in v.error_rows[:10]:
            click.echo(f"    Row {row.row_number}: {'; '.join(row.errors)}")

        if dry_run:
            click.echo("  Dry run - nothing written.")
            return

        def _progress(p):
            click.echo(f"  … {p.current}/{p.total} ({progress_percent(p)}%)")

        try:
            summary = session.execute(on_progress=_progress, chunk_size=chunk_size)
        except ImportStateError as exc:
            raise click.ClickException(str(exc))

        r = summary.result
        click.echo(f"  Done: {len(r.created_ids)} created, {len(r.updated_ids)} updated, "
                   f"{summary.skipped_count} skipped, {len(r.failed_rows)} failed")
        for failed in r.failed_rows[:10]:
            click.echo(f"    Row {failed.row_number}: {failed.error}")
        if failed_out and r.failed_rows:
            failed_out.write_bytes(failed_rows_csv(r.failed_rows, cfg))
            click.echo(f"  Failed rows written to {failed_out}")

    @app.cli.command("export-template")
    @click.argument("entity")
    @click.argument("out_path", type=click.Path(dir_okay=False, path_type=Path))
    def export_template_command(entity, out_path):
        """Write the import template for ENTITY to OUT_PATH."""
        out_path.write_bytes(template_csv(_entity_config(entity)))
        click.echo(f"  Template written to {out_path}")


def main():
    print("=" * 56)
    print("  SiteOps - Admin console backend")
    print("=" * 56)

    app = create_app()
    print(f"  Database: {config.DB_URL}")
    print(f"  Import chunk size: {config.IMPORT_CHUNK_SIZE}")
    print(f"\n  http://{config.HOST}:{config.PORT}")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
