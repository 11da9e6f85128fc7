#!/usr/bin/env python3
"""
Run the mock API as a long-lived local process.

Uso:
  json-mock-api [--db db.json] [--port 3000] [--routes routes.json] [--read-only]
  python -m api.serve --db db.json
"""
from __future__ import annotations

import argparse
import dataclasses
import sys

import uvicorn

from api.app import create_app
from api.core.config import Settings, get_settings
from api.core.log import configure_logging


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Serve a JSON document as a REST API")
    ap.add_argument("--db", help="Arquivo JSON do banco (default: MOCK_DB_PATH ou ./db.json)")
    ap.add_argument("--host", help="Interface de escuta (default: HOST ou 127.0.0.1)")
    ap.add_argument("--port", type=int, help="Porta TCP (default: PORT ou 3000)")
    ap.add_argument("--routes", help="Arquivo JSON com regras de rewrite extras")
    ap.add_argument("--id", dest="id_field", help="Campo identificador dos registros (default: id)")
    ap.add_argument("--read-only", action="store_true", help="Recusa requisicoes que alteram dados")
    ap.add_argument("--no-persist", action="store_true", help="Mantem as alteracoes apenas em memoria")
    ap.add_argument("--log-level", help="Nivel de log (default: LOG_LEVEL ou INFO)")
    return ap


def settings_from_args(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """Overlay command line flags on the environment settings."""
    settings = base or get_settings()
    overrides = {}
    if args.db:
        overrides["db_path"] = args.db
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    if args.routes:
        overrides["routes_file"] = args.routes
    if args.id_field:
        overrides["id_field"] = args.id_field
    if args.read_only:
        overrides["read_only"] = True
    if args.no_persist:
        overrides["persist"] = False
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    return dataclasses.replace(settings, **overrides)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    configure_logging(settings.log_level)
    app = create_app(settings)
    # Um unico worker: o documento vive na memoria deste processo
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower(), workers=1)


if __name__ == "__main__":
    try:
        main(sys.argv[1:])
    except KeyboardInterrupt:  # pragma: no cover - uso CLI
        raise SystemExit(0)
