"""Development entry point for the HelixPlot server."""

import argparse
import os

from app import create_app


def _resolve_port(cli_value: int | None) -> int:
    if cli_value is not None:
        return cli_value
    value = os.getenv("HELIXPLOT_PORT") or os.getenv("PORT") or "5001"
    try:
        return int(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid port '{value}'. Set HELIXPLOT_PORT to a number.") from exc


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run the HelixPlot development server")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=None, help="Port (defaults to HELIXPLOT_PORT or 5001)")
    parser.add_argument("--config", default=None, help="Config class name from app.config, e.g. TestingConfig")
    args = parser.parse_args(argv)

    app = create_app(args.config)
    app.run(host=args.host, port=_resolve_port(args.port), debug=False)


if __name__ == "__main__":
    main()
