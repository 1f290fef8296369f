#!/usr/bin/env python3
"""Run the Lifeboard HTTP server."""

import argparse

import uvicorn

from .api.app import create_app
from .config import Settings
from .logging_setup import configure_logging


def main(argv=None) -> None:
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="Serve Conway's Game of Life boards over HTTP")
    parser.add_argument('--host', default=settings.host, help="Bind address")
    parser.add_argument('--port', type=int, default=settings.port, help="Bind port")
    parser.add_argument('--store', default=settings.store_path,
                        help="JSON snapshot file (boards kept in memory if omitted)")
    args = parser.parse_args(argv)

    settings = settings.model_copy(update={'host': args.host, 'port': args.port, 'store_path': args.store})
    configure_logging(settings)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
