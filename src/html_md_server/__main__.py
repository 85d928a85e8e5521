import argparse
import socket
import sys

import uvicorn

from .app import app
from .core.config import get_settings


def is_port_available(host: str, port: int) -> bool:
    """Check whether ``host:port`` can be bound"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
            return True
        except OSError:
            return False


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="html-md-server",
        description="HTTP service converting web pages to Markdown",
    )
    parser.add_argument("--host", default=settings.host, help="Host to bind to")
    parser.add_argument(
        "--port", type=int, default=settings.port, help="Port to bind to"
    )
    args = parser.parse_args()

    if not is_port_available(args.host, args.port):
        print(f"Error: Port {args.port} is already in use on {args.host}")
        print(f"Try using a different port: html-md-server --port {args.port + 1}")
        sys.exit(1)

    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
