#!/usr/bin/env python3
"""Project entry point. Starts the static site and upload server."""

from web import server


def main() -> None:
    server.main()


if __name__ == "__main__":
    main()
