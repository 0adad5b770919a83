# moodboard/__main__.py
import argparse
import os
import sys

import uvicorn

from moodboard.config.settings import settings


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="moodboard", description="Run the moodboard service.")
    parser.add_argument("data_dir", nargs="?", help="directory for the file-based store (in-memory if omitted)")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    args = parser.parse_args(argv)

    if args.data_dir:
        settings.STORE_PATH = args.data_dir
        # The reloader imports the app in a fresh process that only sees the environment.
        os.environ["STORE_PATH"] = args.data_dir

    uvicorn.run(
        "moodboard.main:app",
        host=args.host,
        port=args.port,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
