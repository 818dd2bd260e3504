#!/usr/bin/env python3
"""Pull the repo, fetch plots from the cluster with scp, then commit and push."""

import argparse
import subprocess
import sys

from config.settings import PLOTS_REMOTE, DEFAULT_COMMIT_MESSAGE
from core.plot_sync import PlotSync
from utils.logging_utils import Logger


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--remote", default=PLOTS_REMOTE, help="scp source prefix (host:/path/).")
    parser.add_argument("--pattern", default=None,
                        help="File glob to fetch from the remote; prompted for when omitted.")
    parser.add_argument("--message", default=None,
                        help=f"Commit message; prompted for when omitted (default: {DEFAULT_COMMIT_MESSAGE}).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every command run.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logger = Logger("push-and-pull", "DEBUG" if args.verbose else None)
    sync = PlotSync(remote=args.remote, logger=logger)

    try:
        sync.run(args.pattern, args.message, prompt=input)
    except subprocess.CalledProcessError as e:
        logger.error(f"Command failed ({e.returncode}): {' '.join(e.cmd)}")
        return 1
    except FileNotFoundError as e:
        logger.error(f"Command not found: {e.filename}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
