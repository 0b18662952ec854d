"""
Main entrypoint: build and print the same-block transaction graph.

Env: TXGRAPH_API_URL, TXGRAPH_BLOCK_HASH, LOG_LEVEL, LOG_FORMAT, etc. (see txgraph/config/env.py)

Equivalent: python -m txgraph [BLOCK_HASH] [--json PATH]
"""

import sys

# Configure structured logging before other imports that may log
from txgraph.txgraph_logging import get_logger

logger = get_logger("main")


def main() -> int:
    from txgraph.cli import main as cli_main

    logger.info("main_starting", argv=sys.argv[1:])
    return cli_main(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
