"""
Structured logging for txgraph.

JSON logs with timestamp, level, event_type and block/transaction context.
Use get_logger() in all modules.
"""

from txgraph.txgraph_logging.logger import bind_block, configure_structlog, get_logger

__all__ = ["bind_block", "configure_structlog", "get_logger"]
