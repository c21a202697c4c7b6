"""
Utility modules for the Trip Planner workspace.
"""

from trip_planner.config import LogLevel
from trip_planner.utils.error_handling import (
    GatewayError,
    ResourceNotFoundError,
    TripPlannerError,
    ValidationError,
    fallback_on_error,
    handle_errors,
    with_retry,
)
from trip_planner.utils.helpers import (
    generate_id,
    now_ms,
    parse_iso_date,
    strip_data_url,
    to_data_url,
    truncate_text,
)
from trip_planner.utils.logging import GatewayLogger, get_logger, setup_logging

__all__ = [
    "GatewayError",
    "GatewayLogger",
    "LogLevel",
    "ResourceNotFoundError",
    "TripPlannerError",
    "ValidationError",
    "fallback_on_error",
    "generate_id",
    "get_logger",
    "handle_errors",
    "now_ms",
    "parse_iso_date",
    "setup_logging",
    "strip_data_url",
    "to_data_url",
    "truncate_text",
    "with_retry",
]
