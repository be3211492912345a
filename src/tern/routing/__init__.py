"""Route table: exact-match lookup with an index catch-all.

    table   -- RouteTable, the immutable path → Response mapping
    builder -- build_route_table, the startup orchestration
"""

from tern.routing.builder import build_route_table
from tern.routing.table import RouteTable

__all__ = ["RouteTable", "build_route_table"]
