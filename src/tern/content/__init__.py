"""Startup-time content processing.

    scanner   -- walk the content root, read every file once
    routes    -- derive the canonical URL for a file
    rewrite   -- inject settings and versioned asset URLs into HTML
    responses -- turn content + route into an immutable Response
"""

from tern.content.responses import build_response, cache_policy
from tern.content.rewrite import needs_rewrite, rewrite, rewrite_asset_refs, rewrite_config
from tern.content.routes import VERSIONED_DIRS, route_for
from tern.content.scanner import FileEntry, read_version, scan_files

__all__ = [
    "VERSIONED_DIRS",
    "FileEntry",
    "build_response",
    "cache_policy",
    "needs_rewrite",
    "read_version",
    "rewrite",
    "rewrite_asset_refs",
    "rewrite_config",
    "route_for",
    "scan_files",
]
