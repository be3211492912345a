"""Route derivation: filesystem path → canonical URL path."""

# Top-level directories served under a version-qualified URL so they
# can be cached indefinitely.
VERSIONED_DIRS = frozenset({"styles", "scripts"})

INDEX_FILE = "index.html"


def route_for(relative_path: str, version: str) -> str:
    """Return the canonical route for a file.

    ``styles/`` and ``scripts/`` files gain a ``<version>/`` prefix, an
    ``index.html`` file maps to its directory, and every route starts
    with ``/``::

        route_for("index.html", "v1")          # "/"
        route_for("docs/index.html", "v1")     # "/docs/"
        route_for("scripts/app.js", "v1")      # "/v1/scripts/app.js"
        route_for("images/logo.png", "v1")     # "/images/logo.png"
    """
    parts = relative_path.split("/")
    if len(parts) > 1 and parts[0] in VERSIONED_DIRS:
        parts.insert(0, version)
    if parts[-1] == INDEX_FILE:
        parts[-1] = ""
    return "/" + "/".join(parts)
