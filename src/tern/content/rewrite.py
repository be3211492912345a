"""Startup-time content rewriting for HTML entry points.

Two textual passes run over the index page and ``*spec.html`` files:

1. Configuration markers — ``<meta name="travis.KEY" value="DEFAULT">``
   (or ``rel``/``href``) get their value replaced by ``settings[KEY]``
   when present. This is how runtime settings such as an API endpoint
   reach a pre-built frontend without rebuilding it.
2. Versioned asset references — ``src="scripts/app.js"`` and
   ``href="/styles/main.css"`` are pointed at ``<version>/scripts/...``
   so they match the version-qualified routes.

Both passes are plain pattern substitutions over the text, not HTML
tree transformations. Content without markers passes through unchanged.
"""

import html
import re
from collections.abc import Mapping

MARKER_NAMESPACE = "travis."

# <meta name="travis.KEY" value="DEFAULT" ...>
_MARKER_RE = re.compile(
    r'<meta (?P<key_attr>rel|name)="travis\.(?P<key>[^"]*)"'
    r' (?P<value_attr>href|value)="(?P<default>[^"]*)"(?P<rest>[^>]*)>'
)

# <meta value="DEFAULT" name="travis.KEY" ...>
_MARKER_SWAPPED_RE = re.compile(
    r'<meta (?P<value_attr>href|value)="(?P<default>[^"]*)"'
    r' (?P<key_attr>rel|name)="travis\.(?P<key>[^"]*)"(?P<rest>[^>]*)>'
)

_ASSET_REF_RE = re.compile(r'(?P<attr>src|href)="(?P<slash>/?)(?P<path>(?:styles|scripts)/[^"]*)"')


def needs_rewrite(route: str, relative_path: str) -> bool:
    """True for the index page and for ``*spec.html`` files."""
    return route == "/" or relative_path.endswith("spec.html")


def rewrite_config(text: str, settings: Mapping[str, str]) -> str:
    """Replace configuration marker values with entries from *settings*.

    Keys are looked up verbatim (dots included). Markers whose key is
    not in *settings* keep their embedded default.
    """

    def _value(match: re.Match[str]) -> str:
        key = match["key"]
        if key in settings:
            return html.escape(str(settings[key]), quote=True)
        return match["default"]

    def _key_first(match: re.Match[str]) -> str:
        return (
            f'<meta {match["key_attr"]}="{MARKER_NAMESPACE}{match["key"]}"'
            f' {match["value_attr"]}="{_value(match)}"{match["rest"]}>'
        )

    def _value_first(match: re.Match[str]) -> str:
        return (
            f'<meta {match["value_attr"]}="{_value(match)}"'
            f' {match["key_attr"]}="{MARKER_NAMESPACE}{match["key"]}"{match["rest"]}>'
        )

    text = _MARKER_RE.sub(_key_first, text)
    return _MARKER_SWAPPED_RE.sub(_value_first, text)


def rewrite_asset_refs(text: str, version: str) -> str:
    """Insert *version* in front of ``styles/`` and ``scripts/`` references.

    A leading slash is preserved: ``href="/styles/a.css"`` becomes
    ``href="/v1/styles/a.css"``, ``src="scripts/a.js"`` becomes
    ``src="v1/scripts/a.js"``.
    """
    return _ASSET_REF_RE.sub(
        lambda m: f'{m["attr"]}="{m["slash"]}{version}/{m["path"]}"',
        text,
    )


def rewrite(content: bytes, settings: Mapping[str, str], version: str) -> bytes:
    """Run both passes over UTF-8 *content*.

    Undecodable bytes round-trip untouched (``surrogateescape``), so a
    stray Latin-1 byte can't abort startup.
    """
    text = content.decode("utf-8", errors="surrogateescape")
    text = rewrite_config(text, settings)
    text = rewrite_asset_refs(text, version)
    return text.encode("utf-8", errors="surrogateescape")
