# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that
# flows through a single search call.  Nothing here is persisted; each object
# lives for exactly one tool invocation.
#
#   SearchOptions    →  the validated tool arguments (what the caller asked for)
#   HeaderRule       →  one row of the optional-field → HTTP header table
#   UpstreamRequest  →  the URL + headers we send to Jina.ai
# =============================================================================

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional


# Response formats the upstream API understands, mapped to the Accept header
# that selects them.
ACCEPT_BY_FORMAT: dict[str, str] = {
    "json": "application/json",
    "text": "text/plain",
}


# -----------------------------------------------------------------------------
# SearchOptions - one search invocation
# -----------------------------------------------------------------------------
# Field defaults mirror the tool's input schema exactly.  A field still at its
# default contributes no header; see HeaderRule below.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchOptions:
    """The arguments of a single ``search`` tool call."""

    query: str                              # Search text (goes into the URL path)
    format: str = "text"                    # "json" or "text"

    # --- Optional upstream switches (one header each when set) ---
    no_cache: bool = False
    token_budget: Optional[float] = None    # Schema enforces minimum 1
    browser_locale: Optional[str] = None
    stream: bool = False                    # Forwarded only; body is still buffered
    gather_links: bool = False
    gather_images: bool = False
    image_caption: bool = False
    enable_iframe: bool = False
    enable_shadow_dom: bool = False
    resolve_redirects: bool = True          # Only an explicit False adds a header

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "SearchOptions":
        """Build options from a raw tool-argument mapping.

        Keys that are not fields of this class are ignored, and keys whose
        value is ``None`` fall back to the field default.

        Raises:
            ValueError: if ``query`` is missing or the format is unknown.
        """
        query = arguments.get("query")
        if not isinstance(query, str):
            raise ValueError("'query' is required and must be a string")

        known = {f.name for f in fields(cls)}
        values = {
            key: value
            for key, value in arguments.items()
            if key in known and value is not None
        }
        options = cls(**values)
        if options.format not in ACCEPT_BY_FORMAT:
            raise ValueError(
                f"Unsupported format {options.format!r}; "
                f"expected one of {sorted(ACCEPT_BY_FORMAT)}"
            )
        return options

    @property
    def accept(self) -> str:
        return ACCEPT_BY_FORMAT[self.format]


# -----------------------------------------------------------------------------
# HeaderRule - declarative optional-field → header mapping
# -----------------------------------------------------------------------------
# Three kinds of rows:
#   "flag"          →  emit "true" when the field is True
#   "negated_flag"  →  emit "true" when the field is explicitly False
#   "value"         →  emit the stringified value when the field is not None
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class HeaderRule:
    """Maps one optional ``SearchOptions`` field onto one HTTP header."""

    option: str
    header: str
    kind: str = "flag"

    def render(self, options: SearchOptions) -> Optional[str]:
        """Return the header value for ``options``, or None to omit it."""
        value = getattr(options, self.option)
        if self.kind == "flag":
            return "true" if value is True else None
        if self.kind == "negated_flag":
            return "true" if value is False else None
        if self.kind == "value":
            if value is None:
                return None
            # 42.0 arrives from JSON clients that send every number as a
            # float; the upstream expects "42".
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            return str(value)
        raise ValueError(f"Unknown header rule kind: {self.kind!r}")


# -----------------------------------------------------------------------------
# UpstreamRequest - what actually goes over the wire
# -----------------------------------------------------------------------------
@dataclass
class UpstreamRequest:
    """A fully built POST to the search endpoint (no body)."""

    url: str
    headers: dict[str, str] = field(default_factory=dict)
    method: str = "POST"
