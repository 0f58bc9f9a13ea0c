"""Render context threaded through every formatter call."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from tracmark.formatting.nodes import TicketId

TRAC_URL = "https://core.trac.wordpress.org"


@dataclass(frozen=True)
class RenderContext:
    """Read-only options shared by a whole render.

    Attributes:
        ticket: Ticket the rendered text belongs to, used as the default
            for attachment references that name no ticket of their own
        trac_url: Base URL of the Trac instance cross-references point at
    """

    ticket: Optional[TicketId] = None
    trac_url: str = TRAC_URL

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "RenderContext":
        """Build a context from a plain mapping, ignoring unknown keys."""
        return cls(
            ticket=options.get("ticket"),
            trac_url=options.get("trac_url") or TRAC_URL,
        )


ContextLike = Union[RenderContext, Mapping[str, Any], None]


def as_context(context: ContextLike) -> RenderContext:
    """Coerce a context, mapping or None into a RenderContext."""
    if isinstance(context, RenderContext):
        return context
    if context is None:
        return RenderContext()
    return RenderContext.from_mapping(context)
