"""Resolution result schema."""

from pydantic import BaseModel
from pydantic import ConfigDict


class ResolvedSource(BaseModel):
    """
    Outcome of resolving a raw source string.

    `uri` is the canonical form (with `forced+` prefix when one applies),
    `source` is what the getter receives (native scheme intact, no prefix),
    and `scheme` is the getter registry key.

    Example:
        raw:           myscheme+github.com/acme/widget
        uri:           myscheme+https://github.com/acme/widget.git
        source:        https://github.com/acme/widget.git
        scheme:        myscheme
        forced_scheme: myscheme
    """

    model_config = ConfigDict(frozen=True)

    raw: str
    uri: str
    source: str
    scheme: str
    forced_scheme: str | None = None
    # False when raw was already a fully-qualified URI
    detected: bool = False
