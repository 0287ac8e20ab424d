"""
Common utilities that are shared across the generators
"""

# Standard
from typing import List, Optional
import re

# First Party
import alog

log = alog.use_channel("2LUTL")

# Prefix used for every line of a LuaLS documentation block
LUALS_DOC_PREFIX = "---"

# Separator between method documentation paragraphs. A single newline also
# splits so that every documentation line lands on its own comment line.
_METHOD_DOC_SPLIT = re.compile(r"\n?\n")


def method_identifier(method: str) -> str:
    """Get the Lua identifier for a fully-qualified LSP method name.

    The "$/" prefix is special in LSP, so a leading "$" becomes "dollar". Every
    "/" becomes "_".

    CITE: https://microsoft.github.io/language-server-protocol/specifications/lsp/3.17/specification/#dollarRequests
    """
    if method.startswith("$"):
        method = "dollar" + method[1:]
    return method.replace("/", "_")


def documentation_lines(documentation: Optional[str]) -> List[str]:
    """Make the LuaLS comment lines for a documentation string. Every line of
    the string (including blank paragraph separators) gets the doc prefix.
    """
    if not documentation:
        return []
    return [
        LUALS_DOC_PREFIX + line for line in documentation.split("\n")
    ]


def split_method_documentation(documentation: Optional[str]) -> List[str]:
    """Split method documentation into the pieces that each become a single
    comment line in the method table. Empty pieces at either end are dropped,
    empty pieces in the middle are kept.
    """
    if not documentation:
        return []
    pieces = _METHOD_DOC_SPLIT.split(documentation)
    while pieces and not pieces[0]:
        pieces.pop(0)
    while pieces and not pieces[-1]:
        pieces.pop()
    return pieces
