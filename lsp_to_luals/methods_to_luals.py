"""
This module implements generation of the frozen table of LSP method names that
lives at the end of the Lua protocol module
"""

# Standard
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

# First Party
import alog

# Local
from .utils import method_identifier, split_method_documentation

log = alog.use_channel("MTH2L")

## Globals #####################################################################

# Every line from the first one starting with this marker to the end of the
# file belongs to the generator
GENERATED_MARKER = "-- Generated by"

METHODS_INDENT = "  "

METHODS_HEADER = [
    f"{GENERATED_MARKER} lsp_to_luals, keep at end of file.",
    "--- LSP method names.",
    "---",
    "---@see https://microsoft.github.io/language-server-protocol/specifications/specification-current/#metaModel",
    "protocol.Methods = {",
]

# Wraps the table in a proxy that forwards reads and raises on any write
METHODS_EPILOGUE = """}
local function freeze(t)
  return setmetatable({}, {
    __index = t,
    __newindex = function()
      error('cannot modify immutable table')
    end,
  })
end
protocol.Methods = freeze(protocol.Methods)

return protocol""".split("\n")


## Interface ###################################################################


def methods_to_luals(protocol: Dict[str, Any]) -> List[str]:
    """Make the lines of the method table block for all requests and
    notifications in the meta-model, sorted by Lua identifier.

    Args:
        protocol:  Dict[str, Any]
            The parsed metaModel.json document. It is not modified.

    Returns:
        lines:  List[str]
            The block lines, starting with the generated marker line
    """
    output = list(METHODS_HEADER)
    for identifier, item in _sorted_methods(protocol):
        for docstring in split_method_documentation(item.get("documentation")):
            output.append(f"{METHODS_INDENT}--- {docstring}")
        output.append(f"{METHODS_INDENT}{identifier} = '{item['method']}',")
    output.extend(METHODS_EPILOGUE)
    return output


def method_table(protocol: Dict[str, Any]) -> Mapping[str, str]:
    """Get a read-only mapping from Lua identifier to method name, in the same
    order as the generated table. Writing to it raises a TypeError.
    """
    return MappingProxyType(
        {identifier: item["method"] for identifier, item in _sorted_methods(protocol)}
    )


## Impl ########################################################################


def _sorted_methods(protocol: Dict[str, Any]) -> List[Tuple[str, Dict[str, Any]]]:
    """Combine requests and notifications, key them by identifier and sort.

    Two methods with the same identifier would silently overwrite each other in
    the Lua table, so that is an error.
    """
    items = list(protocol.get("requests", [])) + list(
        protocol.get("notifications", [])
    )
    seen: Dict[str, str] = {}
    keyed = []
    for item in items:
        method = item.get("method")
        if not method:
            log.debug3("Skipping entry without a method: %s", item)
            continue
        identifier = method_identifier(method)
        if identifier in seen:
            raise ValueError(
                f"Methods {seen[identifier]!r} and {method!r} both map to identifier {identifier!r}"
            )
        seen[identifier] = method
        keyed.append((identifier, item))
    log.debug("Found %d methods", len(keyed))
    return sorted(keyed, key=lambda entry: entry[0])
