"""
This module implements the conversion of a full LSP meta-model into a file of
lua-language-server annotations
"""

# Standard
from typing import Any, Dict, List, Optional

# First Party
import alog

# Local
from .converter_base import AnonymousRecords
from .luals_converter import DEFAULT_NAMESPACE, LuaLSConverter
from .utils import documentation_lines

log = alog.use_channel("MM2L")

## Globals #####################################################################

DEFAULT_REGENERATE_COMMAND = (
    "python -m lsp_to_luals gen --version 3.18 "
    "--out runtime/lua/vim/lsp/_meta/protocol.lua"
)

# Common type used everywhere for a parsed meta-model document
MetaModelType = Dict[str, Any]


## Interface ###################################################################


def metamodel_to_luals(
    protocol: MetaModelType,
    *,
    namespace: str = DEFAULT_NAMESPACE,
    regenerate_command: str = DEFAULT_REGENERATE_COMMAND,
    converter: Optional[LuaLSConverter] = None,
) -> str:
    """Convert an LSP meta-model into the content of a LuaLS annotation file.

    The layout is: header, primitive aliases, structures, enumerations, type
    aliases and finally every anonymous record that was created for an inline
    object type along the way. The output is a pure function of the input, so
    regenerating from the same meta-model yields identical content.

    Args:
        protocol:  Dict[str, Any]
            The parsed metaModel.json document. It is not modified.

    Kwargs:
        namespace:  str
            The namespace that qualifies the generated type names
        regenerate_command:  str
            The command quoted in the header for regenerating the file
        converter:  Optional[LuaLSConverter]
            A non-default type converter

    Returns:
        luals_content:  str
            The full annotation file content
    """
    converter = converter or LuaLSConverter(namespace=namespace)
    registry = AnonymousRecords()

    output = _header_lines(converter.namespace, regenerate_command)

    structures = protocol.get("structures", [])
    log.debug("Converting %d structures", len(structures))
    for structure in structures:
        output.extend(structure_to_luals(structure, converter, registry))

    enumerations = protocol.get("enumerations", [])
    log.debug("Converting %d enumerations", len(enumerations))
    for enumeration in enumerations:
        output.extend(enumeration_to_luals(enumeration, converter))

    aliases = protocol.get("typeAliases", [])
    log.debug("Converting %d type aliases", len(aliases))
    for alias in aliases:
        output.extend(alias_to_luals(alias, converter, registry))

    log.debug("Adding %d anonymous records", len(registry))
    output.extend(registry.lines())

    return "\n".join(output)


def structure_to_luals(
    structure: Dict[str, Any],
    converter: LuaLSConverter,
    registry: AnonymousRecords,
) -> List[str]:
    """Make the documented class declaration for a single structure.

    The first "extends" entry and then all "mixins" become the parents of the
    class, in declared order.
    """
    log.debug2("Handling structure %s", structure["name"])
    lines = documentation_lines(structure.get("documentation"))
    parents = [
        converter.convert(parent, registry)
        for parent in (structure.get("extends") or [])[:1]
        + (structure.get("mixins") or [])
    ]
    lines.append(
        converter.record_header(converter.qualify(structure["name"]), parents)
    )
    lines.extend(converter.convert_fields(structure.get("properties") or [], registry))
    lines.append("")
    return lines


def enumeration_to_luals(
    enumeration: Dict[str, Any],
    converter: LuaLSConverter,
) -> List[str]:
    """Make the documented alias for a single enumeration with one allowed
    value per continuation line
    """
    log.debug2("Handling enumeration %s", enumeration["name"])
    lines = documentation_lines(enumeration.get("documentation"))
    lines.append(converter.alias_header(converter.qualify(enumeration["name"])))
    for value in enumeration.get("values", []):
        lines.append(converter.alias_value_line(value["value"], value["name"]))
    lines.append("")
    return lines


def alias_to_luals(
    alias: Dict[str, Any],
    converter: LuaLSConverter,
    registry: AnonymousRecords,
) -> List[str]:
    """Make the documented alias for a single type alias. Unions stay on a
    single line.
    """
    log.debug2("Handling type alias %s", alias["name"])
    lines = documentation_lines(alias.get("documentation"))
    lines.append(
        converter.alias_header(
            converter.qualify(alias["name"]),
            converter.convert(alias["type"], registry),
        )
    )
    lines.append("")
    return lines


## Impl ########################################################################


def _header_lines(namespace: str, regenerate_command: str) -> List[str]:
    """The provenance comment followed by the aliases for the base types that
    LuaLS does not know natively
    """
    return [
        "--[[",
        "This file is autogenerated from lsp_to_luals",
        "Regenerate:",
        regenerate_command,
        "--]]",
        "",
        f"---@alias {namespace}.null nil",
        "---@alias uinteger integer",
        f"---@alias {namespace}.decimal number",
        f"---@alias {namespace}.DocumentUri string",
        f"---@alias {namespace}.URI string",
        f"---@alias {namespace}.LSPObject table<string, {namespace}.LSPAny>",
        f"---@alias {namespace}.LSPArray {namespace}.LSPAny[]",
        f"---@alias {namespace}.LSPAny {namespace}.LSPObject|{namespace}.LSPArray|string|number|boolean|nil",
        "",
    ]
