# Standard
from typing import Iterable, List, Optional

# First Party
import alog

# Local
from .converter_base import AnonymousRecords, ConverterBase, TypeDescriptor
from .utils import LUALS_DOC_PREFIX, documentation_lines

log = alog.use_channel("2LUALS")


## Globals #####################################################################

# Meta-model base types that LuaLS knows by the same name. "uinteger" and
# "decimal" are declared as aliases in the generated file header.
LUALS_PRIMITIVE_TYPES = (
    "string",
    "boolean",
    "integer",
    "uinteger",
    "decimal",
)

DEFAULT_NAMESPACE = "lsp"


## Interface ###################################################################


def type_to_luals(
    type_def: TypeDescriptor,
    registry: Optional[AnonymousRecords] = None,
    *,
    namespace: str = DEFAULT_NAMESPACE,
) -> str:
    """Convert a single meta-model type descriptor into a LuaLS type string.

    Args:
        type_def:  Dict[str, Any]
            The type descriptor dict with a "kind" key

    Kwargs:
        registry:  Optional[AnonymousRecords]
            Accumulator for anonymous records created for inline object types.
            If not given, a throwaway registry is used.
        namespace:  str
            The namespace that qualifies non-primitive type names

    Returns:
        luals_type:  str
            The LuaLS type expression
    """
    if registry is None:
        registry = AnonymousRecords()
    return LuaLSConverter(namespace=namespace).convert(type_def, registry)


## Impl ########################################################################


class LuaLSConverter(ConverterBase):
    """Converter implementation for lua-language-server annotations"""

    def __init__(
        self,
        namespace: str = DEFAULT_NAMESPACE,
        primitive_types: Optional[Iterable[str]] = None,
    ):
        super().__init__(
            namespace=namespace,
            primitive_types=primitive_types or LUALS_PRIMITIVE_TYPES,
        )

    ## Abstract Interface ######################################################

    def array_type(self, element: str) -> str:
        return f"{element}[]"

    def union_type(self, members: List[str]) -> str:
        return "|".join(members)

    def string_literal_type(self, value: str) -> str:
        return f'"{value}"'

    def map_type(self, key: str, value: str) -> str:
        return f"table<{key}, {value}>"

    def tuple_type(self, members: List[str]) -> str:
        """Tuples become a table type with positional keys,
        e.g. { [1]: string, [2]: integer }
        """
        entries = ", ".join(
            f"[{position}]: {member}"
            for position, member in enumerate(members, start=1)
        )
        return f"{{ {entries} }}"

    def anonymous_name(self, number: int) -> str:
        return f"anonym{number}"

    def record_header(self, name: str, parents: List[str]) -> str:
        header = f"{LUALS_DOC_PREFIX}@class {name}"
        if parents:
            header += ": " + ", ".join(parents)
        return header

    def field_lines(
        self,
        name: str,
        type_str: str,
        optional: bool,
        documentation: Optional[str],
    ) -> List[str]:
        lines = documentation_lines(documentation)
        optional_marker = "?" if optional else ""
        lines.append(f"{LUALS_DOC_PREFIX}@field {name}{optional_marker} {type_str}")
        return lines

    ## Declarations ############################################################

    def alias_header(self, name: str, type_str: Optional[str] = None) -> str:
        """Make an alias declaration line, optionally with its type inline"""
        header = f"{LUALS_DOC_PREFIX}@alias {name}"
        if type_str is not None:
            header += f" {type_str}"
        return header

    def alias_value_line(self, value, display_name: str) -> str:
        """Make a continuation line listing one allowed value of an alias.
        Strings are quoted, numbers are emitted bare.
        """
        if isinstance(value, str):
            value_str = f'"{value}"'
        else:
            value_str = str(value)
        return f"{LUALS_DOC_PREFIX}| {value_str} # {display_name}"
