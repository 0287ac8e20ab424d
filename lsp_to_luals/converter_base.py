"""
This base class provides the abstract interface that needs to be implemented to
convert meta-model type descriptors into the type syntax of some annotation
language. It also implements the common recursive conversion scaffolding that
all converters share, including the accumulation of anonymous records for
inline object types.
"""

# Standard
from typing import Any, Callable, Dict, Iterable, List, Optional
import abc

# First Party
import alog

log = alog.use_channel("2LCVRT")

# Common type used everywhere for a meta-model type descriptor dict
TypeDescriptor = Dict[str, Any]

# The closed set of descriptor kinds in the meta-model
TYPE_KINDS = (
    "reference",
    "base",
    "array",
    "or",
    "stringLiteral",
    "map",
    "literal",
    "tuple",
)


class AnonymousRecords:
    """Accumulator for the anonymous records produced during a single
    generation run.

    Numbers are handed out when a literal is entered and never reused, while
    record text is added once the record is complete. A literal nested inside
    another one therefore gets the larger number but lands first.
    """

    def __init__(self):
        self._count = 0
        self._records: List[List[str]] = []

    def allocate(self) -> int:
        """Reserve the next record number"""
        self._count += 1
        log.debug3("Allocated anonymous record %d", self._count)
        return self._count

    def add(self, lines: Iterable[str]):
        """Add the complete lines of a record declaration"""
        self._records.append(list(lines))

    @property
    def count(self) -> int:
        return self._count

    def __len__(self) -> int:
        return len(self._records)

    def lines(self) -> List[str]:
        """All accumulated record lines in the order the records completed"""
        return [line for record in self._records for line in record]


class ConverterBase(abc.ABC):
    __doc__ = __doc__

    def __init__(self, namespace: str, primitive_types: Iterable[str]):
        """
        Args:
            namespace (str)
                The namespace that qualifies every non-primitive type name
            primitive_types (Iterable[str])
                Names of types that are emitted bare, without the namespace
        """
        self.namespace = namespace
        self.primitive_types = frozenset(primitive_types)
        self._kind_handlers: Dict[
            str, Callable[[TypeDescriptor, AnonymousRecords], str]
        ] = {
            "reference": self._convert_named,
            "base": self._convert_named,
            "array": self._convert_array,
            "or": self._convert_or,
            "stringLiteral": self._convert_string_literal,
            "map": self._convert_map,
            "literal": self._convert_literal,
            "tuple": self._convert_tuple,
        }
        assert set(self._kind_handlers) == set(
            TYPE_KINDS
        ), "Programming Error: Not all type kinds have a handler"

    ## Abstract Interface ######################################################

    @abc.abstractmethod
    def array_type(self, element: str) -> str:
        """Make the array type for the given element type"""

    @abc.abstractmethod
    def union_type(self, members: List[str]) -> str:
        """Make the union of the given member types"""

    @abc.abstractmethod
    def string_literal_type(self, value: str) -> str:
        """Make the type for a single string literal value"""

    @abc.abstractmethod
    def map_type(self, key: str, value: str) -> str:
        """Make the mapping type from key type to value type"""

    @abc.abstractmethod
    def tuple_type(self, members: List[str]) -> str:
        """Make the fixed-arity positional type for the ordered members"""

    @abc.abstractmethod
    def anonymous_name(self, number: int) -> str:
        """Get the synthetic type name for the given anonymous record number"""

    @abc.abstractmethod
    def record_header(self, name: str, parents: List[str]) -> str:
        """Make the declaration line for a record with optional parents"""

    @abc.abstractmethod
    def field_lines(
        self,
        name: str,
        type_str: str,
        optional: bool,
        documentation: Optional[str],
    ) -> List[str]:
        """Make the (documented) declaration lines for a single record field"""

    ## Public ##################################################################

    def qualify(self, name: str) -> str:
        """Qualify a type name with the namespace"""
        return f"{self.namespace}.{name}"

    def convert(self, entry: TypeDescriptor, registry: AnonymousRecords) -> str:
        """This is the core recursive function that converts a single type
        descriptor into its textual type. Inline object types are added to the
        given registry.

        Unknown kinds are logged and converted to an empty string so that one
        bad node does not abort the whole run.
        """
        kind = entry.get("kind")
        handler = self._kind_handlers.get(kind)
        if handler is None:
            log.error("Got unsupported type descriptor: %s", entry)
            return ""
        log.debug4("Handling %s type", kind)
        return handler(entry, registry)

    def convert_fields(
        self,
        properties: Iterable[Dict[str, Any]],
        registry: AnonymousRecords,
    ) -> List[str]:
        """Convert the ordered properties of a record into field lines"""
        lines = []
        for prop in properties:
            log.debug3("Handling field %s", prop["name"])
            lines.extend(
                self.field_lines(
                    prop["name"],
                    self.convert(prop["type"], registry),
                    prop.get("optional", False),
                    prop.get("documentation"),
                )
            )
        return lines

    ## Implementation Details ##################################################

    def _convert_named(self, entry: TypeDescriptor, registry: AnonymousRecords) -> str:
        name = entry["name"]
        if name in self.primitive_types:
            return name
        return self.qualify(name)

    def _convert_array(self, entry: TypeDescriptor, registry: AnonymousRecords) -> str:
        return self.array_type(self.convert(entry["element"], registry))

    def _convert_or(self, entry: TypeDescriptor, registry: AnonymousRecords) -> str:
        return self.union_type(
            [self.convert(item, registry) for item in entry["items"]]
        )

    def _convert_string_literal(
        self, entry: TypeDescriptor, registry: AnonymousRecords
    ) -> str:
        return self.string_literal_type(entry["value"])

    def _convert_map(self, entry: TypeDescriptor, registry: AnonymousRecords) -> str:
        return self.map_type(
            self.convert(entry["key"], registry),
            self.convert(entry["value"], registry),
        )

    def _convert_tuple(self, entry: TypeDescriptor, registry: AnonymousRecords) -> str:
        return self.tuple_type(
            [self.convert(item, registry) for item in entry["items"]]
        )

    def _convert_literal(
        self, entry: TypeDescriptor, registry: AnonymousRecords
    ) -> str:
        """Inline object types have no name of their own, so they become a
        numbered anonymous record that is referenced by name.
        """
        number = registry.allocate()
        name = self.anonymous_name(number)
        log.debug2("Handling literal as %s", name)
        lines = [self.record_header(name, [])]
        lines.extend(
            self.convert_fields(entry["value"].get("properties", []), registry)
        )
        lines.append("")
        registry.add(lines)
        return name
