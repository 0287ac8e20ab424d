"""
Common test helpers
"""

# Standard
import copy
import os

# Third Party
import pytest

# First Party
import alog

# Global logging config
alog.configure(
    default_level=os.environ.get("LOG_LEVEL", "info"),
    filters=os.environ.get("LOG_FILTERS", ""),
    formatter="json" if os.environ.get("LOG_JSON", "").lower() == "true" else "pretty",
    thread_id=os.environ.get("LOG_THREAD_ID", "").lower() == "true",
)

# A small meta-model that covers every type kind
SAMPLE_METAMODEL = {
    "metaData": {"version": "3.18.0"},
    "requests": [
        {
            "method": "textDocument/hover",
            "documentation": "Request to request hover information at a given text\ndocument position.",
        },
        {
            "method": "initialize",
            "documentation": "The initialize request is sent from the client to the server.\n\nIt is sent once as the request after starting up the server.",
        },
    ],
    "notifications": [
        {"method": "$/cancelRequest"},
        {"method": "textDocument/didOpen"},
    ],
    "structures": [
        {
            "name": "Position",
            "documentation": "Position in a text document.\n\nZero-based.",
            "properties": [
                {
                    "name": "line",
                    "type": {"kind": "base", "name": "uinteger"},
                    "documentation": "Line position in a document.",
                },
                {"name": "character", "type": {"kind": "base", "name": "uinteger"}},
            ],
        },
        {
            "name": "HoverParams",
            "extends": [{"kind": "reference", "name": "TextDocumentPositionParams"}],
            "mixins": [{"kind": "reference", "name": "WorkDoneProgressParams"}],
            "properties": [],
        },
        {
            "name": "ServerInfoHolder",
            "properties": [
                {
                    "name": "serverInfo",
                    "optional": True,
                    "type": {
                        "kind": "literal",
                        "value": {
                            "properties": [
                                {
                                    "name": "name",
                                    "type": {"kind": "base", "name": "string"},
                                    "documentation": "The name of the server.",
                                },
                                {
                                    "name": "version",
                                    "optional": True,
                                    "type": {"kind": "base", "name": "string"},
                                },
                            ]
                        },
                    },
                },
                {
                    "name": "range",
                    "type": {
                        "kind": "tuple",
                        "items": [
                            {"kind": "base", "name": "integer"},
                            {"kind": "base", "name": "integer"},
                        ],
                    },
                },
            ],
        },
    ],
    "enumerations": [
        {
            "name": "TraceValue",
            "documentation": "The trace level.",
            "values": [
                {"name": "Off", "value": "off"},
                {"name": "Verbose", "value": "verbose"},
            ],
        },
        {
            "name": "DiagnosticSeverity",
            "values": [
                {"name": "Error", "value": 1},
                {"name": "Warning", "value": 2},
            ],
        },
    ],
    "typeAliases": [
        {
            "name": "Definition",
            "documentation": "The definition of a symbol.",
            "type": {
                "kind": "or",
                "items": [
                    {"kind": "reference", "name": "Location"},
                    {
                        "kind": "array",
                        "element": {"kind": "reference", "name": "Location"},
                    },
                ],
            },
        },
        {
            "name": "DocumentSelector",
            "type": {
                "kind": "array",
                "element": {"kind": "reference", "name": "DocumentFilter"},
            },
        },
        {
            "name": "ChangeAnnotations",
            "type": {
                "kind": "map",
                "key": {"kind": "base", "name": "string"},
                "value": {"kind": "reference", "name": "ChangeAnnotation"},
            },
        },
    ],
}


@pytest.fixture
def sample_metamodel():
    """Fixture with a fresh copy of the sample meta-model for each test"""
    yield copy.deepcopy(SAMPLE_METAMODEL)
