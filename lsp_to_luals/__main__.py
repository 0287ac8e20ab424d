"""
Command line entrypoint for generating LuaLS annotations from the LSP
meta-model

Usage:
    python -m lsp_to_luals gen  # overwrites runtime/lua/vim/lsp/_meta/protocol.lua
    python -m lsp_to_luals gen --version 3.18 --out build/new_lsp_types.lua
    python -m lsp_to_luals gen --version 3.18 --methods
    python -m lsp_to_luals gen --schema metaModel.json --out protocol.lua
"""

# Standard
from typing import List, Optional
import argparse
import os

# First Party
import alog

# Local
from .fetch import FetchError, fetch_metamodel, load_metamodel
from .file_writer import FileWriteError, splice_file, write_file
from .metamodel_to_luals import metamodel_to_luals
from .methods_to_luals import GENERATED_MARKER, methods_to_luals

log = alog.use_channel("MAIN")

## Globals #####################################################################

DEFAULT_VERSION = "3.18"
DEFAULT_OUTPUT_FILE = "runtime/lua/vim/lsp/_meta/protocol.lua"
METHODS_FILE = "runtime/lua/vim/lsp/protocol.lua"


## Interface ###################################################################


def gen(
    version: str = DEFAULT_VERSION,
    output_file: str = DEFAULT_OUTPUT_FILE,
    *,
    methods: bool = False,
    methods_file: str = METHODS_FILE,
    schema: Optional[str] = None,
):
    """Run the generation pipelines.

    The meta-model is retrieved first, so a failed fetch leaves every target
    untouched.

    Args:
        version:  str
            The LSP version to fetch the meta-model for
        output_file:  str
            Where to write the type annotations

    Kwargs:
        methods:  bool
            Whether to also regenerate the method table
        methods_file:  str
            The file the method table is spliced into
        schema:  Optional[str]
            Local meta-model file to use instead of fetching
    """
    if schema:
        protocol = load_metamodel(schema)
    else:
        protocol = fetch_metamodel(version)

    if methods:
        log.info("Regenerating method table in %s", methods_file)
        splice_file(methods_file, methods_to_luals(protocol), GENERATED_MARKER)

    regenerate_command = f"python -m lsp_to_luals gen --version {version} --out {output_file}"
    content = metamodel_to_luals(protocol, regenerate_command=regenerate_command)
    log.info("Writing annotations to %s", output_file)
    write_file(output_file, content)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="lsp_to_luals",
        description="Generate lua-language-server annotations from the LSP meta-model",
    )
    parser.add_argument("command", choices=["gen"], help="The generator to run")
    parser.add_argument(
        "--version",
        default=DEFAULT_VERSION,
        help="LSP version of the meta-model to fetch (default: %(default)s)",
    )
    parser.add_argument(
        "--out",
        dest="output_file",
        default=DEFAULT_OUTPUT_FILE,
        help="Path of the generated annotation file (default: %(default)s)",
    )
    parser.add_argument(
        "--methods",
        action="store_true",
        help=f"Also regenerate the method table at the end of {METHODS_FILE}",
    )
    parser.add_argument(
        "--methods-file",
        default=METHODS_FILE,
        help="File the method table is spliced into (default: %(default)s)",
    )
    parser.add_argument(
        "--schema",
        default=None,
        help="Read the meta-model from this JSON file instead of fetching it",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "info"),
        help="Default log level (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    alog.configure(
        default_level=args.log_level,
        filters=os.environ.get("LOG_FILTERS", ""),
        formatter="json" if os.environ.get("LOG_JSON", "").lower() == "true" else "pretty",
    )

    try:
        gen(
            args.version,
            args.output_file,
            methods=args.methods,
            methods_file=args.methods_file,
            schema=args.schema,
        )
    except (FetchError, FileWriteError, ValueError) as err:
        log.error("%s", err)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
