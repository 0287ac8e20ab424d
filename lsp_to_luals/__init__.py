"""
This library holds utilities for converting the Language Server Protocol
meta-model into lua-language-server (LuaLS) annotations.

References:
* https://microsoft.github.io/language-server-protocol/specifications/lsp/3.18/metaModel/metaModel.json
* https://luals.github.io/wiki/annotations/

Example:

```
import lsp_to_luals

protocol = lsp_to_luals.fetch_metamodel("3.18")

def write_protocol_types(filename: str):
    \"\"\"Write out the LuaLS annotations for all LSP types to the given filename\"\"\"
    lsp_to_luals.write_file(filename, lsp_to_luals.metamodel_to_luals(protocol))
```
"""

# Local
from .converter_base import AnonymousRecords
from .fetch import FetchError, fetch_metamodel, load_metamodel
from .file_writer import FileWriteError, splice_file, write_file
from .luals_converter import LuaLSConverter, type_to_luals
from .metamodel_to_luals import metamodel_to_luals
from .methods_to_luals import method_table, methods_to_luals
from .utils import method_identifier
