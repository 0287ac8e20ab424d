"""
This module implements retrieval of the LSP meta-model, either from the
published specification repository or from a local file
"""

# Standard
from typing import Any, Dict
import json
import urllib.request

# First Party
import alog

log = alog.use_channel("FETCH")

## Globals #####################################################################

METAMODEL_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/microsoft/language-server-protocol/"
    "gh-pages/_specifications/lsp/{version}/metaModel/metaModel.json"
)

DEFAULT_FETCH_TIMEOUT = 30.0

# Any real meta-model is far larger than this. A shorter body is an error page.
MIN_METAMODEL_BYTES = 999


class FetchError(RuntimeError):
    """Raised when the meta-model cannot be retrieved or parsed"""


## Interface ###################################################################


def fetch_metamodel(
    version: str,
    *,
    url_template: str = METAMODEL_URL_TEMPLATE,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> Dict[str, Any]:
    """Download and parse the meta-model for the given LSP version.

    Args:
        version:  str
            The LSP specification version, e.g. "3.18"

    Kwargs:
        url_template:  str
            URL with a {version} placeholder
        timeout:  float
            Timeout in seconds for the download

    Returns:
        protocol:  Dict[str, Any]
            The parsed meta-model document
    """
    url = url_template.format(version=version)
    log.info("Fetching meta-model from %s", url)
    try:
        with urllib.request.urlopen(url, timeout=timeout) as response:
            payload = response.read()
    # NOTE: urllib.error.URLError and socket timeouts are both OSErrors
    except OSError as err:
        raise FetchError(f"URL failed: {url}: {err}") from err

    if len(payload) < MIN_METAMODEL_BYTES:
        raise FetchError(
            f"URL failed: {url}: response too short ({len(payload)} bytes): {payload!r}"
        )
    log.debug("Downloaded %d bytes", len(payload))
    return _parse_metamodel(payload, url)


def load_metamodel(path: str) -> Dict[str, Any]:
    """Load and parse a meta-model from a local JSON file"""
    log.info("Loading meta-model from %s", path)
    try:
        with open(path, "rb") as handle:
            payload = handle.read()
    except OSError as err:
        raise FetchError(f"Failed to read meta-model {path}: {err}") from err
    return _parse_metamodel(payload, path)


## Impl ########################################################################


def _parse_metamodel(payload: bytes, source: str) -> Dict[str, Any]:
    try:
        protocol = json.loads(payload.decode("utf-8"))
    except UnicodeDecodeError as err:
        raise FetchError(f"utf-8 decode failed for {source}: {err}") from err
    except json.JSONDecodeError as err:
        raise FetchError(f"invalid json from {source}: {err}") from err
    if not isinstance(protocol, dict):
        raise FetchError(f"meta-model from {source} is not a JSON object")
    log.debug2(
        "Meta-model version: %s", protocol.get("metaData", {}).get("version")
    )
    return protocol
