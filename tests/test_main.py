"""
Tests for the command line entrypoint
"""

# Standard
import json

# Third Party
import pytest

# Local
from lsp_to_luals import __main__ as cli
from lsp_to_luals.fetch import FetchError
from lsp_to_luals.metamodel_to_luals import metamodel_to_luals

## Helpers #####################################################################


@pytest.fixture
def schema_file(tmp_path, sample_metamodel):
    path = tmp_path / "metaModel.json"
    path.write_text(json.dumps(sample_metamodel))
    yield str(path)


## Tests #######################################################################


def test_main_gen_from_schema(tmp_path, schema_file):
    out = tmp_path / "out" / "protocol.lua"
    assert cli.main(["gen", "--schema", schema_file, "--out", str(out)]) == 0
    content = out.read_text()
    assert "---@class lsp.Position" in content
    assert f"--out {out}" in content


def test_main_gen_is_reproducible(tmp_path, schema_file):
    """Make sure two runs give byte-identical files"""
    first = tmp_path / "first.lua"
    second = tmp_path / "second.lua"
    assert cli.main(["gen", "--schema", schema_file, "--out", str(first)]) == 0
    assert cli.main(["gen", "--schema", schema_file, "--out", str(second)]) == 0
    assert first.read_text().replace(str(first), "") == second.read_text().replace(
        str(second), ""
    )


def test_main_gen_methods(tmp_path, schema_file):
    """Make sure --methods splices the table into the methods file"""
    methods_file = tmp_path / "protocol_methods.lua"
    methods_file.write_text(
        "local protocol = {}\n-- Generated by old run\nprotocol.Methods = {}\n"
    )
    out = tmp_path / "types.lua"
    assert (
        cli.main(
            [
                "gen",
                "--schema",
                schema_file,
                "--out",
                str(out),
                "--methods",
                "--methods-file",
                str(methods_file),
            ]
        )
        == 0
    )
    lines = methods_file.read_text().split("\n")
    assert lines[0] == "local protocol = {}"
    assert lines[1] == "-- Generated by lsp_to_luals, keep at end of file."
    assert "  initialize = 'initialize'," in lines
    assert "protocol.Methods = {}" not in lines
    assert lines[-2] == "return protocol"


def test_main_gen_without_methods_leaves_methods_file(tmp_path, schema_file):
    methods_file = tmp_path / "protocol_methods.lua"
    methods_file.write_text("local protocol = {}\n")
    out = tmp_path / "types.lua"
    assert (
        cli.main(
            [
                "gen",
                "--schema",
                schema_file,
                "--out",
                str(out),
                "--methods-file",
                str(methods_file),
            ]
        )
        == 0
    )
    assert methods_file.read_text() == "local protocol = {}\n"


def test_main_fetch_failure_writes_nothing(tmp_path, monkeypatch):
    """Make sure a failed fetch aborts before any file is touched"""

    def _fetch(version):
        raise FetchError(f"URL failed for {version}")

    monkeypatch.setattr(cli, "fetch_metamodel", _fetch)
    out = tmp_path / "types.lua"
    methods_file = tmp_path / "methods.lua"
    assert (
        cli.main(
            [
                "gen",
                "--out",
                str(out),
                "--methods",
                "--methods-file",
                str(methods_file),
            ]
        )
        == 1
    )
    assert not out.exists()
    assert not methods_file.exists()


def test_main_fetches_requested_version(tmp_path, monkeypatch, sample_metamodel):
    versions = []

    def _fetch(version):
        versions.append(version)
        return sample_metamodel

    monkeypatch.setattr(cli, "fetch_metamodel", _fetch)
    out = tmp_path / "types.lua"
    assert cli.main(["gen", "--version", "3.17", "--out", str(out)]) == 0
    assert versions == ["3.17"]
    assert out.read_text() == metamodel_to_luals(
        sample_metamodel,
        regenerate_command=f"python -m lsp_to_luals gen --version 3.17 --out {out}",
    )


def test_main_write_failure(tmp_path, schema_file):
    """Make sure an unwritable output path is reported with a failing status"""
    assert cli.main(["gen", "--schema", schema_file, "--out", str(tmp_path)]) == 1


def test_main_method_collision(tmp_path):
    path = tmp_path / "metaModel.json"
    path.write_text(
        json.dumps(
            {
                "requests": [{"method": "a/b"}],
                "notifications": [{"method": "a_b"}],
            }
        )
    )
    methods_file = tmp_path / "methods.lua"
    out = tmp_path / "types.lua"
    assert (
        cli.main(
            [
                "gen",
                "--schema",
                str(path),
                "--out",
                str(out),
                "--methods",
                "--methods-file",
                str(methods_file),
            ]
        )
        == 1
    )
    assert not methods_file.exists()
    assert not out.exists()


def test_main_unknown_command():
    with pytest.raises(SystemExit):
        cli.main(["regen"])
