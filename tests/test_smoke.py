"""Smoke tests: imports work, CLI --help works, CLI parses and reports errors."""

from click.testing import CliRunner

from simpledot.__main__ import main


def test_import():
    import simpledot

    assert simpledot.parse is not None


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "DOT subset" in result.output


def test_cli_stdin_outline():
    runner = CliRunner()
    result = runner.invoke(main, [], input="strict digraph G { label=T; a [color=red]; a -> b; subgraph cluster_x { c } }")
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "strict digraph 'G'",
        "  label = 'T'",
        "  node 'a' [color='red']",
        "  edge 'a' -> 'b'",
        "  cluster 'cluster_x'",
        "    node 'c'",
    ]


def test_cli_file_input(tmp_path):
    path = tmp_path / "g.gv"
    path.write_text("graph { a -- b }")
    result = CliRunner().invoke(main, [str(path)])
    assert result.exit_code == 0
    assert "edge 'a' -- 'b'" in result.output


def test_cli_reports_parse_error():
    result = CliRunner().invoke(main, [], input="graph { a -> b }")
    assert result.exit_code == 1
    assert "parse error" in result.output
    assert "line 1, column 11" in result.output


def test_cli_max_depth():
    result = CliRunner().invoke(main, ["--max-depth", "1"], input="digraph { { { a } } }")
    assert result.exit_code == 1
    assert "nested deeper" in result.output


def test_cli_rejects_max_depth_above_ceiling():
    result = CliRunner().invoke(main, ["--max-depth", "100000"], input="digraph { a }")
    assert result.exit_code == 2
    assert "--max-depth" in result.output
