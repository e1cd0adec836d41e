"""
Tests for the command line interface.
"""

import pytest

from cbasm.__main__ import main

EXAMPLE = "add x1 x2 x3\nloop:\nbeq x1 x2 loop\nj loop\n"


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "prog.asm"
    path.write_text(EXAMPLE, encoding="utf-8")
    return path


class TestMain:
    """Tests for cbasm.__main__.main."""

    def test_prints_hex_to_stdout(self, source, capsys):
        main([str(source)])
        out = capsys.readouterr().out
        assert out.splitlines() == ["0x10086001", "0x4c044000", "0x80001fe0"]

    def test_prints_binary(self, source, capsys):
        main([str(source), "-f", "bin"])
        out = capsys.readouterr().out
        assert out.splitlines()[0] == "0001.0000.0000.1000.0110.0000.0000.0001"

    def test_writes_output_file(self, source, tmp_path, capsys):
        out_path = tmp_path / "prog.hex"
        main([str(source), "-o", str(out_path)])
        assert out_path.read_text(encoding="utf-8").splitlines()[0] == "0x10086001"
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "3 instructions" in captured.err

    def test_listing(self, source, capsys):
        main([str(source), "--listing"])
        out = capsys.readouterr().out
        assert "beq x1 x2 loop" in out
        assert "4C044000" in out

    def test_missing_input(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "nope.asm")])
        assert exc_info.value.code == 1
        assert "not found" in capsys.readouterr().err

    def test_errors_reported(self, tmp_path, capsys):
        path = tmp_path / "bad.asm"
        path.write_text("foo x1\nadd x1 x2\nj missing\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main([str(path)])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Line 1: Unknown instruction: foo" in err
        assert "Line 2: add requires 3 operand(s), got 2" in err
        assert "Line 3: Undefined label: missing" in err

    def test_unsupported_instruction(self, tmp_path, capsys):
        path = tmp_path / "io.asm"
        path.write_text("cin\nadd x1 x2 x3\n", encoding="utf-8")
        with pytest.raises(SystemExit):
            main([str(path)])
        assert "No encoding defined for cin" in capsys.readouterr().err

    def test_skip_unsupported(self, tmp_path, capsys):
        path = tmp_path / "io.asm"
        path.write_text("cin\nadd x1 x2 x3\n", encoding="utf-8")
        main([str(path), "--skip-unsupported"])
        assert capsys.readouterr().out.splitlines() == ["0x10086001"]
