"""Tests for the lvgen command line."""

import pytest

from tools.lvgen.__main__ import main


@pytest.fixture
def proto_file(tmp_path, remote_protocol):
    path = tmp_path / "remote_protocol.x"
    path.write_text(remote_protocol)
    return path


class TestMain:
    def test_writes_output(self, tmp_path, proto_file, capsys):
        out = tmp_path / "constants.gen.go"
        assert main([str(proto_file), "-o", str(out)]) == 0
        code = out.read_text()
        assert "// Code generated by lvgen from remote_protocol.x. DO NOT EDIT." in code
        assert "\tProcNodeGetCPUStats = 16\n" in code
        printed = capsys.readouterr().out
        assert f"wrote {out}" in printed
        assert "8 enums and 6 consts" in printed

    def test_package_flag_overrides_config(self, tmp_path, proto_file):
        cfg = tmp_path / "lvgen.yaml"
        cfg.write_text("output:\n  package: fromconfig\n")
        out = tmp_path / "out.go"
        assert main([str(proto_file), "-o", str(out), "--config", str(cfg),
                     "--package", "fromflag"]) == 0
        assert "\npackage fromflag\n" in out.read_text()

    def test_config_package(self, tmp_path, proto_file):
        cfg = tmp_path / "lvgen.yaml"
        cfg.write_text("output:\n  package: fromconfig\n")
        out = tmp_path / "out.go"
        assert main([str(proto_file), "-o", str(out), "--config", str(cfg)]) == 0
        assert "\npackage fromconfig\n" in out.read_text()

    def test_parse_error_writes_nothing(self, tmp_path, capsys):
        bad = tmp_path / "bad.x"
        bad.write_text("const A = 1;\nenum X { };\n")
        out = tmp_path / "out.go"
        assert main([str(bad), "-o", str(out)]) == 1
        assert not out.exists()
        assert "error: Line 2" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.x"), "-o", str(tmp_path / "out.go")]) == 1
        assert "error:" in capsys.readouterr().err

    def test_bad_config(self, tmp_path, proto_file, capsys):
        cfg = tmp_path / "lvgen.yaml"
        cfg.write_text("log_level: chatty\n")
        assert main([str(proto_file), "-o", str(tmp_path / "out.go"),
                     "--config", str(cfg)]) == 1
        assert "Unknown log_level" in capsys.readouterr().err

    def test_missing_template_dir(self, tmp_path, proto_file, capsys):
        out = tmp_path / "out.go"
        assert main([str(proto_file), "-o", str(out),
                     "--template-dir", str(tmp_path / "none")]) == 1
        assert not out.exists()
        assert "error:" in capsys.readouterr().err

    def test_invalid_utf8_input(self, tmp_path, capsys):
        bad = tmp_path / "bad.x"
        bad.write_bytes(b"const A = 1; /* \xff */")
        out = tmp_path / "out.go"
        assert main([str(bad), "-o", str(out)]) == 1
        assert not out.exists()
        assert "error: input is not valid UTF-8: byte 0xff at offset 16" in capsys.readouterr().err
