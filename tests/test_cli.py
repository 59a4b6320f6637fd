"""Command-line entry point tests."""

import pytest

from systime.cli import build_parser, main


class TestParser:
    def test_default_level(self):
        assert build_parser().parse_args([]).level == 1

    def test_level(self):
        assert build_parser().parse_args(["6"]).level == 6

    def test_bad_level(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["abc"])

    def test_negative_level(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--", "-1"])

    def test_unknown_demo(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--demo", "nope"])


class TestMain:
    def test_db_roundtrip(self, config_file, capsys):
        assert main(["-f", str(config_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("level = 1\n")
        assert "inserted: memo = Theo is cute" in out

    def test_prints_raw_level(self, config_file, capsys):
        assert main(["9", "-f", str(config_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("level = 9\n")
        assert "inserted: memo = Theo is cute" in out

    def test_config_dump(self, config_file, capsys):
        assert main(["2", "-f", str(config_file)]) == 0
        out = capsys.readouterr().out
        assert "config_path=" in out
        assert "secret" not in out

    def test_datetime_demo_by_name(self, config_file, capsys):
        assert main(["--demo", "datetime-demo", "-f", str(config_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("level = 4\n")
        assert "2021-01-01T05:00:00.003+00:00" in out

    def test_backend_override(self, config_file, capsys):
        assert main(["--backend", "duckdb", "-f", str(config_file)]) == 0
        assert "inserted: memo = Theo is cute" in capsys.readouterr().out

    def test_missing_config(self, tmp_path, capsys):
        assert main(["-f", str(tmp_path / "missing.toml")]) == 1
        assert "configuration file not found" in capsys.readouterr().err

    def test_malformed_config(self, tmp_path, capsys):
        path = tmp_path / "bad.toml"
        path.write_text("[postgresql\n", encoding="utf-8")
        assert main(["4", "-f", str(path)]) == 1
        assert "malformed" in capsys.readouterr().err

    def test_unreachable_database(self, tmp_path, capsys):
        path = tmp_path / "config.toml"
        path.write_text(
            '[storage]\nbackend = "sqlite"\npath = "/nonexistent/dir/db.sqlite"\n',
            encoding="utf-8",
        )
        assert main(["1", "-f", str(path)]) == 1
        assert "could not connect to database" in capsys.readouterr().err
