"""Tests for the bdeck-ace command line."""

from __future__ import annotations

import shutil

import pytest

from bdeck_ace.cli import main

from conftest import make_file, make_line


class TestMain:
    def test_single_file(self, wp_file, capsys) -> None:
        main([str(wp_file)])
        out = capsys.readouterr().out
        assert out.splitlines() == [
            "WP01:  0.9425   Max Wind:  70kt",
            "--------Summary--------",
            "2023: ",
            "WPAC: 0.9425",
        ]

    def test_directory(self, tmp_path, wp_file, sh_file, capsys) -> None:
        shutil.copy(wp_file, tmp_path)
        shutil.copy(sh_file, tmp_path)
        main(["-d", str(tmp_path)])
        lines = capsys.readouterr().out.splitlines()
        # sorted: bsh before bwp
        assert lines[0].startswith("SH02:")
        assert lines[1].startswith("WP01:")
        assert "2024: " in lines
        assert "SHEM: 0.3725" in lines

    def test_glob(self, tmp_path, wp_file, capsys) -> None:
        shutil.copy(wp_file, tmp_path)
        main(["--input-dir", str(tmp_path / "bwp*.dat")])
        assert capsys.readouterr().out.startswith("WP01:")

    def test_no_files_found(self, tmp_path, capsys) -> None:
        main(["-d", str(tmp_path / "*.dat")])
        assert capsys.readouterr().out.strip() == "No files found!"

    def test_not_a_directory(self, wp_file, capsys) -> None:
        main(["-d", str(wp_file)])
        out = capsys.readouterr().out
        assert out.startswith(f"Not a directory: {wp_file}")
        assert "usage:" in out

    def test_no_arguments_prints_help(self, capsys) -> None:
        main([])
        assert "usage:" in capsys.readouterr().out

    def test_malformed_file_exits_nonzero(self, tmp_path, capsys) -> None:
        bad = tmp_path / "bad.dat"
        bad.write_text(make_file(make_line(lon="XXXXE")))
        with pytest.raises(SystemExit) as excinfo:
            main([str(bad)])
        assert excinfo.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_config_option(self, tmp_path, capsys) -> None:
        storm = tmp_path / "bwp012023.dat"
        storm.write_text(make_file(make_line(wind=34)))
        rules = tmp_path / "rules.yaml"
        rules.write_text("ace:\n  tropical_storm_threshold_kt: 34\n")
        main([str(storm), "--config", str(rules)])
        assert capsys.readouterr().out.startswith("WP01:  0.1156")

    def test_non_utf8_file_exits_nonzero(self, tmp_path, capsys) -> None:
        bad = tmp_path / "bwp012023.dat"
        bad.write_bytes(make_line().encode() + b"\n\xff\xfe\n")
        with pytest.raises(SystemExit) as excinfo:
            main([str(bad)])
        assert excinfo.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_config_exits_nonzero(self, tmp_path, wp_file, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main([str(wp_file), "--config", str(tmp_path / "missing.yaml")])
        assert excinfo.value.code == 1
        assert "Error:" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "content",
        [
            "ace: [unclosed\n",
            "ace:\n  season_rollover_month: 13\n",
        ],
    )
    def test_invalid_config_exits_nonzero(self, tmp_path, wp_file, capsys, content) -> None:
        rules = tmp_path / "rules.yaml"
        rules.write_text(content)
        with pytest.raises(SystemExit) as excinfo:
            main([str(wp_file), "--config", str(rules)])
        assert excinfo.value.code == 1
        captured = capsys.readouterr()
        assert "Error:" in captured.err
        assert captured.out == ""
