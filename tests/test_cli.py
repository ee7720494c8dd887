"""Tests for the command-line interface."""

import json

import pytest

from orrery.bodies.base import BodyKind
from orrery.cli import build_parser, build_selection, main
from orrery.pipeline import DEFAULT_COUNTS


@pytest.fixture(autouse=True)
def isolated_cache(monkeypatch, tmp_path):
    """Keep the sprite cache out of the real home directory."""
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "home")


def selection_for(*argv):
    return build_selection(build_parser().parse_args(list(argv)))


class TestSelection:
    """Tests for flag parsing."""

    def test_no_flags_selects_everything(self):
        selection = selection_for()
        assert selection[BodyKind.STAR] == []
        assert selection[BodyKind.BLACK_HOLE] == []
        for kind, count in DEFAULT_COUNTS.items():
            assert selection[kind] == count

    def test_bare_flag_selects_all_types(self):
        assert selection_for("--planets") == {BodyKind.PLANET: []}

    def test_comma_list(self):
        selection = selection_for("--stars", "G, K,M", "--moons", "3")
        assert selection == {BodyKind.STAR: ["G", "K", "M"], BodyKind.MOON: 3}

    def test_dashed_flags(self):
        selection = selection_for("--gas-giants", "ringed_giant", "--black-holes")
        assert selection == {BodyKind.GAS_GIANT: ["ringed_giant"], BodyKind.BLACK_HOLE: []}


class TestMain:
    """Tests for end-to-end CLI runs."""

    def test_generates_into_output(self, tmp_path, capsys):
        out = tmp_path / "sprites"
        main(["--comets", "1", "-o", str(out), "-p", "preview", "--frames", "2", "--pixel-size", "8", "--no-cache"])

        assert (out / "comets" / "comet_000.png").exists()
        with open(out / "manifest.json") as f:
            manifest = json.load(f)
        assert "000" in manifest["sprites"]["comets"]
        stdout = capsys.readouterr().out
        assert "Written: 1" in stdout
        assert "(1 sprites)" in stdout

    def test_unknown_type_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--planets", "plasma", "-o", str(tmp_path)])
        assert exc.value.code == 1
        assert "plasma" in capsys.readouterr().err

    def test_invalid_frames_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--moons", "1", "--frames", "0", "-o", str(tmp_path)])
        assert exc.value.code == 1

    def test_zero_count_is_nothing_to_do(self, tmp_path, capsys):
        main(["--comets", "0", "-o", str(tmp_path / "out")])
        assert "Nothing to generate" in capsys.readouterr().out
        assert not (tmp_path / "out").exists()

    def test_bad_profile_rejected_by_argparse(self):
        with pytest.raises(SystemExit) as exc:
            main(["--profile", "ultra"])
        assert exc.value.code == 2

    def test_log_file(self, tmp_path):
        log = tmp_path / "run.log"
        main(["--comets", "1", "-o", str(tmp_path / "out"), "-p", "preview", "--frames", "2",
              "--pixel-size", "8", "--no-cache", "--log-file", str(log)])
        assert "Wrote comets/comet_000.png" in log.read_text(encoding="utf-8")
