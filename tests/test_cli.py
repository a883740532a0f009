import numpy as np
import pytest

import mandel
from mandelbands import decode


def _run(tmp_path, *args):
    mandel.main(["--width", "24", "--height", "16", "--threads", "3", *args])


def test_writes_png(tmp_path, capsys):
    output = tmp_path / "out.png"
    _run(tmp_path, "--output", str(output))

    assert capsys.readouterr().out.strip() == str(output.resolve())
    assert decode(output.read_bytes()).shape == (16, 24)


def test_adds_suffix_from_format(tmp_path):
    _run(tmp_path, "--format", "tiff", "--output", str(tmp_path / "plain"))
    assert (tmp_path / "plain.tiff").is_file()


def test_default_output_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _run(tmp_path)
    assert (tmp_path / "mandel.png").is_file()


def test_verbose_logs(tmp_path, capsys):
    _run(tmp_path, "-v", "--output", str(tmp_path / "v.png"))
    out = capsys.readouterr().out
    assert "Viewport:" in out
    assert "6 rows per band" in out
    assert "Encoded" in out


def test_quiet_by_default(tmp_path, capsys):
    _run(tmp_path, "--output", str(tmp_path / "q.png"))
    assert "Viewport:" not in capsys.readouterr().out


def test_extension_mismatch(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        _run(tmp_path, "--format", "png", "--output", str(tmp_path / "out.tiff"))
    assert excinfo.value.code == 2


def test_output_directory_rejected(tmp_path):
    with pytest.raises(SystemExit):
        _run(tmp_path, "--output", str(tmp_path))


@pytest.mark.parametrize(
    "args",
    [
        ["--threads", "0"],
        ["--left", "1.0", "--right", "-1.0"],
        ["--top", "-1.0", "--bottom", "1.0"],
        ["--width", "0"],
    ],
)
def test_invalid_options(tmp_path, args):
    with pytest.raises(SystemExit) as excinfo:
        _run(tmp_path, "--output", str(tmp_path / "bad.png"), *args)
    assert excinfo.value.code == 2


def test_idle_threads_warning(tmp_path):
    with pytest.warns(RuntimeWarning, match="stay idle"):
        _run(tmp_path, "--threads", "32", "--output", str(tmp_path / "w.png"))


def test_matches_library_render(tmp_path):
    output = tmp_path / "cmp.png"
    _run(tmp_path, "--left", "-2.0", "--top", "1.0", "--right", "1.0", "--bottom", "-1.0", "--output", str(output))

    from mandelbands import Viewport, render_pixels

    expected = render_pixels(24, 16, Viewport.from_edges(-2.0, 1.0, 1.0, -1.0), 1)
    np.testing.assert_array_equal(decode(output.read_bytes()).ravel(), expected)
