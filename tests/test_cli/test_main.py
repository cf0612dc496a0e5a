"""
End-to-end tests for the CLI entry point.
"""

import os

import pytest
from main import main


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run inside a temp dir so the log file lands there."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_submit_then_aggregate(workdir, capsys):
    """Test submitted reports show up in the aggregated area table."""
    data_root = str(workdir / "data")
    output_dir = str(workdir / "output")

    for lat, lng, rating in [(-23.5505, -46.6333, 8), (-23.5510, -46.6339, 6)]:
        code = main([
            "--data-root", data_root, "submit",
            "--lat", str(lat), "--lng", str(lng), "--rating", str(rating),
            "--user-id", "u-1", "--user-name", "Ana",
        ])
        assert code == 0

    code = main(["--data-root", data_root, "aggregate", "--output-dir", output_dir])
    out = capsys.readouterr().out

    assert code == 0
    assert "1 area(s)" in out
    assert "-23.553_-46.638: 7.0/10 (Good, 2 report(s))" in out
    assert os.path.exists(os.path.join(output_dir, "areas.csv"))


def test_submit_invalid_rating(workdir, capsys):
    """Test out-of-range ratings exit with an error."""
    code = main([
        "--data-root", str(workdir / "data"), "submit",
        "--lat", "1.0", "--lng", "1.0", "--rating", "12",
    ])

    assert code == 1
    assert "Invalid report" in capsys.readouterr().out
