"""
Tests for the run_escapement_pipeline command line script.
"""
import importlib.util
from pathlib import Path
from unittest.mock import patch

import pytest
import requests

scripts_dir = Path(__file__).parent.parent / "scripts"
spec = importlib.util.spec_from_file_location(
    "run_escapement_pipeline",
    scripts_dir / "run_escapement_pipeline.py"
)
cli = importlib.util.module_from_spec(spec)
spec.loader.exec_module(cli)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep a developer's .env and ESCAPEMENT_* variables out of the tests."""
    monkeypatch.chdir(tmp_path)
    for var in ["ESCAPEMENT_DATA_URL", "ESCAPEMENT_CACHE_PATH",
                "ESCAPEMENT_OUTPUT_DIR", "ESCAPEMENT_HTTP_TIMEOUT"]:
        monkeypatch.delenv(var, raising=False)


class TestParseArgs:

    @pytest.mark.unit
    def test_defaults(self):
        args = cli.parse_args([])
        assert args.cache is None
        assert args.salmon_only is False
        assert args.write_cache is False

    @pytest.mark.unit
    def test_flags(self):
        args = cli.parse_args(["--cache", "esc.csv", "--salmon-only", "--region", "Kodiak", "-v"])
        assert args.cache == Path("esc.csv")
        assert args.salmon_only is True
        assert args.region == "Kodiak"
        assert args.verbose is True


class TestMain:

    @pytest.mark.integration
    def test_writes_outputs(self, escapement_csv, tmp_path):
        out = tmp_path / "out"

        status = cli.main(["--cache", str(escapement_csv), "--output-dir", str(out), "--region", "Kodiak"])

        assert status == 0
        for name in ["median_escapement.csv", "annual_escapement.csv", "locations.csv",
                     "median_escapement.png", "median_escapement_table.html",
                     "locations.geojson", "locations_map.html", "annual_escapement_kodiak.png"]:
            assert (out / name).exists(), name

    @pytest.mark.integration
    @patch('escapement.data.loader.requests.get')
    def test_source_failure_exit_code(self, mock_get, tmp_path):
        mock_get.side_effect = requests.exceptions.ConnectionError("offline")

        status = cli.main(["--cache", str(tmp_path / "missing.csv"), "--output-dir", str(tmp_path / "out")])

        assert status == 1
        assert not (tmp_path / "out").exists()

    @pytest.mark.integration
    def test_unknown_region_exit_code(self, escapement_csv, tmp_path):
        out = tmp_path / "out"

        status = cli.main(["--cache", str(escapement_csv), "--output-dir", str(out), "--region", "Nowhere"])

        assert status == 1
        assert not out.exists()

    @pytest.mark.integration
    def test_no_coordinates_skips_map(self, raw_escapement, tmp_path):
        csv = tmp_path / "no_coords.csv"
        raw_escapement.drop(columns=["Latitude", "Longitude"]).to_csv(csv, index=False)
        out = tmp_path / "out"

        status = cli.main(["--cache", str(csv), "--output-dir", str(out)])

        assert status == 0
        assert (out / "median_escapement.png").exists()
        assert not (out / "locations_map.html").exists()
