"""Tests for the border engine, settings and command line entry point."""

import pytest
import numpy as np
from pydantic import ValidationError

from py_borders import cli
from py_borders.cli import build_parser, main, run, settings_from_args
from py_borders.config import Settings
from py_borders.core import GridConfig, PassInProgressError, SeedSet, generate_scenario
from py_borders.engine import BorderEngine, Command


@pytest.fixture
def square_engine():
    seeds = SeedSet([(0, 0), (10, 0), (0, 10), (10, 10)], [1, 1, 2, 2])
    return BorderEngine(seeds, GridConfig(20, 20, 2.0), workers=2)


class TestBorderEngine:
    """Test the two triggered passes."""

    def test_extract_before_compute(self, square_engine):
        """Test that extraction on an empty store writes nothing."""
        before = square_engine.pixel_bytes()
        result = square_engine.extract_vertices()
        assert not result.boundary_present
        assert result.vertices == []
        assert square_engine.pixel_bytes() == before

    def test_base_layer_has_seeds(self, square_engine):
        """Test that seeds are drawn before any pass."""
        assert square_engine.canvas.get_pixel(0, 0) == (255, 0, 0, 255)
        assert square_engine.canvas.get_pixel(0, 12) == (0, 255, 0, 255)

    def test_compute_then_extract(self, square_engine):
        """Test the full trigger sequence."""
        borders = square_engine.handle(Command.COMPUTE_BORDERS)
        assert borders.border_cells > 0
        assert square_engine.store.get(0, 5) == (0, 2)

        result = square_engine.handle("extract_vertices")
        assert result.boundary_present
        vx, vy = result.vertices[0]
        assert square_engine.canvas.get_pixel(vx, vy) == (255, 0, 0, 255)

    def test_compute_idempotent(self, square_engine):
        """Test that two border passes give identical buffers."""
        square_engine.compute_borders()
        pairs, pixels = square_engine.store.pairs.copy(), square_engine.pixel_bytes()
        square_engine.compute_borders()
        np.testing.assert_array_equal(square_engine.store.pairs, pairs)
        assert square_engine.pixel_bytes() == pixels

    def test_clear_removes_stale_cells(self, square_engine):
        """Test that cells from an earlier pass do not survive a new one."""
        square_engine.store[19, 19] = (0, 3)
        square_engine.compute_borders()
        assert square_engine.store.get(19, 19) is None

    def test_stale_cells_kept_without_clear(self):
        """Test that disabling the clear keeps earlier writes."""
        seeds = SeedSet([(0, 0), (10, 0), (0, 10), (10, 10)], [1, 1, 2, 2])
        engine = BorderEngine(seeds, GridConfig(20, 20, 2.0), clear_before_pass=False)
        engine.store[19, 19] = (0, 3)
        engine.compute_borders()
        assert engine.store.get(19, 19) == (0, 3)

    def test_overlapping_compute_rejected(self, square_engine):
        square_engine._pass_lock.acquire()
        try:
            with pytest.raises(PassInProgressError):
                square_engine.compute_borders()
        finally:
            square_engine._pass_lock.release()

    def test_extract_rejected_during_pass(self, square_engine):
        """Test that a vertex pass cannot read the store while another pass holds it."""
        square_engine.compute_borders()
        square_engine._pass_lock.acquire()
        try:
            with pytest.raises(PassInProgressError):
                square_engine.extract_vertices()
        finally:
            square_engine._pass_lock.release()
        assert square_engine.extract_vertices().boundary_present

    def test_unknown_command(self, square_engine):
        with pytest.raises(ValueError):
            square_engine.handle("render")

    def test_from_settings(self):
        settings = Settings(width=30, height=20, smoothing_radius=1.5, kernel="reference",
                            group_colors={1: (1, 2, 3, 255)})
        seeds = generate_scenario(count=10, width=30, height=20, seed=0)
        engine = BorderEngine.from_settings(seeds, settings)
        assert engine.config == GridConfig(30, 20, 1.5)
        assert engine.field.kernel == "reference"
        assert engine.palette.color(1) == (1, 2, 3, 255)
        assert len(engine.pixel_bytes()) == 30 * 20 * 4


class TestSettings:
    """Test configuration loading."""

    def test_defaults(self):
        settings = Settings()
        assert settings.grid_config() == GridConfig(1000, 800, 2.0)
        assert settings.clear_before_pass
        assert settings.seed_count == 750

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("BORDERS_WIDTH", "64")
        monkeypatch.setenv("BORDERS_SMOOTHING_RADIUS", "3.5")
        settings = Settings()
        assert settings.width == 64
        assert settings.smoothing_radius == 3.5

    def test_env_file(self, tmp_path, monkeypatch):
        """Test that a .env file in the working directory is read."""
        monkeypatch.delenv("BORDERS_HEIGHT", raising=False)
        (tmp_path / ".env").write_text("BORDERS_HEIGHT=33\n")
        monkeypatch.chdir(tmp_path)
        assert Settings().height == 33

    def test_environment_beats_env_file(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("BORDERS_HEIGHT=33\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("BORDERS_HEIGHT", "44")
        assert Settings().height == 44

    def test_invalid_kernel(self):
        with pytest.raises(ValidationError):
            Settings(kernel="gpu")

    def test_invalid_size(self):
        with pytest.raises(ValidationError):
            Settings(width=0)


class TestCli:
    """Test the command line entry point."""

    def test_renders_png(self, tmp_path, monkeypatch):
        """Test that the entry point draws borders and writes the PNG."""
        results = []
        real_run = cli.run

        def recording_run(args, run_settings):
            outcome = real_run(args, run_settings)
            results.append(outcome)
            return outcome

        monkeypatch.setattr(cli, "run", recording_run)
        output = tmp_path / "borders.png"
        code = main([
            "--output", str(output), "--seeds", "40", "--random-seed", "3",
            "--width", "80", "--height", "60", "--workers", "2",
        ])
        assert code == 0
        assert output.exists()
        _, borders, _ = results[0]
        assert borders.border_cells > 0

    def test_small_raster_has_borders(self):
        """Test that a small raster still gets several groups and drawn borders."""
        args = build_parser().parse_args([
            "--seeds", "40", "--random-seed", "3", "--width", "80", "--height", "60",
        ])
        engine, borders, vertices = run(args, settings_from_args(args))
        assert len(engine.seeds.distinct_groups()) > 1
        assert borders.border_cells > 0
        assert vertices.boundary_present

    def test_skip_vertices(self, tmp_path):
        output = tmp_path / "plain.png"
        code = main([
            "--output", str(output), "--seeds", "20", "--width", "40", "--height", "30",
            "--no-vertices",
        ])
        assert code == 0
        assert output.exists()
