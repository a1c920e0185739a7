"""Tests for tone mapping, display processing and PNG export.

This module tests:
- Tone mapping operators (linear, gamma, Reinhard, filmic)
- Parsing tone mapping operators from text
- Exposure and the display pipeline
- PNG export via Pillow
- Matplotlib preview and comparison figures
"""

import numpy as np
import pytest


class TestTonemapOperators:
    """Test the channel-wise operators."""

    def test_linear_is_identity(self):
        from lumen.preview import Tonemap

        assert Tonemap.linear().apply(0.3) == pytest.approx(0.3)
        assert Tonemap.linear().apply(2.0) == pytest.approx(2.0)

    def test_gamma(self):
        from lumen.preview import Tonemap

        assert Tonemap.gamma(2.0).apply(0.25) == 0.5

    def test_gamma_1_no_change(self):
        from lumen.preview import Tonemap

        assert Tonemap.gamma(1.0).apply(0.7) == pytest.approx(0.7)

    def test_gamma_brightens_midtones(self):
        from lumen.preview import Tonemap

        assert Tonemap.gamma(2.2).apply(0.5) > 0.5

    def test_reinhard_formula(self):
        """Reinhard maps c to (c / (1 + c))^(1/g)."""
        from lumen.preview import Tonemap

        assert Tonemap.reinhard(1.0).apply(1.0) == pytest.approx(0.5)
        assert Tonemap.reinhard(2.0).apply(3.0) == pytest.approx(np.sqrt(0.75))

    def test_reinhard_compresses_bright_values(self):
        from lumen.preview import Tonemap

        values = Tonemap.reinhard().apply(np.array([1.0, 10.0, 1000.0]))
        assert np.all(values < 1.0)
        assert np.all(np.diff(values) > 0.0)

    def test_filmic_curve(self):
        from lumen.preview import Tonemap

        filmic = Tonemap.filmic()
        assert filmic.apply(0.0) == 0.0
        assert filmic.apply(0.004) == 0.0
        assert filmic.apply(1000.0) == pytest.approx(1.0, abs=1e-3)

        values = filmic.apply(np.linspace(0.01, 10.0, 50))
        assert np.all(np.diff(values) > 0.0)

    @pytest.mark.parametrize("name", ["linear", "gamma", "reinhard", "filmic"])
    def test_negative_input_is_black(self, name):
        from lumen.preview import Tonemap

        assert Tonemap.parse(name).apply(-1.0) == 0.0

    def test_array_input_keeps_shape(self):
        from lumen.preview import Tonemap

        result = Tonemap.gamma().apply(np.ones((2, 3, 3)))
        assert result.shape == (2, 3, 3)

    def test_scalar_input_returns_float(self):
        from lumen.preview import Tonemap

        assert isinstance(Tonemap.gamma().apply(0.5), float)


class TestTonemapParse:
    """Test the textual form of operators."""

    def test_parse_with_exponent(self):
        from lumen.preview import Tonemap

        assert Tonemap.parse("gamma:1.8") == Tonemap("gamma", 1.8)
        assert Tonemap.parse("reinhard:2.2") == Tonemap.reinhard(2.2)

    def test_parse_default_exponent(self):
        from lumen.preview import Tonemap

        assert Tonemap.parse("gamma") == Tonemap.gamma(2.2)

    def test_parse_ignores_case_and_whitespace(self):
        from lumen.preview import Tonemap

        assert Tonemap.parse("  Filmic ") == Tonemap.filmic()

    @pytest.mark.parametrize("text", ["sepia", "gamma:abc", "gamma:0", "reinhard:-1"])
    def test_parse_invalid_raises(self, text):
        from lumen.preview import Tonemap

        with pytest.raises(ValueError):
            Tonemap.parse(text)

    @pytest.mark.parametrize("text", ["linear", "filmic", "gamma:2.2", "reinhard:1.8"])
    def test_str_round_trip(self, text):
        from lumen.preview import Tonemap

        assert str(Tonemap.parse(text)) == text

    def test_as_tonemap(self):
        from lumen.preview import Tonemap, as_tonemap

        op = Tonemap.reinhard()
        assert as_tonemap(op) is op
        assert as_tonemap("linear") == Tonemap.linear()


class TestProcessImageForDisplay:
    """Test the exposure and tone mapping pipeline."""

    def test_output_is_float32_in_unit_range(self):
        from lumen.preview import process_image_for_display

        image = np.random.default_rng(0).uniform(-1.0, 10.0, (4, 4, 3)).astype(np.float32)
        result = process_image_for_display(image, "linear")

        assert result.dtype == np.float32
        assert result.min() >= 0.0
        assert result.max() <= 1.0

    def test_exposure_scales_before_tone_mapping(self):
        from lumen.preview import process_image_for_display

        image = np.full((1, 1, 3), 0.125, dtype=np.float32)
        result = process_image_for_display(image, "gamma:2.0", exposure=2.0)

        np.testing.assert_allclose(result, 0.5)

    def test_exposure_preserves_black(self):
        from lumen.preview import process_image_for_display

        result = process_image_for_display(np.zeros((2, 2, 3), dtype=np.float32), "reinhard", exposure=8.0)
        assert not np.any(result)

    def test_invalid_tonemap_raises(self):
        from lumen.preview import process_image_for_display

        with pytest.raises(ValueError, match="Unknown tone mapping"):
            process_image_for_display(np.zeros((1, 1, 3), dtype=np.float32), "invalid")


class TestExport:
    """Test conversion to 8 bits and PNG files."""

    def test_image_to_uint8_black_and_white(self):
        from lumen.preview import image_to_uint8

        image = np.zeros((1, 2, 3), dtype=np.float32)
        image[0, 1] = 1.0
        result = image_to_uint8(image, tonemap="linear")

        assert result.dtype == np.uint8
        np.testing.assert_array_equal(result[0, 0], [0, 0, 0])
        np.testing.assert_array_equal(result[0, 1], [255, 255, 255])

    def test_image_to_uint8_rounds(self):
        from lumen.preview import image_to_uint8

        result = image_to_uint8(np.full((1, 1, 3), 0.5, dtype=np.float32), tonemap="linear")
        np.testing.assert_array_equal(result[0, 0], [128, 128, 128])

    def test_save_png_from_array(self, tmp_path):
        from PIL import Image

        from lumen.preview import save_png_from_array

        image = np.zeros((3, 5, 3), dtype=np.float32)
        image[0, 0] = (1.0, 0.0, 0.0)
        path = tmp_path / "out.png"
        save_png_from_array(image, path, tonemap="linear")

        with Image.open(path) as saved:
            assert saved.size == (5, 3)
            assert saved.mode == "RGB"
            assert saved.getpixel((0, 0)) == (255, 0, 0)
            assert saved.getpixel((4, 2)) == (0, 0, 0)

    def test_save_png_from_renderer(self, emitter_scene, tmp_path):
        from lumen.camera import PinholeCamera
        from lumen.core.integrator import DebugRenderer
        from lumen.core.progressive import ProgressiveRenderer
        from lumen.preview import save_png

        camera = PinholeCamera((0.0, 0.0, 5.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), 40.0, 1.0)
        renderer = ProgressiveRenderer(emitter_scene, camera, DebugRenderer(), 6, 6)
        renderer.render(1)

        path = tmp_path / "debug.png"
        save_png(renderer, path)
        assert path.exists()

    def test_rmse(self):
        from lumen.preview import compute_rmse

        a = np.zeros((2, 2, 3), dtype=np.float32)
        assert compute_rmse(a, a) == 0.0
        assert compute_rmse(a, np.ones_like(a)) == pytest.approx(1.0)

    def test_rmse_shape_mismatch_raises(self):
        from lumen.preview import compute_rmse

        with pytest.raises(ValueError, match="shapes must match"):
            compute_rmse(np.zeros((2, 2, 3)), np.zeros((2, 3, 3)))


class TestMatplotlibPreview:
    """Test the Matplotlib figures without opening windows."""

    @pytest.fixture(autouse=True)
    def headless(self, monkeypatch):
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        shown = []
        monkeypatch.setattr(plt, "show", lambda block=True: shown.append(block))
        yield shown
        plt.close("all")

    def test_show_preview_title(self, emitter_scene, headless):
        import matplotlib.pyplot as plt

        from lumen.camera import PinholeCamera
        from lumen.core.integrator import DebugRenderer
        from lumen.core.progressive import ProgressiveRenderer
        from lumen.preview import show_preview

        camera = PinholeCamera((0.0, 0.0, 5.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), 40.0, 1.0)
        renderer = ProgressiveRenderer(emitter_scene, camera, DebugRenderer(), 4, 4)
        renderer.render(2)

        show_preview(renderer, tonemap="reinhard:2.2", block=False)

        assert headless == [False]
        title = plt.gcf().axes[0].get_title()
        assert "2 passes" in title
        assert "reinhard:2.2" in title

    def test_show_comparison_returns_rmse(self, headless):
        from lumen.preview import show_comparison

        a = np.zeros((4, 4, 3), dtype=np.float32)
        b = np.ones((4, 4, 3), dtype=np.float32)

        rmse = show_comparison(a, b, tonemap="linear", block=False)

        assert rmse == pytest.approx(1.0)
        assert headless == [False]
