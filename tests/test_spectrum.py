"""Unit tests for the Radiance and Albedo color types."""

import numpy as np
import pytest

from lumen.core.spectrum import Albedo, Radiance


class TestRadiance:
    """Tests for Radiance arithmetic."""

    def test_none_is_black(self):
        assert Radiance.none() == Radiance(0.0, 0.0, 0.0)

    def test_constructors(self):
        assert Radiance.gray(2.0) == Radiance(2.0, 2.0, 2.0)
        assert Radiance.red(1.0) == Radiance(1.0, 0.0, 0.0)
        assert Radiance.green(1.0) == Radiance(0.0, 1.0, 0.0)
        assert Radiance.blue(1.0) == Radiance(0.0, 0.0, 1.0)

    def test_addition(self):
        assert Radiance(1.0, 2.0, 3.0) + Radiance(0.5, 0.5, 0.5) == Radiance(1.5, 2.5, 3.5)

    def test_scalar_multiplication_both_sides(self):
        assert Radiance(1.0, 2.0, 3.0) * 2.0 == Radiance(2.0, 4.0, 6.0)
        assert 2.0 * Radiance(1.0, 2.0, 3.0) == Radiance(2.0, 4.0, 6.0)

    def test_division(self):
        assert Radiance(2.0, 4.0, 8.0) / 2.0 == Radiance(1.0, 2.0, 4.0)

    def test_filtered_by_albedo(self):
        """Radiance times Albedo multiplies per channel and stays Radiance."""
        result = Radiance(2.0, 2.0, 2.0) * Albedo(0.5, 0.25, 0.0)

        assert isinstance(result, Radiance)
        assert result == Radiance(1.0, 0.5, 0.0)

    def test_luma_weights(self):
        """Luma uses the NTSC weights 0.21, 0.72 and 0.07."""
        assert Radiance.red(1.0).luma() == pytest.approx(0.21)
        assert Radiance.green(1.0).luma() == pytest.approx(0.72)
        assert Radiance.blue(1.0).luma() == pytest.approx(0.07)
        assert Radiance.gray(1.0).luma() == pytest.approx(1.0)

    def test_radiance_and_albedo_do_not_add(self):
        with pytest.raises(TypeError):
            Radiance(1.0, 1.0, 1.0) + Albedo(1.0, 1.0, 1.0)

    def test_radiance_times_radiance_is_rejected(self):
        with pytest.raises(TypeError):
            Radiance(1.0, 1.0, 1.0) * Radiance(1.0, 1.0, 1.0)

    def test_to_numpy(self):
        array = Radiance(1.0, 2.0, 3.0).to_numpy()

        assert array.dtype == np.float32
        np.testing.assert_array_equal(array, [1.0, 2.0, 3.0])


class TestAlbedo:
    """Tests for Albedo arithmetic."""

    def test_white_and_black(self):
        assert Albedo.white() == Albedo(1.0, 1.0, 1.0)
        assert Albedo.black() == Albedo(0.0, 0.0, 0.0)

    def test_albedo_times_albedo(self):
        result = Albedo(0.5, 0.5, 1.0) * Albedo(0.5, 1.0, 0.25)

        assert isinstance(result, Albedo)
        assert result == Albedo(0.25, 0.5, 0.25)

    def test_albedo_times_radiance_is_radiance(self):
        result = Albedo(0.5, 0.5, 0.5) * Radiance(2.0, 4.0, 8.0)

        assert isinstance(result, Radiance)
        assert result == Radiance(1.0, 2.0, 4.0)

    def test_addition_and_scaling(self):
        assert Albedo(0.25, 0.25, 0.25) + Albedo(0.25, 0.5, 0.75) == Albedo(0.5, 0.75, 1.0)
        assert 0.5 * Albedo.white() == Albedo.gray(0.5)

    def test_luma_factor(self):
        assert Albedo.white().luma_factor() == pytest.approx(1.0)
        assert Albedo.black().luma_factor() == 0.0
        assert Albedo(1.0, 0.0, 0.0).luma_factor() == pytest.approx(0.21)

    def test_from_sequence_and_iteration(self):
        albedo = Albedo.from_sequence((0.1, 0.2, 0.3))
        assert tuple(albedo) == (0.1, 0.2, 0.3)
