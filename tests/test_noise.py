"""Tests for the seeded noise field and its compositions."""

import numpy as np
import pytest

from orrery.core.noise import (
    Composition,
    FieldSpec,
    NoiseField,
    SampleFrequencyStack,
    build_permutation,
)


@pytest.fixture
def grid():
    """A 3D cloud of sample points spanning several lattice cells."""
    rng = np.random.default_rng(3)
    return rng.uniform(-20.0, 20.0, size=(3, 2000))


class TestPermutation:
    """Tests for the seeded permutation table."""

    def test_is_permutation_repeated_twice(self):
        perm = build_permutation(12345)
        assert perm.shape == (512,)
        assert sorted(perm[:256].tolist()) == list(range(256))
        assert np.array_equal(perm[:256], perm[256:])

    def test_seed_zero_is_shuffled(self):
        perm = build_permutation(0)
        assert not np.array_equal(perm[:256], np.arange(256))

    def test_deterministic_per_seed(self):
        assert np.array_equal(build_permutation(42), build_permutation(42))
        assert not np.array_equal(build_permutation(42), build_permutation(43))

    def test_read_only(self):
        perm = build_permutation(1)
        with pytest.raises(ValueError):
            perm[0] = 5


class TestNoiseField:
    """Tests for raw noise and fractal compositions."""

    def test_noise_bounded(self, grid):
        field = NoiseField(99)
        values = field.noise(*grid)
        assert values.shape == (2000,)
        assert np.all(values >= -1.0)
        assert np.all(values <= 1.0)

    def test_noise_zero_on_lattice(self):
        field = NoiseField(5)
        assert field.noise(3.0, -2.0, 7.0) == pytest.approx(0.0)

    def test_scalar_in_scalar_out(self):
        value = NoiseField(1).noise(0.3, 0.7, 1.1)
        assert isinstance(value, float)

    def test_same_seed_same_values(self, grid):
        a = NoiseField(2024).fbm(*grid, octaves=5)
        b = NoiseField(2024).fbm(*grid, octaves=5)
        assert np.array_equal(a, b)

    def test_different_seed_different_values(self, grid):
        a = NoiseField(1).noise(*grid)
        b = NoiseField(2).noise(*grid)
        assert not np.allclose(a, b)

    def test_fbm_bounded(self, grid):
        values = NoiseField(8).fbm(*grid, octaves=6)
        assert np.all(np.abs(values) <= 1.0)

    def test_turbulence_and_ridged_non_negative(self, grid):
        field = NoiseField(8)
        assert np.all(field.turbulence(*grid, octaves=4) >= 0.0)
        assert np.all(field.ridged(*grid, octaves=4) >= 0.0)

    def test_compositions_with_constant_noise(self, constant_noise):
        field = constant_noise(0.5)
        amplitude_sum = 1.0 + 0.5 + 0.25
        assert field.fbm(1.0, 2.0, 3.0, 3) == pytest.approx(0.5)
        assert field.turbulence(1.0, 2.0, 3.0, 3) == pytest.approx(0.5 * amplitude_sum)
        assert field.ridged(1.0, 2.0, 3.0, 3) == pytest.approx(0.25 * amplitude_sum)

    def test_rejects_zero_octaves(self):
        with pytest.raises(ValueError):
            NoiseField(0).fbm(0.1, 0.2, 0.3, 0)

    def test_sample_dispatch(self, grid):
        field = NoiseField(4)
        assert np.array_equal(field.sample("ridged", *grid, 3), field.ridged(*grid, octaves=3))
        assert np.array_equal(
            field.sample(Composition.TURBULENCE, *grid, 2), field.turbulence(*grid, octaves=2)
        )


class TestSampleFrequencyStack:
    """Tests for named field stacks."""

    def test_samples_every_field(self):
        stack = SampleFrequencyStack([
            FieldSpec("a", 1.0, 2),
            FieldSpec("b", (2.0, 0.5, 2.0), 3, Composition.RIDGED),
        ])
        x = np.linspace(0.0, 4.0, 10)
        out = stack.sample(NoiseField(3), x, x * 0.5, x * 0.25)
        assert set(out) == {"a", "b"}
        assert out["a"].shape == (10,)
        assert stack.names == ("a", "b")

    def test_offset_decorrelates(self):
        x = np.linspace(0.1, 9.3, 50)
        field = NoiseField(11)
        plain = FieldSpec("p", 1.0, 3).evaluate(field, x, x, x)
        shifted = FieldSpec("s", 1.0, 3, offset=500.0).evaluate(field, x, x, x)
        assert not np.allclose(plain, shifted)

    def test_drift_moves_with_spin(self):
        x = np.linspace(0.1, 9.3, 50)
        field = NoiseField(11)
        spec = FieldSpec("cloud", 1.0, 3, drift=2.0)
        assert not np.allclose(spec.evaluate(field, x, x, x, 0.0), spec.evaluate(field, x, x, x, 1.0))

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            SampleFrequencyStack([FieldSpec("a", 1.0, 2), FieldSpec("a", 2.0, 2)])
