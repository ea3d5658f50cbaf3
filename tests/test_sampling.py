import numpy as np

from folio_core.services.sampling import BoxMullerSampler


class _ScriptedRng:
    """Hands out preset uniforms so the zero re-draw path is exercised."""

    def __init__(self, batches):
        self.batches = [np.array(b, dtype=float) for b in batches]

    def random(self, n):
        batch = self.batches.pop(0)
        assert len(batch) == n
        return batch


def test_moments_close_to_standard_normal():
    z = BoxMullerSampler(np.random.default_rng(123)).standard_normal(200_000)
    assert abs(z.mean()) < 0.01
    assert abs(z.std() - 1.0) < 0.01


def test_paired_mode_matches_moments_and_shape():
    z = BoxMullerSampler(np.random.default_rng(321), paired=True).standard_normal((1001, 3))
    assert z.shape == (1001, 3)
    assert abs(z.mean()) < 0.05
    assert abs(z.std() - 1.0) < 0.05


def test_zero_uniforms_are_redrawn():
    rng = _ScriptedRng([[0.0, 0.5], [0.25], [0.5, 0.5]])
    z = BoxMullerSampler(rng).standard_normal(2)
    assert np.isfinite(z).all()
    # u = [0.25, 0.5], v = [0.5, 0.5] -> cos(pi) = -1
    expected = -np.sqrt(-2.0 * np.log(np.array([0.25, 0.5])))
    assert np.allclose(z, expected)


def test_empty_size():
    assert BoxMullerSampler(np.random.default_rng(0)).standard_normal((0, 2)).shape == (0, 2)
