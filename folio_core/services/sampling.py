from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np

Shape = Union[int, Tuple[int, ...]]


class BoxMullerSampler:
    """Standard-normal variates via the Box-Muller transform.

    Uniforms come from a numpy ``Generator``; exact zeros are re-drawn so the
    log is always finite. By default only the cosine branch is used, so every
    variate costs two uniforms. With ``paired=True`` the sine companion is
    kept as well and the uniform cost halves.

    Example:
        >>> sampler = BoxMullerSampler(np.random.default_rng(7))
        >>> z = sampler.standard_normal((1000, 3))
        >>> z.shape
        (1000, 3)
    """

    def __init__(self, rng: Optional[np.random.Generator] = None, paired: bool = False):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.paired = paired

    def _nonzero_uniform(self, n: int) -> np.ndarray:
        u = self.rng.random(n)
        zeros = u == 0.0
        while zeros.any():
            u[zeros] = self.rng.random(int(zeros.sum()))
            zeros = u == 0.0
        return u

    def standard_normal(self, size: Shape) -> np.ndarray:
        shape = (size,) if isinstance(size, int) else tuple(size)
        n = int(np.prod(shape, dtype=np.int64))
        if n == 0:
            return np.zeros(shape)

        draws = (n + 1) // 2 if self.paired else n
        u = self._nonzero_uniform(draws)
        v = self._nonzero_uniform(draws)
        radius = np.sqrt(-2.0 * np.log(u))
        angle = 2.0 * np.pi * v

        if self.paired:
            z = np.concatenate([radius * np.cos(angle), radius * np.sin(angle)])[:n]
        else:
            z = radius * np.cos(angle)
        return z.reshape(shape)
