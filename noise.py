"""Pure noise and wave helpers used by the shape generators.

Every function here is deterministic: the same arguments always give the
same result.  Arguments may be plain floats or numpy arrays (the functions
broadcast), so a whole ring of vertices is evaluated in one call.
"""

import numpy as np

# Sum of the term weights in smooth_noise()
NOISE_PEAK = 0.5 + 0.3 + 0.2 + 0.15 + 0.1

# Octave weights of blob_noise(): n1 + n2/2 + n3/4
_OCTAVE_WEIGHTS = (1.0, 0.5, 0.25)
BLOB_NOISE_PEAK = NOISE_PEAK * sum(_OCTAVE_WEIGHTS)

# Blob deformation strength and time multiplier ("thinking" speed)
DEFORM_AMOUNT = 0.12
SPEED_MULT = 2.5

# Attenuation: (K / (K + u^K))^K with u spanning [-GRAPH_X, GRAPH_X]
ATT_FACTOR = 4
GRAPH_X = 2.0


def smooth_noise(angle, t, freq, speed):
    """Layered sinusoids sampled on a circle of radius *freq*.

    The five terms use unrelated frequencies and phases so the sum never
    looks periodic along the ring.  Output lies in [-NOISE_PEAK, NOISE_PEAK].
    """
    x = np.cos(angle) * freq
    y = np.sin(angle) * freq
    z = t * speed

    val = np.sin(x * 1.2 + z) * 0.5
    val = val + np.sin(y * 0.8 - z * 1.3) * 0.3
    val = val + np.sin((x + y) * 0.6 + z * 0.7) * 0.2
    val = val + np.sin(x * 2.1 - y * 1.7 + z * 1.1) * 0.15
    val = val + np.cos(y * 2.5 + z * 0.9) * 0.1
    return val


def blob_noise(angle, t, layer: int):
    """Three octaves of smooth_noise() for one blob layer (undeformed)."""
    n1 = smooth_noise(angle, t, 1.0 + layer * 0.3, 0.4 * SPEED_MULT)
    n2 = smooth_noise(angle + 100, t, 2.0 + layer * 0.2, 0.6 * SPEED_MULT)
    n3 = smooth_noise(angle + 200, t, 3.5, 0.9 * SPEED_MULT)
    w1, w2, w3 = _OCTAVE_WEIGHTS
    return n1 * w1 + n2 * w2 + n3 * w3


def max_deformation(intensity: float) -> float:
    """Upper bound of |noise| applied to a blob radius at *intensity*."""
    return BLOB_NOISE_PEAK * DEFORM_AMOUNT * abs(intensity)


def attenuate(x, width):
    """Symmetric bump: 1 at width/2, about 0.0016 at both edges.

    Returns 0 everywhere when *width* is not positive.
    """
    if width <= 0:
        return np.zeros_like(np.asarray(x, dtype=float)) if np.ndim(x) else 0.0
    u = np.abs(GRAPH_X * (2.0 * np.asarray(x, dtype=float) / width - 1.0))
    k = ATT_FACTOR
    att = (k / (k + u ** k)) ** k
    return att if np.ndim(att) else float(att)
