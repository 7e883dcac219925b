import math

import numpy as np

from ..errors import MalformedMeshError

DEFAULT_U_STEP = 0.5    # degrees
DEFAULT_Z_SCALE = 500   # z resolution: one step is 1 / z_scale


# Kiss Surface: r(z) = z^2 * sqrt(1 - z), revolved around the z axis.
# Vertex format: x, y, z (flat, two vertices per grid cell for TRIANGLE_STRIP)


def surface_radius(z) -> np.ndarray:
    """
    Radius of the surface at height ``z``.

    :param z: Scalar or array of heights in [-1, 1]
    :raises MalformedMeshError: If ``1 - z`` is negative for any input
    """
    z = np.asarray(z, dtype=np.float64)
    radicand = 1.0 - z
    if np.any(radicand < 0):
        raise MalformedMeshError(
            f"sqrt(1 - z) undefined for z = {float(np.max(z))}"
        )
    return z * z * np.sqrt(radicand)


def angular_steps(u_step: float) -> int:
    """Number of u values in [0, 360] for the given step."""
    return int(math.floor(360.0 / u_step + 1e-9)) + 1


def surface_size(u_step: float = DEFAULT_U_STEP, z_scale: int = DEFAULT_Z_SCALE) -> int:
    """Number of scalars ``generate_surface`` returns for these parameters."""
    return angular_steps(u_step) * (2 * z_scale + 1) * 2 * 3


def _points(z: np.ndarray, u_deg: np.ndarray) -> np.ndarray:
    # z: (Z,), u_deg: (U, 1) -> (U, Z, 3)
    r = surface_radius(z)
    u = np.radians(u_deg)
    x = r * np.cos(u)
    y = r * np.sin(u)
    return np.stack([x, y, np.broadcast_to(z, x.shape)], axis=-1)


def generate_surface(u_step: float = DEFAULT_U_STEP, z_scale: int = DEFAULT_Z_SCALE) -> np.ndarray:
    """
    Create vertex data for the Kiss Surface.

    Walks u over [0, 360] (outer) and z0 over [-z_scale, z_scale] (inner).
    Every cell emits the vertex at (z, u) followed by the vertex one step
    further in both z and u, so the flat result is drawn as a single
    triangle strip. The order must not change.

    The second vertex of the last z step would lie above z = 1 where the
    radius is undefined; it is clamped onto the apex (z = 1, r = 0).

    :param u_step: Angular step in degrees
    :param z_scale: Number of z steps on each side of zero
    :return: Flat float32 array of x, y, z triples
    :rtype: np.ndarray
    :raises ValueError: On a non positive step or scale
    :raises MalformedMeshError: If the result is not a valid strip
    """
    if not math.isfinite(u_step) or u_step <= 0:
        raise ValueError(f"u_step must be positive, got {u_step}")
    if not math.isfinite(z_scale) or z_scale < 1 or int(z_scale) != z_scale:
        raise ValueError(f"z_scale must be a positive integer, got {z_scale}")
    z_scale = int(z_scale)

    u = (np.arange(angular_steps(u_step), dtype=np.float64) * u_step)[:, None]
    z0 = np.arange(-z_scale, z_scale + 1, dtype=np.float64)

    z = z0 / z_scale
    z_next = np.minimum((z0 + 1) / z_scale, 1.0)

    first = _points(z, u)
    second = _points(z_next, u + u_step)

    # (U, Z, 2, 3): A then B inside every cell
    vertices = np.stack([first, second], axis=2).reshape(-1).astype(np.float32)

    if vertices.size % 6 != 0:
        raise MalformedMeshError(f"Strip has {vertices.size} scalars, not a multiple of 6")
    if not np.all(np.isfinite(vertices)):
        raise MalformedMeshError("Surface contains non-finite coordinates")

    return vertices
