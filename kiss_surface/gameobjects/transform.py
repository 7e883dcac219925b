import math

import numpy as np

# Matrices are row-major numpy arrays for column vectors (v' = M @ v).
# Upload them with transpose=GL_TRUE.


def identity() -> np.ndarray:
    return np.identity(4, dtype=np.float32)


def perspective(fov: float, aspect: float, near: float, far: float) -> np.ndarray:
    """
    Build an OpenGL style perspective projection.

    :param fov: Vertical field of view in radians
    :param aspect: Width / height of the viewport
    :param near: Distance of the near clipping plane
    :param far: Distance of the far clipping plane
    :return: 4x4 projection matrix
    :rtype: np.ndarray
    """
    f = 1.0 / math.tan(fov / 2.0)

    proj = np.zeros((4, 4), dtype=np.float32)
    proj[0, 0] = f / aspect
    proj[1, 1] = f
    proj[2, 2] = (far + near) / (near - far)
    proj[2, 3] = (2 * far * near) / (near - far)
    proj[3, 2] = -1.0

    return proj


def translation(tx: float, ty: float, tz: float) -> np.ndarray:
    m = identity()
    m[:3, 3] = (tx, ty, tz)
    return m


def axis_rotation(axis, angle: float) -> np.ndarray:
    """
    Rotation of ``angle`` radians about ``axis`` (right handed).

    The axis does not need to be unit length; it is normalized here.

    :param axis: The rotation axis (x, y, z)
    :param angle: The angle in radians
    :return: 4x4 rotation matrix
    :rtype: np.ndarray
    """
    n = np.asarray(axis, dtype=np.float64)
    norm = np.linalg.norm(n)
    if norm == 0:
        raise ValueError("Rotation axis must not be the zero vector")
    x, y, z = n / norm

    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c

    m = identity()
    m[:3, :3] = [
        [t * x * x + c, t * x * y - s * z, t * x * z + s * y],
        [t * x * y + s * z, t * y * y + c, t * y * z - s * x],
        [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
    ]
    return m


def multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Return ``a @ b``: ``b`` is applied first."""
    return (np.asarray(a, dtype=np.float32) @ np.asarray(b, dtype=np.float32)).astype(np.float32)


def inverse(m: np.ndarray) -> np.ndarray:
    return np.linalg.inv(np.asarray(m, dtype=np.float64)).astype(np.float32)


def transpose(m: np.ndarray) -> np.ndarray:
    return np.ascontiguousarray(np.asarray(m, dtype=np.float32).T)
