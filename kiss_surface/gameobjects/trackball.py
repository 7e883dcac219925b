import math

import numpy as np

from .transform import axis_rotation, identity, translation


class TrackballRotator:
    """
    Virtual trackball: pointer drags rotate the view about the origin.

    The accumulated rotation is kept between drags; ``get_view_matrix``
    only reads it.
    """

    def __init__(self, width: int, height: int, view_distance: float = 0.0):
        """
        :param width: Width of the drawable in pixels
        :param height: Height of the drawable in pixels
        :param view_distance: Distance of the eye from the origin along +z
        """
        self.width = width
        self.height = height
        self.view_distance = view_distance
        self.rotation = identity()
        self._anchor: np.ndarray | None = None

    def _project(self, x: float, y: float) -> np.ndarray:
        # window pixels -> point on the unit sphere (rim for points outside it)
        size = min(self.width, self.height) or 1
        px = (2.0 * x - self.width) / size
        py = (self.height - 2.0 * y) / size
        d2 = px * px + py * py
        if d2 > 1.0:
            d = math.sqrt(d2)
            return np.array([px / d, py / d, 0.0])
        return np.array([px, py, math.sqrt(1.0 - d2)])

    @property
    def dragging(self) -> bool:
        return self._anchor is not None

    def begin_drag(self, x: float, y: float) -> None:
        self._anchor = self._project(x, y)

    def drag_to(self, x: float, y: float) -> bool:
        """
        Rotate by the arc between the last pointer position and (x, y).

        :return: True if the view matrix changed
        """
        if self._anchor is None:
            return False

        target = self._project(x, y)
        axis = np.cross(self._anchor, target)
        if np.linalg.norm(axis) < 1e-9:
            return False

        angle = math.acos(max(-1.0, min(1.0, float(np.dot(self._anchor, target)))))
        self.rotation = (axis_rotation(axis, angle) @ self.rotation).astype(np.float32)
        self._anchor = target
        return True

    def end_drag(self) -> None:
        self._anchor = None

    def get_view_matrix(self) -> np.ndarray:
        return (translation(0.0, 0.0, -self.view_distance) @ self.rotation).astype(np.float32)
