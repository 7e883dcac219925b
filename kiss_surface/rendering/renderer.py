import math
from dataclasses import dataclass

import numpy as np
from OpenGL import GL

from ..gameobjects.transform import (
    axis_rotation,
    inverse,
    multiply,
    perspective,
    translation,
    transpose,
)

# =========================
# Camera constants
# =========================

# Narrow frustum framing the unit-sized surface pushed to z = -10
FOV = math.pi / 8
ASPECT = 1.0
NEAR = 8.0
FAR = 12.0

ROTATE_AXIS = (0.707, 0.707, 0.0)
ROTATE_ANGLE = 0.7
TRANSLATE = (0.0, 0.0, -10.0)

CLEAR_COLOR = (0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class FrameTransforms:
    projection: np.ndarray
    view: np.ndarray
    rotate: np.ndarray
    translate: np.ndarray
    model: np.ndarray
    mvp: np.ndarray
    normal_matrix: np.ndarray


def compose_transforms(view: np.ndarray) -> FrameTransforms:
    """
    Build every matrix a frame needs from the current view matrix.

    model = translate * rotate * view, mvp = projection * model and the
    normal matrix is the inverse transpose of model.
    """
    projection = perspective(FOV, ASPECT, NEAR, FAR)
    rotate = axis_rotation(ROTATE_AXIS, ROTATE_ANGLE)
    translate = translation(*TRANSLATE)

    model = multiply(translate, multiply(rotate, view))
    mvp = multiply(projection, model)
    normal_matrix = transpose(inverse(model))

    return FrameTransforms(
        projection=projection,
        view=np.asarray(view, dtype=np.float32),
        rotate=rotate,
        translate=translate,
        model=model,
        mvp=mvp,
        normal_matrix=normal_matrix,
    )


def render_frame(session, light_position) -> FrameTransforms:
    """
    Redraw the surface once.

    :param session: The RenderSession owning program, model and rotator
    :param light_position: Point light position (x, y, z)
    :return: The matrices used for this frame
    :rtype: FrameTransforms
    """
    GL.glClearColor(*CLEAR_COLOR)
    GL.glClear(GL.GL_COLOR_BUFFER_BIT | GL.GL_DEPTH_BUFFER_BIT)

    frame = compose_transforms(session.rotator.get_view_matrix())

    program = session.program
    program.activate()
    program.set_matrix4(program.u_mvp, frame.mvp)
    program.set_matrix4(program.u_normal_matrix, frame.normal_matrix)
    program.set_vec3(program.u_light_position, light_position)
    program.set_vec4(program.u_color, session.color)

    session.model.draw(program)
    return frame
