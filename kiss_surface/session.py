# session.py
import logging
from enum import Enum

from OpenGL import GL

from .errors import SessionStateError
from .gameobjects.mesh import Model
from .gameobjects.surface import DEFAULT_U_STEP, DEFAULT_Z_SCALE, generate_surface
from .rendering.renderer import FrameTransforms, render_frame
from .rendering.shader import ShaderProgram, build_program

logger = logging.getLogger(__name__)


class SessionState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    RENDERING = "rendering"
    FAILED = "failed"


class RenderSession:
    """
    Owns everything a frame needs: the context, the shader program, the
    surface model and the rotator, plus the current light position.
    """

    def __init__(
        self,
        context,
        rotator,
        light_position=(0.0, 0.0, 0.0),
        color=(1.0, 1.0, 1.0, 1.0),
        u_step: float = DEFAULT_U_STEP,
        z_scale: int = DEFAULT_Z_SCALE,
    ):
        """
        :param context: The window/context object the GL calls go to
        :param rotator: Object exposing ``get_view_matrix()``
        :param light_position: Initial point light position
        :param color: Surface RGBA color
        :param u_step: Angular mesh step in degrees
        :param z_scale: Mesh z resolution
        """
        self.context = context
        self.rotator = rotator
        self.light_position = tuple(float(v) for v in light_position)
        self.color = tuple(color)
        self.u_step = u_step
        self.z_scale = z_scale

        self.program: ShaderProgram | None = None
        self.model: Model | None = None
        self.state = SessionState.UNINITIALIZED

    def initialize(self, vertex_source: str, fragment_source: str) -> None:
        """
        Build the program, generate the surface and upload it.

        Any failure leaves the session in FAILED for good and is re-raised.

        :raises SessionStateError: If called more than once
        """
        if self.state is not SessionState.UNINITIALIZED:
            raise SessionStateError(f"Cannot initialize a session in state {self.state.value}")

        try:
            self.program = ShaderProgram("Basic", build_program(vertex_source, fragment_source))
            self.program.activate()

            self.model = Model("Surface")
            self.model.upload(generate_surface(self.u_step, self.z_scale))

            GL.glEnable(GL.GL_DEPTH_TEST)
        except Exception:
            self.state = SessionState.FAILED
            logger.error("Session initialization failed", exc_info=True)
            raise

        self.state = SessionState.INITIALIZED
        logger.info("Surface ready: %d vertices", self.model.count)

    def render(self) -> FrameTransforms:
        if self.state not in (SessionState.INITIALIZED, SessionState.RENDERING):
            raise SessionStateError(f"Cannot render a session in state {self.state.value}")
        self.state = SessionState.RENDERING
        return render_frame(self, self.light_position)

    def set_light_position(self, position) -> None:
        self.light_position = tuple(float(v) for v in position)
