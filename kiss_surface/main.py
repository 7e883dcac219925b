import logging

import pygame
from OpenGL import GL
from OpenGL.error import Error as OpenGLError

from .config import load_settings
from .errors import ContextAcquisitionError, KissSurfaceError
from .gameobjects.trackball import TrackballRotator
from .input import LightInputHandler, LightPositionInput, PointerDragHandler
from .rendering.shader import SHADER_DIR, load_shader
from .session import RenderSession

logger = logging.getLogger(__name__)

CONTEXT_MESSAGE = "Sorry, could not get a graphics context."
INIT_MESSAGE = "Sorry, could not initialize the graphics context: {}"

REDRAW_EVENTS = {pygame.VIDEOEXPOSE, pygame.WINDOWEXPOSED}

# ====================
# Pygame / OpenGL init
# ====================


def acquire_context(width: int, height: int, title: str):
    """
    Open the window with an OpenGL 3.3 core context.

    :return: The pygame display surface
    :raises ContextAcquisitionError: If no context can be created
    """
    try:
        pygame.init()
        pygame.display.set_caption(title)

        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MAJOR_VERSION, 3)
        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MINOR_VERSION, 3)
        pygame.display.gl_set_attribute(
            pygame.GL_CONTEXT_PROFILE_MASK, pygame.GL_CONTEXT_PROFILE_CORE
        )

        surface = pygame.display.set_mode((width, height), pygame.OPENGL | pygame.DOUBLEBUF)
        version = GL.glGetString(GL.GL_VERSION)
    except (pygame.error, OpenGLError) as e:
        raise ContextAcquisitionError(str(e)) from e

    if not version:
        raise ContextAcquisitionError("OpenGL did not report a version")

    logger.info("OpenGL: %s", version.decode())
    GL.glViewport(0, 0, width, height)
    return surface


def run(session: RenderSession, light_input: LightPositionInput, title: str) -> None:
    """Redraw on drags, light edits and exposes until the window closes."""
    drag_handler = PointerDragHandler(session)
    light_handler = LightInputHandler(session, light_input)

    def show_fields():
        pygame.display.set_caption(f"{title}  light: {light_input.caption()}")

    show_fields()
    session.render()
    pygame.display.flip()

    running = True
    while running:
        needs_redraw = False
        for e in [pygame.event.wait()] + pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
            elif e.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION):
                needs_redraw |= drag_handler.on_event(e)
            elif e.type == pygame.KEYDOWN:
                if e.key == pygame.K_ESCAPE:
                    running = False
                else:
                    needs_redraw |= light_handler.on_key(e)
                    show_fields()
            elif e.type in REDRAW_EVENTS:
                needs_redraw = True

        if running and needs_redraw:
            session.render()
            pygame.display.flip()


def main(settings_path=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = load_settings(settings_path)
        vertex_source = load_shader(SHADER_DIR / "surface.vert")
        fragment_source = load_shader(SHADER_DIR / "surface.frag")
    except (OSError, ValueError) as e:
        print(INIT_MESSAGE.format(e))
        return 1

    try:
        acquire_context(settings.width, settings.height, settings.title)
    except ContextAcquisitionError:
        logger.error("Context acquisition failed", exc_info=True)
        print(CONTEXT_MESSAGE)
        pygame.quit()
        return 1

    light_input = LightPositionInput(settings.light_position)
    session = RenderSession(
        context=pygame.display.get_surface(),
        rotator=TrackballRotator(settings.width, settings.height),
        light_position=light_input.value,
        color=settings.color,
        u_step=settings.u_step,
        z_scale=settings.z_scale,
    )

    try:
        session.initialize(vertex_source, fragment_source)
    except (KissSurfaceError, OpenGLError, ValueError) as e:
        print(INIT_MESSAGE.format(e))
        pygame.quit()
        return 1

    try:
        run(session, light_input, settings.title)
    finally:
        pygame.quit()
    return 0
