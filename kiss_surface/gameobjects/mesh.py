import logging

import numpy as np
from OpenGL import GL

from ..errors import MalformedMeshError

logger = logging.getLogger(__name__)

FLOATS_PER_VERTEX = 3


class Model:
    def __init__(self, name: str):
        """
        GPU vertex buffer holding a position-only triangle strip.

        :param name: Name used in log messages
        """
        self.name = name
        self.vao = GL.glGenVertexArrays(1)
        self.vbo = GL.glGenBuffers(1)
        self.vertices = np.zeros(0, dtype=np.float32)
        self.count = 0
        self._warned_no_attribute = False

    def upload(self, vertices) -> None:
        """
        Replace the buffer contents with ``vertices``.

        :param vertices: Flat sequence of x, y, z floats
        :raises MalformedMeshError: If the length is not a multiple of 3
        """
        data = np.ascontiguousarray(vertices, dtype=np.float32).reshape(-1)
        if data.size % FLOATS_PER_VERTEX != 0:
            raise MalformedMeshError(
                f"{self.name}: {data.size} floats is not a whole number of vertices"
            )

        GL.glBindBuffer(GL.GL_ARRAY_BUFFER, self.vbo)
        GL.glBufferData(GL.GL_ARRAY_BUFFER, data.nbytes, data, GL.GL_STREAM_DRAW)

        self.vertices = data
        self.count = data.size // FLOATS_PER_VERTEX
        logger.debug("%s uploaded: %d verts, %d bytes", self.name, self.count, data.nbytes)

    def draw(self, program) -> None:
        """
        Draw the buffer as a triangle strip. Uniforms are the caller's job.

        :param program: ShaderProgram whose vertex attribute receives positions
        """
        GL.glBindVertexArray(self.vao)
        GL.glBindBuffer(GL.GL_ARRAY_BUFFER, self.vbo)

        location = program.a_vertex
        if location is not None:
            GL.glVertexAttribPointer(location, FLOATS_PER_VERTEX, GL.GL_FLOAT, GL.GL_FALSE, 0, None)
            GL.glEnableVertexAttribArray(location)
        elif not self._warned_no_attribute:
            logger.warning("%s: program '%s' has no vertex attribute", self.name, program.name)
            self._warned_no_attribute = True

        GL.glDrawArrays(GL.GL_TRIANGLE_STRIP, 0, self.count)
        GL.glBindVertexArray(0)
