import logging
from pathlib import Path
from typing import Optional

import numpy as np
from OpenGL import GL

from ..errors import LinkError, ShaderCompileError

logger = logging.getLogger(__name__)

SHADER_DIR = Path(__file__).resolve().parent / "shader"

# =========================
# Shader Utils
# =========================


def load_shader(path) -> str:
    """
    Read a GLSL source file.

    :param path: Path to the shader file
    :return: The source code of the shader as a string
    :rtype: str
    """
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _info_log(log) -> str:
    if isinstance(log, bytes):
        log = log.decode(errors="replace")
    return (log or "").strip()


def compile_shader(source: str, shader_type, stage: str) -> int:
    """Compile a GLSL shader from source and return the handle.

    :param source: The shader source code as a single string.
    :param shader_type: GL.GL_VERTEX_SHADER or GL.GL_FRAGMENT_SHADER.
    :param stage: "vertex" or "fragment", reported on failure.
    :raises ShaderCompileError: On compilation failure.
    """
    shader = GL.glCreateShader(shader_type)
    GL.glShaderSource(shader, source)
    GL.glCompileShader(shader)
    if not GL.glGetShaderiv(shader, GL.GL_COMPILE_STATUS):
        info = _info_log(GL.glGetShaderInfoLog(shader))
        raise ShaderCompileError(stage, info or "(driver reported no diagnostic)")
    return shader


def build_program(vertex_source: str, fragment_source: str) -> int:
    """Compile both stages and link them into a program.

    The returned program is linked but not in use.

    :param vertex_source: Vertex shader source code.
    :param fragment_source: Fragment shader source code.
    :return: OpenGL program handle.
    :raises ShaderCompileError: If either stage fails to compile.
    :raises LinkError: On linking failure.
    """
    vs = compile_shader(vertex_source, GL.GL_VERTEX_SHADER, "vertex")
    fs = compile_shader(fragment_source, GL.GL_FRAGMENT_SHADER, "fragment")

    program = GL.glCreateProgram()
    GL.glAttachShader(program, vs)
    GL.glAttachShader(program, fs)
    GL.glLinkProgram(program)
    if not GL.glGetProgramiv(program, GL.GL_LINK_STATUS):
        info = _info_log(GL.glGetProgramInfoLog(program))
        raise LinkError(info or "(driver reported no diagnostic)")

    # Shaders stay attached; they are freed together with the program
    GL.glDeleteShader(vs)
    GL.glDeleteShader(fs)
    return program


# =========================
# Shader Program
# =========================

VERTEX_ATTRIBUTE = "vertex"
COLOR_UNIFORM = "color"
MVP_UNIFORM = "ModelViewProjectionMatrix"
NORMAL_MATRIX_UNIFORM = "normalMatrix"
LIGHT_POSITION_UNIFORM = "lightPosition"


def _location(value) -> Optional[int]:
    # -1 means the name is unknown or was optimized out by the compiler
    value = int(value)
    return None if value < 0 else value


class ShaderProgram:
    """
    A linked program plus the locations of the surface shader inputs.

    Locations are looked up once. A name the driver does not know is
    stored as ``None`` and every setter skips it.
    """

    def __init__(self, name: str, program: int):
        self.name = name
        self.prog = program

        self.a_vertex = self._attribute(VERTEX_ATTRIBUTE)
        self.u_color = self._uniform(COLOR_UNIFORM)
        self.u_mvp = self._uniform(MVP_UNIFORM)
        self.u_normal_matrix = self._uniform(NORMAL_MATRIX_UNIFORM)
        self.u_light_position = self._uniform(LIGHT_POSITION_UNIFORM)

        missing = self.missing_locations()
        if missing:
            logger.warning("Program '%s' has no location for: %s", name, ", ".join(missing))

    def _attribute(self, name: str) -> Optional[int]:
        return _location(GL.glGetAttribLocation(self.prog, name))

    def _uniform(self, name: str) -> Optional[int]:
        return _location(GL.glGetUniformLocation(self.prog, name))

    def missing_locations(self) -> list[str]:
        locations = {
            VERTEX_ATTRIBUTE: self.a_vertex,
            COLOR_UNIFORM: self.u_color,
            MVP_UNIFORM: self.u_mvp,
            NORMAL_MATRIX_UNIFORM: self.u_normal_matrix,
            LIGHT_POSITION_UNIFORM: self.u_light_position,
        }
        return [name for name, location in locations.items() if location is None]

    def activate(self) -> None:
        GL.glUseProgram(self.prog)

    def set_matrix4(self, location: Optional[int], matrix) -> None:
        if location is None:
            return
        m = np.ascontiguousarray(matrix, dtype=np.float32)
        GL.glUniformMatrix4fv(location, 1, GL.GL_TRUE, m)

    def set_vec3(self, location: Optional[int], value) -> None:
        if location is None:
            return
        x, y, z = (float(v) for v in value)
        GL.glUniform3f(location, x, y, z)

    def set_vec4(self, location: Optional[int], value) -> None:
        if location is None:
            return
        x, y, z, w = (float(v) for v in value)
        GL.glUniform4f(location, x, y, z, w)
