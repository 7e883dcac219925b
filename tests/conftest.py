import itertools

import numpy as np
import pytest


class FakeGL:
    """Records gl* calls; GL_* constants are distinct bit flags."""

    def __init__(self):
        self.calls = []
        self.returns = {}
        self._constants = {}

    def __getattr__(self, name):
        if name.startswith("GL_"):
            if name not in self._constants:
                self._constants[name] = 1 << len(self._constants)
            return self._constants[name]
        if not name.startswith("gl"):
            raise AttributeError(name)

        def call(*args):
            self.calls.append((name, args))
            value = self.returns.get(name)
            return value(*args) if callable(value) else value

        return call

    def names(self):
        return [name for name, _ in self.calls]

    def calls_to(self, name):
        return [args for n, args in self.calls if n == name]


UNIFORMS = {
    "color": 1,
    "ModelViewProjectionMatrix": 2,
    "normalMatrix": 3,
    "lightPosition": 4,
}


@pytest.fixture
def fake_gl(monkeypatch):
    """Patch every GL-touching module with a FakeGL driver that accepts everything."""
    pytest.importorskip("OpenGL.GL")
    from kiss_surface import session
    from kiss_surface.gameobjects import mesh
    from kiss_surface.rendering import renderer, shader

    gl = FakeGL()
    handles = itertools.count(1)
    gl.returns.update(
        glCreateShader=lambda shader_type: next(handles),
        glCreateProgram=lambda: 100,
        glGenBuffers=lambda n: 7,
        glGenVertexArrays=lambda n: 8,
        glGetShaderiv=lambda shader, pname: 1,
        glGetProgramiv=lambda program, pname: 1,
        glGetShaderInfoLog=lambda shader: b"",
        glGetProgramInfoLog=lambda program: b"",
        glGetAttribLocation=lambda program, name: 0 if name == "vertex" else -1,
        glGetUniformLocation=lambda program, name: UNIFORMS.get(name, -1),
    )
    for module in (session, mesh, renderer, shader):
        monkeypatch.setattr(module, "GL", gl)
    return gl


class FixedRotator:
    def __init__(self, view):
        self.view = np.asarray(view, dtype=np.float32)
        self.reads = 0

    def get_view_matrix(self):
        self.reads += 1
        return self.view.copy()


@pytest.fixture
def generic_view():
    # no symmetry, so reordering any product changes the result
    return np.array(
        [
            [0.8, -0.36, 0.48, 0.1],
            [0.6, 0.48, -0.64, -0.2],
            [0.0, 0.8, 0.6, 0.3],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float32,
    )


@pytest.fixture
def rotator(generic_view):
    return FixedRotator(generic_view)


@pytest.fixture
def uniforms():
    return dict(UNIFORMS)
