import numpy as np
import pytest

pytest.importorskip("OpenGL.GL")

from kiss_surface.errors import MalformedMeshError, SessionStateError, ShaderCompileError  # noqa: E402
from kiss_surface.gameobjects.surface import surface_size  # noqa: E402
from kiss_surface.session import RenderSession, SessionState  # noqa: E402


@pytest.fixture
def session(fake_gl, rotator):
    return RenderSession(
        context=object(),
        rotator=rotator,
        light_position=(1.0, 2.0, 3.0),
        color=(1.0, 1.0, 1.0, 1.0),
        u_step=30.0,
        z_scale=5,
    )


def test_initialize_builds_everything(session, fake_gl):
    assert session.state is SessionState.UNINITIALIZED

    session.initialize("vs", "fs")

    assert session.state is SessionState.INITIALIZED
    assert session.program.prog == 100
    assert session.model.count * 3 == surface_size(30.0, 5)
    assert fake_gl.calls_to("glUseProgram") == [(100,)]
    assert (fake_gl.GL_DEPTH_TEST,) in fake_gl.calls_to("glEnable")


def test_render_moves_to_rendering(session, fake_gl, uniforms):
    session.initialize("vs", "fs")
    fake_gl.calls.clear()

    frame = session.render()

    assert session.state is SessionState.RENDERING
    assert (uniforms["lightPosition"], 1.0, 2.0, 3.0) in fake_gl.calls_to("glUniform3f")
    assert fake_gl.calls_to("glDrawArrays") == [(fake_gl.GL_TRIANGLE_STRIP, 0, session.model.count)]
    np.testing.assert_array_equal(frame.view, session.rotator.view)

    session.render()
    assert session.state is SessionState.RENDERING


def test_render_before_initialize(session):
    with pytest.raises(SessionStateError):
        session.render()


def test_compile_failure_is_terminal(session, fake_gl):
    fake_gl.returns["glGetShaderiv"] = lambda shader, pname: 0
    fake_gl.returns["glGetShaderInfoLog"] = lambda shader: b"syntax error"

    with pytest.raises(ShaderCompileError):
        session.initialize("bad", "fs")

    assert session.state is SessionState.FAILED
    with pytest.raises(SessionStateError):
        session.initialize("vs", "fs")
    with pytest.raises(SessionStateError):
        session.render()


def test_mesh_failure_is_terminal(session, fake_gl, monkeypatch):
    from kiss_surface import session as session_module

    def broken_surface(u_step, z_scale):
        raise MalformedMeshError("NaN in surface")

    monkeypatch.setattr(session_module, "generate_surface", broken_surface)

    with pytest.raises(MalformedMeshError):
        session.initialize("vs", "fs")
    assert session.state is SessionState.FAILED
    assert "glBufferData" not in fake_gl.names()


def test_light_change_keeps_mesh_and_view(session, fake_gl):
    session.initialize("vs", "fs")
    vertices = session.model.vertices.copy()
    first = session.render()

    session.set_light_position((5, 6, 7))
    second = session.render()

    assert session.light_position == (5.0, 6.0, 7.0)
    np.testing.assert_array_equal(session.model.vertices, vertices)
    np.testing.assert_array_equal(first.view, second.view)
    assert len(fake_gl.calls_to("glBufferData")) == 1
