class KissSurfaceError(Exception):
    """Base class for every error raised by the viewer."""


class ContextAcquisitionError(KissSurfaceError):
    """No OpenGL context could be created for the window."""


class ShaderCompileError(KissSurfaceError):
    def __init__(self, stage: str, diagnostic: str):
        """
        :param stage: "vertex" or "fragment"
        :param diagnostic: The info log reported by the driver
        """
        super().__init__(f"Error in {stage} shader: {diagnostic}")
        self.stage = stage
        self.diagnostic = diagnostic


class LinkError(KissSurfaceError):
    def __init__(self, diagnostic: str):
        super().__init__(f"Link error in program: {diagnostic}")
        self.diagnostic = diagnostic


class MalformedMeshError(KissSurfaceError):
    """Vertex data that cannot be drawn (bad length, NaN, radicand < 0)."""


class SessionStateError(KissSurfaceError):
    """A session operation was called in the wrong lifecycle state."""
