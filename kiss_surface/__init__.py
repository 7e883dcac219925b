from .errors import (
    ContextAcquisitionError,
    KissSurfaceError,
    LinkError,
    MalformedMeshError,
    SessionStateError,
    ShaderCompileError,
)

__version__ = "0.1.0"
