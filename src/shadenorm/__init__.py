"""shadenorm: shader source normalization and property extraction."""

__version__ = "0.3.0"

from shadenorm.analyzer import parse_shader  # noqa: E402
from shadenorm.config import ParseOptions  # noqa: E402
from shadenorm.models import Diagnostic, ParsedShader  # noqa: E402

__all__ = ["Diagnostic", "ParseOptions", "ParsedShader", "__version__", "parse_shader"]
