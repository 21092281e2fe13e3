__title__ = 'pennant'
__license__ = 'MIT'
__version__ = "1.0.0"

import logging

from .faults import *
from .flags import *
from .parsing import *
from .usage import *
from .utils import stringify, Unset

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
))

version_info = VersionInfo(1, 0, 0, "final", 0)

# Library logging stays silent unless the host configures a handler.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info",
    "stringify",
    "Unset",
)

# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the flags
__all__ += flags.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parsing layer
__all__ += parsing.__all__  # type: ignore[attr-defined]
# Load the exposed API of the usage renderer
__all__ += usage.__all__  # type: ignore[attr-defined]
