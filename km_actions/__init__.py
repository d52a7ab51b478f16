"""Build Keyboard Maestro actions and conditions as plist XML, run them and validate round trips."""

from .actions import (
    ACTION_FACTORIES,
    ActionSequence,
    DictAction,
    VirtualAction,
    build_action,
    load_action_script,
)
from .conditions import Condition, condition_to_xml
from .exceptions import (
    ActionConfigurationError,
    ConversionError,
    EngineProcessError,
    EngineUnavailableError,
    KMError,
    StyledTextError,
    UnknownTokenError,
    UnsupportedKeyError,
)
from .macro import ExportTarget, generate_macro

__version__ = "0.1.0"
