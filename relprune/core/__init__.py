"""Core types: inputs, config, context, results."""

from .config import ConfigError, load_config
from .context import RepoRef, resolve_repo
from .errors import ContextError, ErrorCode, InvalidCutoffError
from .inputs import InputError, PruneInputs, resolve_inputs
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "ConfigError",
    "load_config",
    # context
    "RepoRef",
    "resolve_repo",
    # errors
    "ContextError",
    "ErrorCode",
    "InvalidCutoffError",
    # inputs
    "InputError",
    "PruneInputs",
    "resolve_inputs",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
