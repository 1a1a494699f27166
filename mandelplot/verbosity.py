"""Verbose output switch, applied before TensorFlow is imported."""

import os
import sys
import warnings

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
SUPPRESS_MESSAGES = (not _cli_verbose) and _env_log_level != "0"

if SUPPRESS_MESSAGES and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if SUPPRESS_MESSAGES:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def set_verbose(enabled):
    global VERBOSE
    VERBOSE = bool(enabled)


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)
