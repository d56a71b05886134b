"""Execution layer for mediaproc.

This module provides:
- command: immutable ffmpeg Invocation builder
- result: Success/Failure result values and ErrorCode
- inputs: shared input validation and source resolution
- step: TranscodeStep (validate, run, verify, publish)
- operations: parameterized single-step operations
"""

from mediaproc.executor import operations
from mediaproc.executor.command import Invocation, is_url
from mediaproc.executor.result import ErrorCode, Failure, OperationResult, Success
from mediaproc.executor.step import TranscodeStep, thread_args

__all__ = [
    "ErrorCode",
    "Failure",
    "Invocation",
    "OperationResult",
    "Success",
    "TranscodeStep",
    "is_url",
    "operations",
    "thread_args",
]
