"""
Error taxonomy shared by the integral image and batch processing modules.

File-local failures (decoding, per-channel output, filesystem I/O) all end
up wrapped in a single ComputeError per input file. Orchestration failures
in the batch scheduler surface as one BatchRunError.
"""


class IntegralBatchError(Exception):
    """Base class for every error raised by this package."""


class DecodeError(IntegralBatchError):
    def __init__(self, path: str, reason: str = "Couldn't open file"):
        self.path = path
        super().__init__(f"{reason}: {path}")


class MalformedImage(IntegralBatchError):
    def __init__(self, path: str, shape: tuple):
        self.path = path
        self.shape = tuple(shape)
        super().__init__(f"Row/col/channel count is wrong for {path}: shape {self.shape}")


class UnsupportedEncoding(IntegralBatchError):
    def __init__(self, type_code):
        self.type_code = type_code
        super().__init__(f"Can't work with pixel data of type {type_code}")


class MalformedPlane(IntegralBatchError):
    def __init__(self, shape: tuple):
        self.shape = tuple(shape)
        super().__init__(f"Channel plane must be a non-empty 2D grid, got shape {self.shape}")


class OutputOpenError(IntegralBatchError):
    def __init__(self, path: str, reason: str = ''):
        self.path = path
        message = f"Couldn't open output file {path}"
        super().__init__(f"{message}: {reason}" if reason else message)


class WriteError(IntegralBatchError):
    def __init__(self, path: str, reason: str = ''):
        self.path = path
        message = f"An error occurred while writing integral image {path}"
        super().__init__(f"{message}: {reason}" if reason else message)


class ChannelPrintError(IntegralBatchError):
    def __init__(self, channel_index: int, cause: BaseException):
        self.channel_index = channel_index
        self.cause = cause
        super().__init__(f"Channel printing error occurred. Channel N{channel_index}, message: {cause}")


class ComputeError(IntegralBatchError):
    def __init__(self, input_path: str, cause: BaseException):
        self.input_path = input_path
        self.cause = cause
        super().__init__(f"Exception occurred with input file {input_path} with message {cause}")


class BatchRunError(IntegralBatchError):
    """
    Raised once, after every worker has been joined, when launching, running
    or joining at least one partition failed.

    `status` holds whatever per-file results were collected before the
    failures, so callers can still report them.
    """

    def __init__(self, failure_count: int, status=None):
        self.failure_count = failure_count
        self.status = status
        super().__init__(f"An error occurred during working ({failure_count} partition failure(s))")


class ParseError(ValueError):
    """Invalid command-line arguments; raised before any work starts."""
