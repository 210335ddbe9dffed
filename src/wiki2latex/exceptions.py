#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the wiki2latex library.

This module defines specialized exception classes for the error conditions
that can occur while unpacking a bundle, translating HTML to LaTeX and
compiling the result.

Exception Hierarchy
-------------------
- Wiki2LatexError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a component)

  - FileError (file access and I/O)
    - BundleError (missing or corrupt bundle contents)

  - ParsingError (input document parsing failures)

  - RenderingError (LaTeX generation failures)
    - DecorationBalanceError (unbalanced inline decorations)
    - FormatterClosedError (write after flush)

  - CompilationError (xelatex failures)

  - DependencyError (missing packages or external tools)

Content-level anomalies in a single article (missing images, broken math,
unknown tags) are logged and skipped; they never raise.

"""

from typing import Any


class Wiki2LatexError(Exception):
    """Base exception class for all wiki2latex-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Wiki2LatexError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when a component receives the wrong options class.

    Parameters
    ----------
    component_name : str
        Name of the component that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error with type information."""
        if message is None:
            message = (
                f"'{component_name}' expects options of type {expected_type.__name__}, "
                f"but received {received_type.__name__}."
            )
        super().__init__(
            message,
            parameter_name="options",
            parameter_value=received_type,
            original_error=original_error,
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class FileError(Wiki2LatexError):
    """Exception raised for file access and I/O failures.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path of the file involved
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with the offending path."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class BundleError(FileError):
    """Exception raised when a bundle is missing required contents."""


class ParsingError(Wiki2LatexError):
    """Exception raised when input HTML or JSON cannot be parsed."""


class RenderingError(Wiki2LatexError):
    """Exception raised when LaTeX output cannot be generated."""


class DecorationBalanceError(RenderingError):
    """Raised when inline decorations are closed out of order or left open.

    This always indicates a bug in the traversal logic, never a problem
    with the input document.
    """


class FormatterClosedError(RenderingError):
    """Raised when a formatter is used after it has been flushed."""


class CompilationError(Wiki2LatexError):
    """Exception raised when xelatex fails to produce a PDF.

    Parameters
    ----------
    message : str
        Description of the failure
    log_excerpt : str, optional
        Tail of the xelatex log, for diagnostics

    """

    def __init__(self, message: str, log_excerpt: str = "", original_error: Exception | None = None):
        """Initialize the compilation error with a log excerpt."""
        super().__init__(message, original_error=original_error)
        self.log_excerpt = log_excerpt


class DependencyError(Wiki2LatexError):
    """Exception raised when a required package or external program is missing.

    Parameters
    ----------
    component_name : str
        Name of the component that needs the dependency
    missing_packages : list of str
        Python packages or executables that were not found
    message : str, optional
        Custom error message

    """

    def __init__(
        self,
        component_name: str,
        missing_packages: list[str],
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with the missing names."""
        if message is None:
            message = f"'{component_name}' requires: {', '.join(missing_packages)}"
        super().__init__(message, original_error=original_error)
        self.component_name = component_name
        self.missing_packages = missing_packages
