#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the md2dita library.

This module defines specialized exception classes for the error conditions
that can occur while acquiring Markdown input, building the document tree
and serializing it into DITA events.

Exception Hierarchy
-------------------
- Md2DitaError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser or renderer)

  - AcquisitionError (unreadable source, unsupported encoding)

  - ParsingError (Markdown tokenization failures)

  - RenderingError (event stream generation failures)
    - UnmappedNodeError (node kind without a rendering rule)

  - MalformedMetadataError (front-matter value of the wrong shape)

  - DependencyError (missing optional packages)

"""

from __future__ import annotations

from typing import Any


class Md2DitaError(Exception):
    """Base exception class for all md2dita-specific errors.

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


class ValidationError(Md2DitaError):
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
    """Exception raised when an incorrect options class is provided.

    Parameters
    ----------
    converter_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class AcquisitionError(Md2DitaError):
    """Exception raised when document text cannot be acquired.

    Covers unreadable streams, missing files, failed downloads, unknown
    encodings and byte sequences that do not decode. Acquisition errors are
    fatal: no document tree exists yet when they are raised.

    Parameters
    ----------
    message : str
        Description of the failure
    source_name : str, optional
        Display name of the source (path, URL or stream name)
    original_error : Exception, optional
        The underlying I/O or codec error

    Attributes
    ----------
    source_name : str or None
        The source that could not be read

    """

    def __init__(self, message: str, source_name: str | None = None, original_error: Exception | None = None):
        """Initialize the acquisition error."""
        super().__init__(message, original_error=original_error)
        self.source_name = source_name


class ParsingError(Md2DitaError):
    """Exception raised when Markdown tokenization fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(Md2DitaError):
    """Exception raised when event stream generation fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        Stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class UnmappedNodeError(RenderingError):
    """Exception raised when a node kind has no rendering rule.

    Unmapped nodes are never skipped, since dropping them would silently
    remove author content from the topic. Any events already pushed to the
    sink must be discarded by the caller.

    Parameters
    ----------
    node_type : str
        Class name of the offending node
    node_path : list of str
        Node kinds from the document root down to the offending node
    document : str, optional
        Name of the document being serialized
    line : int, optional
        Source line of the node, when known

    """

    def __init__(
        self,
        node_type: str,
        node_path: list[str],
        document: str | None = None,
        line: int | None = None,
    ):
        """Initialize the unmapped node error."""
        location = " > ".join(node_path) if node_path else node_type
        message = f"No DITA rendering rule for node kind '{node_type}' at {location}"
        if line is not None:
            message += f" (line {line})"
        if document:
            message += f" in {document}"
        super().__init__(message, rendering_stage="dispatch")
        self.node_type = node_type
        self.node_path = list(node_path)
        self.document = document
        self.line = line


class MalformedMetadataError(Md2DitaError):
    """Exception raised for a front-matter value with an unexpected shape.

    The metadata serializer handles this error itself by falling back to a
    generic ``data`` element, so it never aborts a document.

    Parameters
    ----------
    key : str
        Front-matter key holding the value
    value : any
        The offending value

    """

    def __init__(self, key: str, value: Any):
        """Initialize the malformed metadata error."""
        super().__init__(f"Front-matter key '{key}' expects scalar values, got {type(value).__name__}")
        self.key = key
        self.value = value


class DependencyError(Md2DitaError):
    """Exception raised when an optional dependency is not available.

    Parameters
    ----------
    feature_name : str
        Name of the feature requiring the dependency
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    install_command : str, optional
        Suggested pip install command to resolve the issue
    original_import_error : ImportError, optional
        The ImportError raised by the failed import

    """

    def __init__(
        self,
        feature_name: str,
        missing_packages: list[tuple[str, str]],
        install_command: str = "",
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
        message = f"{feature_name} requires the following packages: {pkg_list}"
        if install_command:
            message += f"\nInstall with: {install_command}"
        else:
            packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in missing_packages)
            message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message, original_error=original_import_error)
        self.feature_name = feature_name
        self.missing_packages = missing_packages
        self.install_command = install_command
        self.original_import_error = original_import_error
