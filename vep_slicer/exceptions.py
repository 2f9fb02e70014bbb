"""
Custom exceptions for VCF slicing.
Kept minimal - only what's needed for clear error handling.
"""


class VcfSliceError(Exception):
    """Base exception for VCF slicing related errors."""
    pass


class StructuralHeaderError(VcfSliceError):
    """Raised when a stream reaches data before any header line."""
    pass


class SourceUnavailableError(VcfSliceError):
    """Raised when the retrieval, decompression or filter process fails."""
    pass


class ConfigurationError(VcfSliceError):
    """Raised when slice options are invalid or contradictory."""
    pass
