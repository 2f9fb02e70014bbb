"""Output encoders for parsed, flat text and VEP annotation table formats."""

from vep_slicer.exceptions import ConfigurationError
from vep_slicer.models import OutputMode
from vep_slicer.writers.annotation_table import AnnotationTableEncoder
from vep_slicer.writers.base import Encoder, render_value
from vep_slicer.writers.structured import StructuredEncoder
from vep_slicer.writers.text import TextEncoder

# Raw VCF output bypasses the parsers and has no encoder
ENCODERS: dict[OutputMode, type[Encoder]] = {
    OutputMode.STRUCTURED: StructuredEncoder,
    OutputMode.TEXT: TextEncoder,
    OutputMode.ANNOTATION_TABLE: AnnotationTableEncoder,
}

__all__ = [
    "ENCODERS",
    "Encoder",
    "AnnotationTableEncoder",
    "StructuredEncoder",
    "TextEncoder",
    "get_encoder",
    "render_value",
]


def get_encoder(mode: OutputMode) -> Encoder:
    """Get the encoder for an output mode.

    Args:
        mode: Requested output mode (not RAW)

    Returns:
        Encoder instance

    Raises:
        ConfigurationError: If the mode has no encoder
    """
    try:
        return ENCODERS[mode]()
    except KeyError:
        raise ConfigurationError(f"No encoder for output mode: {mode.value}")
