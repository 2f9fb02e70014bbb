"""
VEP-annotated VCF slicing and format conversion.

Streams a line- or location-scoped slice of a CSQ-annotated VCF and
re-encodes it as raw VCF, parsed rows, flat text, or a VEP-style
annotation table.
"""

__version__ = "1.0.0"
__author__ = "Data Tecnica International"
