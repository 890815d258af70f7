"""Decoding of ACPI structures: the RSDP, AML package lengths, AML values and resource descriptors."""

__version__ = "0.1.0"