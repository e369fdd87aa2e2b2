"""
Module-level defaults for cryptoutil.

There is no configuration file. These constants are read at call time by the
modules that need them; per-call keyword arguments override them where an
operation exposes one.
"""

# Encoding used whenever text is turned into bytes or back
DEFAULT_TEXT_ENCODING = "utf-8"

# Fixed output lengths for the extendable-output digest modes, in bytes.
# These match the default XOF lengths of the OpenSSL SHAKE routines.
SHAKE128_OUTPUT_BYTES = 16
SHAKE256_OUTPUT_BYTES = 32

# Input is fed to a cipher context in slices of this many bytes
TRANSFORM_CHUNK_SIZE = 4096
