"""libc_support  -- getconf and getent front ends over the C library"""

__version__ = "0.3.0"
