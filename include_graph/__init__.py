"""include-graph: per-directory #include dependency graphs of a remote C/C++ tree."""

__version__ = "0.1.0"
