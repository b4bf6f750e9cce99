"""ValueFlow: value and type flow analysis over a parsed program

Walks the top-level statements of a program and infers, for each variable
and function parameter, the most specific value and type it can.
"""

__version__ = "0.1.0"
