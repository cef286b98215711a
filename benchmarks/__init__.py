"""Performance benchmarks for moltransport.

This package contains microbenchmarks for hot paths in the library,
the upwind operator evaluation and full adaptive integration runs.
"""
