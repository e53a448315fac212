"""Performance benchmarks for boxjenkins.

This package contains microbenchmarks for hot paths in the library,
chiefly the recursive least-squares fit and the forecast recursion.
"""
