"""
Core utilities: exceptions, bounded concurrency, and retry policy.

Shared by the explorer client, the fetch/resolve pipeline, and the graph.
"""
