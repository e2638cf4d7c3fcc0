"""Sort execution (sequential and parallel).

This layer only knows about integer batches and timings. It should remain
independent from the HTTP layer (`sortbench.api`), so both the CLI and the API
can reuse the same execution logic.
"""
