"""Job intake app, pending-job store, worker pool, persistence, config and backoff for an HTTP job relay."""

__version__ = "0.1.0"