"""A small threaded web server, load-generating client, thread pool and queued logger."""

__version__ = "1.0.0"