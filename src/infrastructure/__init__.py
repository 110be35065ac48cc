"""Infrastructure: configuration, logging, HTTP and upstream sources."""
