"""JVM monitoring building blocks: JDK tool discovery and parsers, metric history, exports and screen state."""

__version__ = "0.1.0"