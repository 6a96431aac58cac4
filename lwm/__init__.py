"""lwm: Linux memory report from /proc/meminfo."""

__version__ = "0.1.0"
