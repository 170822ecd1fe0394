"""NFS prober: mounts remote NFS exports on an interval and reports availability and latency."""

__version__ = "0.1.0"
