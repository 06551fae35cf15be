"""Operating-systems simulators: a train crossing scheduler and a virtual memory paging simulator."""

__version__ = "0.1.0"
__all__ = ["trains", "virtmem"]