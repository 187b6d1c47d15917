"""Secret Lister - lists the Secret names visible to a workload's credential."""

__version__ = "0.1.0"
