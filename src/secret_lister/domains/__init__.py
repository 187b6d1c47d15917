"""Domain modules for the Secret Lister service."""
