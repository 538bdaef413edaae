class BaseClusterDnsError(Exception):
    """Base class for all custom errors used in cluster-dns."""
