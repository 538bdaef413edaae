from datetime import timedelta

VERSION = "1.0.0"
SERVICE_NAME = "cluster-dns"

# well-known namespace of the cluster's system components
NAMESPACE_SYSTEM = "kube-system"

# defaults
DEFAULT_CLUSTER_DOMAIN = "cluster.local."
DEFAULT_HEALTHZ_PORT = 8081
DEFAULT_DNS_BIND_ADDRESS = "0.0.0.0"
DEFAULT_DNS_PORT = 53
DEFAULT_INITIAL_SYNC_TIMEOUT = timedelta(seconds=60)
DEFAULT_CONFIG_PERIOD = timedelta(seconds=10)
