"""
Configuration-related constants and resource limits.
"""

# Maximum config file size (1MB)
MAX_CONFIG_SIZE_BYTES = 1024 * 1024

DEFAULT_ENV_PREFIX = "PROCMANAGE_"

# Exit status used by a child whose program image could not be replaced
DEFAULT_EXEC_FAILURE_STATUS = 127
