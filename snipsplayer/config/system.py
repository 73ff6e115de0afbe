"""
System-Wide Configuration
"""

# =============================================================================
# Logging
# =============================================================================
LOG_LEVEL = 'INFO'  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# =============================================================================
# Threading
# =============================================================================
CONNECT_JOIN_TIMEOUT = 5.0  # seconds - how long hosts wait for the connection thread
