"""
CLI command handlers. Each cmd_* takes the parsed argparse namespace and returns an exit code.
"""

from arango.exceptions import ArangoError

from bxgraph.helpers.exceptions import ConfigError, PayloadError

# Errors a command reports to the user (exit code 1) instead of a traceback
CLI_ERRORS = (ArangoError, PayloadError, ConfigError, OSError)
