"""Shared engine settings read from environment variables."""

import os

LOG_LEVEL: str = os.environ.get('HIVE_LOG_LEVEL', 'WARNING').upper()
TRACE_SEARCH: bool = os.environ.get('HIVE_TRACE_SEARCH', '') not in ('', '0', 'false')
