from datetime import datetime
from typing import Any
from collections.abc import Callable

from botocore.client import BaseClient


# Type aliases for Python dictionaries
type RegistryConfig = dict[str, Any]

# Source of "now" for expiration checks (timezone-aware UTC)
type Clock = Callable[[], datetime]

# Type aliases for boto3 clients
type AppConfigDataClient = BaseClient
