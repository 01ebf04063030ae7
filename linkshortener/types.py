from typing import Any

from botocore.client import BaseClient


# Type aliases for Python dictionaries
type AppConfig = dict[str, Any]
type SettingsOverrides = dict[str, Any]

# Type aliases for boto3 clients
type AppConfigDataClient = BaseClient
