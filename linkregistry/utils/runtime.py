import os

from linkregistry.constants import ENV


def running_locally() -> bool:
    """Return True if running locally (APP_ENV=local or under SAM), False otherwise."""
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'
