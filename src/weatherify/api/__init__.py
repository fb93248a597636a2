"""Weather proxy API.

Serves current conditions to clients so the weather provider's API key
never leaves the server.

## API Structure

- /api/v1/weather - Current conditions by coordinates
- /health - Health check
"""

from weatherify.api.app import create_app

__all__ = ["create_app"]
