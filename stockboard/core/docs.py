"""FastAPI documentation configuration and metadata.

Provides OpenAPI documentation with custom descriptions, examples, and API
organization for Stockboard.
"""
from typing import Any

from fastapi.openapi.utils import get_openapi

# API Metadata
API_TITLE = "Stockboard API"
API_DESCRIPTION = """
## Stockboard API

Backend for the Stockboard dashboard: symbol search, company profiles, quotes,
six months of daily candles, logo proxying, a headline index summary, and a
per-user wishlist.

### Data Sources

- **Finnhub**: symbol search, company profile, latest quote
- **Yahoo Finance**: daily chart history and index levels

### Authentication

Market data routes are public. Wishlist routes require
`Authorization: Bearer <access token>` issued by the identity provider.

### Error Handling

Errors are returned as `{"error": "<message>"}`:
- **400**: missing or invalid parameter
- **401**: missing, invalid or expired token
- **404**: no candle data for the symbol
- **409**: ticker already in wishlist
- **500**: upstream or store failure
"""

API_VERSION = "1.0.0"
API_CONTACT = {
    "name": "Stockboard",
}
API_LICENSE = {
    "name": "MIT",
    "url": "https://opensource.org/licenses/MIT",
}

# OpenAPI Tags
OPENAPI_TAGS: list[dict[str, Any]] = [
    {
        "name": "health",
        "description": "**System Health & Monitoring**\n\n"
        "Endpoints for monitoring application health, readiness, and liveness.",
    },
    {
        "name": "market",
        "description": "**Market Data**\n\n"
        "Symbol search, company profiles, quotes, daily candles, logo proxying "
        "and the headline index summary. No authentication required.",
    },
    {
        "name": "wishlist",
        "description": "**Wishlist**\n\n"
        "Per-user list of tracked tickers. Requires a bearer token.",
    },
]

# Response Examples
COMMON_RESPONSES = {
    400: {
        "description": "Bad Request - Missing or invalid input",
        "content": {
            "application/json": {
                "examples": {
                    "missing_symbol": {
                        "summary": "Missing Symbol",
                        "value": {"error": "Missing symbol"},
                    },
                    "missing_ticker": {
                        "summary": "Missing Ticker",
                        "value": {"error": "Ticker symbol is required."},
                    },
                }
            }
        },
    },
    401: {
        "description": "Unauthorized - Missing or invalid bearer token",
        "content": {
            "application/json": {
                "examples": {
                    "no_token": {
                        "summary": "No Token",
                        "value": {"error": "No token provided. You must be logged in."},
                    },
                    "invalid_token": {
                        "summary": "Invalid Token",
                        "value": {"error": "Invalid or expired token."},
                    },
                }
            }
        },
    },
    404: {
        "description": "Not Found - No candle data",
        "content": {"application/json": {"example": {"error": "No candle data"}}},
    },
    409: {
        "description": "Conflict - Ticker already in wishlist",
        "content": {"application/json": {"example": {"error": "Ticker already in wishlist."}}},
    },
    500: {
        "description": "Internal Server Error - Upstream or store failure",
        "content": {"application/json": {"example": {"error": "Server error"}}},
    },
}


def custom_openapi_schema(app) -> dict[str, Any]:
    """Generate custom OpenAPI schema with bearer security and common responses.

    Args:
        app: FastAPI application instance

    Returns:
        Dict[str, Any]: Custom OpenAPI schema
    """
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=API_TITLE,
        version=API_VERSION,
        description=API_DESCRIPTION,
        routes=app.routes,
        tags=OPENAPI_TAGS,
        contact=API_CONTACT,
        license_info=API_LICENSE,
    )

    openapi_schema["servers"] = [
        {"url": "http://localhost:8000", "description": "Local Development Server"},
    ]

    openapi_schema["components"] = openapi_schema.get("components", {})
    openapi_schema["components"].setdefault("securitySchemes", {})["HTTPBearer"] = {
        "type": "http",
        "scheme": "bearer",
        "description": "Access token issued by the identity provider",
    }
    openapi_schema["components"]["responses"] = COMMON_RESPONSES

    app.openapi_schema = openapi_schema
    return app.openapi_schema


def get_swagger_ui_html_config() -> dict[str, Any]:
    """Get Swagger UI HTML configuration.

    Returns:
        Dict[str, Any]: Swagger UI configuration
    """
    return {
        "swagger_ui_parameters": {
            "deepLinking": True,
            "displayRequestDuration": True,
            "defaultModelsExpandDepth": 2,
            "docExpansion": "list",
            "filter": True,
            "tryItOutEnabled": True,
        },
    }
