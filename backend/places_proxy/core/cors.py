CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Content-Type": "application/json"
}

def cors_headers() -> dict:
    """Fresh copy of the header set attached to every proxy response."""
    return dict(CORS_HEADERS)
