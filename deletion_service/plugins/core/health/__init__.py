PLUGIN_METADATA = {
    "version": "1.0.0",
    "prefix": "",
    "tags": ["Health Check"],
    "endpoints": {"GET /health": "Health check endpoint"},
}
