PLUGIN_METADATA = {
    "version": "1.0.0",
    "prefix": "",
    "tags": ["Legal"],
    "endpoints": {"GET /privacy-policy": "Privacy policy page"},
}
