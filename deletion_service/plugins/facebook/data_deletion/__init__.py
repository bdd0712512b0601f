PLUGIN_METADATA = {
    "version": "1.0.0",
    "prefix": "",
    "tags": ["Data Deletion"],
    "endpoints": {"POST /fb-data-deletion": "Facebook data deletion callback"},
}
