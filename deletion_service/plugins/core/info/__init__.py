PLUGIN_METADATA = {
    "version": "1.0.0",
    "prefix": "",
    "tags": ["Service Info"],
}
