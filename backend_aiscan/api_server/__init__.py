"""
API server package — HTTP interface.

Exposes page analysis and detector settings to the extension/popup clients.
Delegates scoring to the detection session and settings to the JSON store.
"""
