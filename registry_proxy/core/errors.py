"""
Purpose:
- Error taxonomy shared by the scraper and the API layer.
- Each error carries the message shown to the browser and the HTTP status it maps to.
"""

class ProxyError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class InvalidInputError(ProxyError):
    """Caller mistake (missing keyword/url, malformed body)."""
    status_code = 400

class UpstreamError(ProxyError):
    """Talking to the registry (or the download target) failed."""
    status_code = 500
