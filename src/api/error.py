from fastapi import status
from libs.result import Error


class ClientError(Exception):
    """Business error caused by the request; rendered as {"error": {code, message}}"""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    """Infrastructure or unexpected failure; message is hidden from the client"""

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)
