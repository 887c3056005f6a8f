class BackendError(Exception):
    """The property-management REST backend answered with an error."""

    def __init__(self, status_code: int, detail: str = "Backend request failed"):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class BackendUnavailable(BackendError):
    def __init__(self, detail: str = "Backend is unavailable. Please try again later."):
        super().__init__(503, detail)


class NotFound(BackendError):
    def __init__(self, detail: str = "Not Found"):
        super().__init__(404, detail)
