class ProximityError(Exception):
    """Base class for errors surfaced by the proximity core."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InputError(ProximityError):
    """Missing or invalid coordinates, or no base location to query from."""

    status_code = 400


class NotFoundError(ProximityError):
    """A user profile could not be resolved."""

    status_code = 404
