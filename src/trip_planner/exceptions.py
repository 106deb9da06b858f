class TripPlannerError(Exception):
    """Base exception for trip planning errors."""


class InvalidInputError(TripPlannerError):
    """Raised when a cost input (mileage, price, distance) is out of range."""


class ExternalServiceError(TripPlannerError):
    """Raised when an upstream API call fails."""


class NoRouteFoundError(TripPlannerError):
    """Raised when a drivable route cannot be generated."""
