"""Domain errors raised by the service layer.

Each error is an ``HTTPException`` so the status code travels with it and the
exception handlers in ``intern_admin.main`` can render the response envelope
without a translation table.
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    def __init__(self, message: str = "Data not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=message)


class InvalidInputError(HTTPException):
    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


class CapacityBelowEnrollmentError(HTTPException):
    """Capacity change rejected because it would drop below the enrolled count."""

    def __init__(self, current_participants: int, requested_capacity: int):
        self.current_participants = current_participants
        self.requested_capacity = requested_capacity
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Capacity cannot be reduced to {requested_capacity} because "
                f"{current_participants} participants are already enrolled"
            ),
        )


class HasEnrolledParticipantsError(HTTPException):
    def __init__(self, current_participants: int):
        self.current_participants = current_participants
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Program cannot be deleted because {current_participants} "
                "participants are still enrolled"
            ),
        )


class StorageError(HTTPException):
    def __init__(self, message: str = "Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


class UpstreamError(HTTPException):
    def __init__(self, message: str = "Upstream service unavailable"):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=message)
