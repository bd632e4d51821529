"""Service layer package."""

from intern_admin.services import (
    participant_service,
    program_service,
    selection_service,
    registration_service,
    upload_service,
    wilayah_service,
)
