# backend/app/services/application_service.py
"""
Application Service for the TuitionHub Platform

Tutor applications: creation, listing, the Pending-only edit and the
status transitions driven by students and administrators.
"""

from decimal import Decimal
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.enums import ApplicationStatus
from ..core.exceptions import ForbiddenException, NotFoundException, ValidationException
from ..models.application import TutorApplication
from ..repositories.application_repository import ApplicationRepository
from ..repositories.factory import RepositoryFactory
from .base import BaseService

logger = logging.getLogger(__name__)


class ApplicationService(BaseService):
    """Service for tutor applications."""

    def __init__(
        self, db: Session, application_repository: Optional[ApplicationRepository] = None
    ):
        super().__init__(db)
        self.application_repository = (
            application_repository or RepositoryFactory.create_application_repository(db)
        )

    @BaseService.measure_operation("create_application")
    def create_application(
        self,
        *,
        tutor_email: str,
        tutor_name: Optional[str],
        tuition_id: Optional[str],
        qualifications: Optional[str],
        experience: Optional[str],
        expected_salary: Decimal,
    ) -> str:
        """Create a Pending application stamped with the current time; returns its id."""
        with self.transaction():
            application = self.application_repository.create(
                tutor_email=tutor_email,
                tutor_name=tutor_name,
                tuition_id=tuition_id,
                qualifications=qualifications,
                experience=experience,
                expected_salary=expected_salary,
                status=ApplicationStatus.PENDING.value,
            )
        self.log_operation("create_application", application_id=application.id, tutor=tutor_email)
        return application.id

    @BaseService.measure_operation("list_applications")
    def list_all(self) -> List[TutorApplication]:
        return self.application_repository.list_all()

    @BaseService.measure_operation("list_applications_by_tutor")
    def list_by_tutor_email(self, tutor_email: str) -> List[TutorApplication]:
        return self.application_repository.list_by_tutor_email(tutor_email)

    @BaseService.measure_operation("update_pending_application")
    def update_if_pending(
        self,
        application_id: str,
        *,
        qualifications: Optional[str],
        experience: Optional[str],
        expected_salary: Optional[Decimal],
        caller_email: str,
        caller_is_admin: bool,
    ) -> int:
        """
        Edit an application while it is still Pending.

        Returns:
            1 when applied, 0 when the application exists but is no longer Pending

        Raises:
            NotFoundException: If the application does not exist
            ForbiddenException: If the caller is neither its tutor nor an admin
        """
        self._require_tutor_or_admin(application_id, caller_email, caller_is_admin)
        with self.transaction():
            matched = self.application_repository.update_if_pending(
                application_id,
                qualifications=qualifications,
                experience=experience,
                expected_salary=expected_salary,
            )
        if matched == 0:
            self.logger.info(f"Application {application_id} is not Pending; edit ignored")
        return matched

    @BaseService.measure_operation("update_application_status")
    def update_status(self, application_id: str, status: str) -> int:
        if status not in {s.value for s in ApplicationStatus}:
            raise ValidationException(
                f"Unknown application status: {status}", code="INVALID_STATUS"
            )
        with self.transaction():
            matched = self.application_repository.update_status(application_id, status)
        if matched == 0:
            raise NotFoundException(
                f"Application {application_id} not found", code="APPLICATION_NOT_FOUND"
            )
        self.log_operation("update_application_status", application_id=application_id, status=status)
        return matched

    @BaseService.measure_operation("delete_application")
    def delete_application(
        self, application_id: str, *, caller_email: str, caller_is_admin: bool
    ) -> int:
        """Delete an application. Any order recorded for it is kept."""
        self._require_tutor_or_admin(application_id, caller_email, caller_is_admin)
        with self.transaction():
            return self.application_repository.delete_by_id(application_id)

    def _require_tutor_or_admin(
        self, application_id: str, caller_email: str, caller_is_admin: bool
    ) -> TutorApplication:
        application = self.application_repository.get_by_id(application_id)
        if application is None:
            raise NotFoundException(
                f"Application {application_id} not found", code="APPLICATION_NOT_FOUND"
            )
        if not caller_is_admin and application.tutor_email != caller_email:
            raise ForbiddenException("Only the applying tutor or an admin may change this application")
        return application
