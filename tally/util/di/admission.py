"""Admission guard DI provider."""

from dishka import Scope, provide
import logfire

from tally.config import AdmissionSettings
from tally.domain.service import AdmissionGuard
from tally.util.di.base import ProviderBase


class ProdAdmissionProvider(ProviderBase):
    """Provides the process-wide admission guard.

    APP scope: every request shares one rate limiter and one duplicate
    suppressor for the life of the container.
    """

    @provide(scope=Scope.APP)
    def get_admission_guard(self, admission_settings: AdmissionSettings) -> AdmissionGuard:
        """Provide admission guard."""
        logfire.info(
            "Admission guard created",
            capacity=admission_settings.capacity,
            refill_per_second=admission_settings.refill_per_second,
            dedup_window_ms=admission_settings.dedup_window_ms,
        )
        return AdmissionGuard.from_settings(admission_settings)
