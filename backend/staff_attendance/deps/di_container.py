"""
Dependency injection container using dependency-injector.
Holds the stateless services; database-backed services are built per request.
"""

from dependency_injector import containers, providers

from staff_attendance.controllers.health_controller import HealthController
from staff_attendance.services.excel_export_service import ExcelExportService
from staff_attendance.services.health_service import HealthService
from staff_attendance.services.pdf_export_service import PdfExportService


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    config = providers.Configuration()

    # Services
    health_service = providers.Singleton(HealthService)
    excel_export_service = providers.Singleton(ExcelExportService)
    pdf_export_service = providers.Singleton(PdfExportService)

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


# Global container instance
_container: Container = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        from staff_attendance.core.config import settings

        _container = Container()
        _container.config.from_dict({
            "database_url": settings.DATABASE_URL,
            "version": settings.VERSION,
        })
    return _container
