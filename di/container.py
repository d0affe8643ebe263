from __future__ import annotations

import structlog
from dependency_injector import containers, providers

from core.settings import SETTINGS
from infra.resources import DatabaseResource


logger = structlog.get_logger("marketplace")


class InfrastructureContainer(containers.DeclarativeContainer):
    settings = providers.Object(SETTINGS)
    logger = providers.Object(logger)

    # Database
    database = providers.Resource(
        DatabaseResource,
        database_url=str(SETTINGS.DATABASE.DATABASE_URL),
        echo=SETTINGS.DATABASE.DB_ECHO,
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Application services - depends on infrastructure."""

    infrastructure = providers.DependenciesContainer()

    # Services
    user_service = providers.Factory(
        "api.features.users.service.UserService",
    )

    message_service = providers.Factory(
        "api.features.messages.service.MessageService",
        contact_failure_policy=(
            infrastructure.settings.provided.MESSAGING.MESSAGING_CONTACT_FAILURE_POLICY
        ),
    )


class ControllerContainer(containers.DeclarativeContainer):
    """Controller-specific dependencies."""

    services = providers.DependenciesContainer()

    # Controllers
    user_controller = providers.Factory(
        "api.features.users.controller.UserController",
        user_service=services.user_service,
    )

    message_controller = providers.Factory(
        "api.features.messages.controller.MessageController",
        message_service=services.message_service,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Main application container composing all sub-containers."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "api.main",
            "api.shared.db",
            "api.features.users.router",
            "api.features.messages.router",
        ]
    )

    infrastructure = providers.Container(InfrastructureContainer)
    services = providers.Container(ServiceContainer, infrastructure=infrastructure)
    controllers = providers.Container(ControllerContainer, services=services)
