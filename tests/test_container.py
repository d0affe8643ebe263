"""
Dependency container tests
"""

from api.main import app
from core.settings import SETTINGS, MessagingSettings


def test_message_service_policy_follows_settings():
    isolating = SETTINGS.model_copy(
        update={"MESSAGING": MessagingSettings(MESSAGING_CONTACT_FAILURE_POLICY="isolate")}
    )

    with app.container.infrastructure.settings.override(isolating):
        service = app.container.services.message_service()
        controller = app.container.controllers.message_controller()

    assert service.contact_failure_policy == "isolate"
    assert controller.message_service.contact_failure_policy == "isolate"


def test_message_service_policy_defaults_to_loaded_settings():
    service = app.container.services.message_service()

    assert service.contact_failure_policy == SETTINGS.MESSAGING.MESSAGING_CONTACT_FAILURE_POLICY
