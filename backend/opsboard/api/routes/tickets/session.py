"""Per-request GLPI session teardown"""
from fastapi import BackgroundTasks

from ....config.settings import Settings
from ....glpi.client import GlpiClient


def schedule_session_release(
    background_tasks: BackgroundTasks, glpi: GlpiClient, settings: Settings
) -> None:
    """Release the GLPI session after the response has been sent"""
    if settings.glpi_release_session_per_request:
        background_tasks.add_task(glpi.release_session)
