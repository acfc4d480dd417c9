import logging

from django.conf import settings
from django.core.management.commands.runserver import Command as RunserverCommand

from tasks.store import get_task_store

logger = logging.getLogger('tasks')


class Command(RunserverCommand):
    """`runserver` listening on TASKS_PORT (3000) unless told otherwise."""

    default_port = str(settings.TASKS_PORT)

    def inner_run(self, *args, **options):
        store = get_task_store()
        if not store.path.exists():
            logger.warning(
                "Tasks file %s does not exist; run `manage.py init_tasks` to create it",
                store.path,
            )
        logger.info("Serving tasks from %s", store.path)
        return super().inner_run(*args, **options)
