from django.core.management.base import BaseCommand, CommandError

from tasks.exceptions import TaskStoreError
from tasks.store import get_task_store


class Command(BaseCommand):
    help = 'Creates the tasks file with an empty collection.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--path',
            help='Tasks file to create (defaults to the TASKS_FILE setting)',
        )
        parser.add_argument(
            '--force',
            action='store_true',
            help='Overwrite an existing tasks file',
        )

    def handle(self, *args, **options):
        store = get_task_store(options['path'])
        try:
            written = store.initialize(force=options['force'])
        except TaskStoreError as exc:
            raise CommandError(str(exc)) from exc

        if written:
            self.stdout.write(self.style.SUCCESS(f'Created {store.path}'))
        else:
            self.stdout.write(f'{store.path} already exists, use --force to overwrite')
